"""
Shell Environment

The process environment and filesystem as seen by the shell: environment
variables, the working directory, the home directory and the handful of
filesystem questions the resolver and builtins ask.

The working directory is tracked here instead of with os.chdir(), so
several shells (and tests) can coexist in one interpreter. Spawned
programs and redirection targets use the tracked directory.

Author: YSNRFD
Version: 1.0.0
"""

import os
import stat
from pathlib import Path
from typing import Optional, List, Mapping


class Environment:
    """
    Explicit environment state for one shell session.

    Example:
        >>> env = Environment({'PATH': '/bin:/usr/bin', 'HOME': '/root'}, cwd='/tmp')
        >>> env.path_directories()
        ['/bin', '/usr/bin']
        >>> env.resolve_path('..')
        '/'
    """

    def __init__(
        self,
        variables: Optional[Mapping[str, str]] = None,
        cwd: Optional[str] = None,
        home: Optional[str] = None
    ):
        self._variables: dict[str, str] = dict(variables or {})
        self._cwd = os.path.abspath(cwd or os.getcwd())
        self._home = home

    @classmethod
    def from_os(cls) -> 'Environment':
        """Snapshot the real process environment and working directory."""
        return cls(os.environ, cwd=os.getcwd())

    @property
    def variables(self) -> dict[str, str]:
        return self._variables

    @property
    def cwd(self) -> str:
        return self._cwd

    @cwd.setter
    def cwd(self, value: str):
        self._cwd = value
        self._variables['PWD'] = value

    @property
    def home(self) -> str:
        """Home directory: explicit value, then $HOME, then the OS account."""
        if self._home:
            return self._home
        return self._variables.get('HOME') or str(Path.home())

    def set_variable(self, name: str, value: str) -> None:
        """Set an environment variable."""
        self._variables[name] = value

    def path_directories(self) -> List[str]:
        """PATH entries in search order, empty entries dropped."""
        raw = self._variables.get('PATH', '')
        return [d for d in raw.split(':') if d]

    def resolve_path(self, path: str) -> str:
        """Make ``path`` absolute against the working directory and normalize it."""
        if path == '~' or path.startswith('~/'):
            path = self.home + path[1:]
        return os.path.normpath(os.path.join(self._cwd, path))

    def is_executable_file(self, path: str) -> bool:
        """
        True for a regular file with any execute bit set.

        Only the permission bits are consulted, not os.access(), so the
        answer does not depend on who runs the shell.
        """
        try:
            info = os.stat(self.resolve_path(path))
        except OSError:
            return False
        return stat.S_ISREG(info.st_mode) and bool(info.st_mode & 0o111)

    def change_directory(self, path: str) -> str:
        """
        Change the tracked working directory.

        Returns:
            The new absolute working directory

        Raises:
            OSError: If ``path`` is not an existing, searchable directory
        """
        target = self.resolve_path(path)
        if not os.path.isdir(target):
            raise FileNotFoundError(2, 'No such file or directory', target)
        if not os.access(target, os.X_OK):
            raise PermissionError(13, 'Permission denied', target)
        self.cwd = target
        return target
