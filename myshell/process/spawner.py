"""
Process Spawner

Runs an external program to completion and captures what it printed.

Author: YSNRFD
Version: 1.0.0
"""

import subprocess
from dataclasses import dataclass
from typing import Optional, List, Mapping

from myshell.exceptions import SpawnError, ProcessTimeoutError
from myshell.logger import get_logger


@dataclass
class ProcessResult:
    """Outcome of a finished child process."""
    returncode: int
    stdout: str
    stderr: str

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0


class ProcessSpawner:
    """
    Blocking process launcher.

    The child sees ``command`` as its argv[0] while ``path`` is what
    actually gets executed, the same way a conventional shell execs a
    program it found on PATH.

    Example:
        >>> spawner = ProcessSpawner()
        >>> result = spawner.spawn('echo', '/bin/echo', ['hi'], cwd='/tmp')
        >>> result.stdout
        'hi\\n'
    """

    def __init__(self, encoding: str = 'utf-8', timeout: Optional[float] = None):
        self._encoding = encoding
        self._timeout = timeout
        self._logger = get_logger('process')

    def spawn(
        self,
        command: str,
        path: str,
        args: List[str],
        cwd: Optional[str] = None,
        env: Optional[Mapping[str, str]] = None
    ) -> ProcessResult:
        """
        Run ``path`` with ``args`` and wait for it.

        Raises:
            SpawnError: If the program cannot be started
            ProcessTimeoutError: If it outlives the configured timeout
        """
        self._logger.info(
            "Spawning process",
            context={'command': command, 'path': path, 'argc': len(args)}
        )

        try:
            completed = subprocess.run(
                [command, *args],
                executable=path,
                cwd=cwd,
                env=dict(env) if env is not None else None,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                encoding=self._encoding,
                errors='replace',
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired:
            raise ProcessTimeoutError(command, path, timeout=self._timeout)
        except OSError as e:
            raise SpawnError(command, path, reason=e.strerror or str(e))

        self._logger.info(
            "Process exited",
            context={'command': command, 'returncode': completed.returncode}
        )
        return ProcessResult(
            returncode=completed.returncode,
            stdout=completed.stdout or '',
            stderr=completed.stderr or '',
        )
