"""
Command Resolver

Decides what a command name refers to. Checks run in a fixed order,
first match wins:

1. REDIRECT  - the name ends with '>'
2. BUILTIN   - the name is one of the shell's builtins
3. SYSTEM    - an executable regular file of that name exists on PATH
4. NOT_FOUND - none of the above

Nothing is cached: PATH and the filesystem are consulted on every call
because either may change between two command lines.

Author: YSNRFD
Version: 1.0.0
"""

import os
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Callable, Mapping

from myshell.core.environment import Environment
from myshell.logger import get_logger
from .segmenter import is_redirect_marker


class CommandType(Enum):
    """Classification of a command name."""
    BUILTIN = auto()
    REDIRECT = auto()
    SYSTEM = auto()
    NOT_FOUND = auto()


@dataclass
class Resolution:
    """Result of resolving one command name."""
    name: str
    command_type: CommandType
    handler: Optional[Callable] = None
    path: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.command_type is not CommandType.NOT_FOUND


class CommandResolver:
    """
    Resolves command names against redirection markers, builtins and PATH.

    Args:
        environment: Source of PATH and filesystem state
        builtins: Mapping of builtin name to handler
        redirect_handler: Callable that executes redirection segments
    """

    def __init__(
        self,
        environment: Environment,
        builtins: Mapping[str, Callable],
        redirect_handler: Optional[Callable] = None
    ):
        self._environment = environment
        self._builtins = builtins
        self._redirect_handler = redirect_handler
        self._logger = get_logger('resolver')

    def resolve(self, name: str) -> Resolution:
        """Classify ``name``."""
        if is_redirect_marker(name):
            return Resolution(name, CommandType.REDIRECT, handler=self._redirect_handler)

        builtin = self._builtins.get(name)
        if builtin is not None:
            return Resolution(name, CommandType.BUILTIN, handler=builtin)

        path = self.find_executable(name)
        if path is not None:
            return Resolution(name, CommandType.SYSTEM, path=path)

        self._logger.debug("Command not found", context={'command': name})
        return Resolution(name, CommandType.NOT_FOUND)

    def find_executable(self, name: str) -> Optional[str]:
        """
        Search PATH for ``name``.

        Returns:
            Absolute path of the first executable match, or None
        """
        if not name or '/' in name:
            return None

        for directory in self._environment.path_directories():
            candidate = self._environment.resolve_path(os.path.join(directory, name))
            if self._environment.is_executable_file(candidate):
                self._logger.debug(
                    "Resolved on PATH",
                    context={'command': name, 'path': candidate}
                )
                return candidate

        return None
