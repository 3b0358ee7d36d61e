"""
myshell Exception Hierarchy

All errors raised while executing a command line inherit from ShellError.
The execution engine recovers every ShellError into the failing segment's
stderr, so none of them stop the shell.

Architecture:
    ShellError (Base)
    ├── ConfigError
    ├── CommandException
    │   ├── ArgumentError
    │   └── ResolutionError
    ├── FilesystemError
    │   ├── DirectoryNotFoundError
    │   └── RedirectionError
    └── ProcessError
        ├── SpawnError
        └── ProcessTimeoutError
"""

from .shell_exceptions import (
    ShellError,
    ConfigError,
)

from .command_exceptions import (
    CommandException,
    ArgumentError,
    ResolutionError,
)

from .fs_exceptions import (
    FilesystemError,
    DirectoryNotFoundError,
    RedirectionError,
)

from .process_exceptions import (
    ProcessError,
    SpawnError,
    ProcessTimeoutError,
)

__all__ = [
    # Shell exceptions
    "ShellError",
    "ConfigError",
    # Command exceptions
    "CommandException",
    "ArgumentError",
    "ResolutionError",
    # Filesystem exceptions
    "FilesystemError",
    "DirectoryNotFoundError",
    "RedirectionError",
    # Process exceptions
    "ProcessError",
    "SpawnError",
    "ProcessTimeoutError",
]
