"""
Command Exceptions

Exceptions related to the shape of a command invocation and to resolving
a command name.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any

from .shell_exceptions import ShellError


class CommandException(ShellError):
    """
    Base exception for command-level errors.

    Attributes:
        command: Name of the command that failed
    """

    def __init__(
        self,
        message: str,
        command: Optional[str] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if command:
            ctx["command"] = command
        super().__init__(
            message=message,
            error_code=error_code or 3000,
            context=ctx
        )
        self.command = command


class ArgumentError(CommandException):
    """
    A command received the wrong number or kind of arguments.

    Example:
        >>> raise ArgumentError("too many arguments", command="exit")
    """

    def __init__(
        self,
        message: str,
        command: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=message,
            command=command,
            error_code=3001,
            context=context
        )


class ResolutionError(CommandException):
    """
    A command name is neither a builtin nor an executable on PATH.

    Example:
        >>> raise ResolutionError("frobnicate")
    """

    def __init__(
        self,
        command: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"{command}: command not found",
            command=command,
            error_code=3002,
            context=context
        )
