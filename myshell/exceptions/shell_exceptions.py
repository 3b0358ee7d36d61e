"""
Shell Exceptions

Base exception for the shell and errors raised while the shell itself is
being set up (configuration loading and validation).

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any


class ShellError(Exception):
    """
    Base exception for all shell errors.

    Every error raised while executing a command segment derives from
    this class. The execution engine catches it, copies ``message`` into
    the segment's stderr and marks the segment as failed, so ``message``
    must read like something a user expects to see after a failed command.

    Attributes:
        message: Human-readable error description
        error_code: Numeric error code for programmatic handling
        context: Additional context about the error

    Example:
        >>> raise ShellError("something went wrong", error_code=1000)
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or 1000
        self.context = context or {}

    def __str__(self) -> str:
        base = f"[Error {self.error_code}] {self.message}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base = f"{base} ({context_str})"
        return base

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code})"
        )


class ConfigError(ShellError):
    """
    Configuration could not be loaded or updated.

    Raised for a missing or unreadable configuration file, invalid JSON,
    or a dot-notation key that does not name a configuration field.

    Example:
        >>> raise ConfigError("Invalid configuration key: shell.colour")
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(
            message=message,
            error_code=1001,
            context=ctx
        )
        self.path = path
