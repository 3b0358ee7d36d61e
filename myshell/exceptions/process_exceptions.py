"""
Process Exceptions

Exceptions related to launching external programs and waiting for them.
A non-zero exit status is not an exception: it is an ordinary result
recorded on the execution context.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any

from .shell_exceptions import ShellError


class ProcessError(ShellError):
    """
    Base exception for all process-related errors.

    Attributes:
        message: Human-readable error description
        path: Executable associated with the error (if applicable)
        error_code: Numeric error code for programmatic handling
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(
            message=message,
            error_code=error_code or 2000,
            context=ctx
        )
        self.path = path


class SpawnError(ProcessError):
    """
    The operating system refused to start the program.

    Common causes include:
    - Missing interpreter in a script's shebang line
    - Exec format error
    - Permission revoked between resolution and launch

    Example:
        >>> raise SpawnError("ls", "/bin/ls", reason="Exec format error")
    """

    def __init__(
        self,
        command: str,
        path: str,
        reason: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"{command}: {reason}",
            path=path,
            error_code=2001,
            context=context
        )
        self.command = command
        self.reason = reason


class ProcessTimeoutError(ProcessError):
    """
    The program did not finish within the configured timeout.

    The child has already been killed when this is raised.

    Example:
        >>> raise ProcessTimeoutError("sleep", "/bin/sleep", timeout=5.0)
    """

    def __init__(
        self,
        command: str,
        path: str,
        timeout: float,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["timeout"] = timeout
        super().__init__(
            message=f"{command}: timed out after {timeout:g}s",
            path=path,
            error_code=2002,
            context=ctx
        )
        self.command = command
        self.timeout = timeout
