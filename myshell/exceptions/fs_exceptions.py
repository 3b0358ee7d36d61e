"""
Filesystem Exceptions

Exceptions related to working-directory changes and redirection targets.
The messages carry the operating system's own wording so the user sees
the same text a conventional shell prints.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any

from .shell_exceptions import ShellError


class FilesystemError(ShellError):
    """
    Base exception for all filesystem-related errors.

    Attributes:
        message: Human-readable error description
        path: File path associated with the error (if applicable)
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
            error_code=error_code or 4000,
            context=ctx
        )
        self.path = path


class DirectoryNotFoundError(FilesystemError):
    """
    The target of ``cd`` is missing or is not a directory.

    Example:
        >>> raise DirectoryNotFoundError("/no/such/dir")
    """

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"cd: {path}: No such file or directory",
            path=path,
            error_code=4001,
            context=context
        )


class RedirectionError(FilesystemError):
    """
    A redirection target could not be opened or written.

    Example:
        >>> raise RedirectionError("/root/out.txt", reason="Permission denied")
    """

    def __init__(
        self,
        path: str,
        reason: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"{path}: {reason}",
            path=path,
            error_code=4002,
            context=context
        )
        self.reason = reason
