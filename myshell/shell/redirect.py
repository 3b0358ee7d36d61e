"""
Output Redirection

Writes the previous segment's captured output to a file. A redirection
segment looks like ``[marker, target, *words]``; any extra words are
written after the captured output.

Markers:
    >   1>    stdout, truncate
    >>  1>>   stdout, append
    2>        stderr, truncate
    2>>       stderr, append

A stderr redirection passes the previous stdout through unchanged.

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass

from myshell.core.environment import Environment
from myshell.exceptions import ArgumentError, RedirectionError
from myshell.logger import get_logger
from .context import ExecutionContext
from .segmenter import REDIRECT_MARKER


@dataclass
class RedirectMode:
    """What a marker asks for."""
    stream: str = 'stdout'
    append: bool = False

    @classmethod
    def from_marker(cls, marker: str) -> 'RedirectMode':
        body = marker[:-len(REDIRECT_MARKER)]
        append = body.endswith(REDIRECT_MARKER)
        if append:
            body = body[:-len(REDIRECT_MARKER)]
        stream = 'stderr' if body == '2' else 'stdout'
        return cls(stream=stream, append=append)


class RedirectHandler:
    """
    Executes redirection segments.

    Args:
        environment: Used to resolve relative targets against the
            shell's working directory
    """

    def __init__(self, environment: Environment, encoding: str = 'utf-8'):
        self._environment = environment
        self._encoding = encoding
        self._logger = get_logger('redirect')

    def __call__(
        self,
        context: ExecutionContext,
        previous: ExecutionContext
    ) -> ExecutionContext:
        """
        Write ``previous``'s output to the target named in ``context``.

        Raises:
            ArgumentError: If the marker has no target
            RedirectionError: If the target cannot be opened or written
        """
        marker = context.command_name
        if len(context.args) < 2:
            raise ArgumentError(
                "syntax error near unexpected token `newline'",
                command=marker
            )

        mode = RedirectMode.from_marker(marker)
        target = context.args[1]
        payload = self.build_payload(getattr(previous, mode.stream), context.args[2:])
        path = self._environment.resolve_path(target)

        try:
            data = payload.encode(self._encoding)
        except UnicodeError as e:
            raise RedirectionError(target, reason=f"cannot encode output: {e.reason}")

        try:
            with open(path, 'ab' if mode.append else 'wb') as f:
                f.write(data)
        except OSError as e:
            raise RedirectionError(target, reason=e.strerror or str(e))

        self._logger.info(
            "Redirected output",
            context={'path': path, 'stream': mode.stream, 'append': mode.append, 'bytes': len(data)}
        )
        if mode.stream == 'stderr':
            return context.succeed(previous.stdout)
        return context.succeed()

    @staticmethod
    def build_payload(captured: str, words: list) -> str:
        """Captured output followed by the literal words, newline terminated."""
        parts = [captured.rstrip('\n')] if captured else []
        if words:
            parts.append(' '.join(words))
        payload = ' '.join(p for p in parts if p)
        if payload and not payload.endswith('\n'):
            payload += '\n'
        return payload
