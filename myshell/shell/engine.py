"""
Execution Engine

Runs one command line: tokenize, split into segments, execute each
segment in order and report the last segment's result.

Segments are chained in one direction only. A redirection segment takes
the previous segment's captured output and writes it to a file; a builtin
or external command never receives the previous segment's output.

Author: YSNRFD
Version: 1.0.0
"""

import sys
from typing import Optional, TextIO, Tuple

from myshell.core.config_loader import get_config
from myshell.core.environment import Environment
from myshell.exceptions import ShellError, ResolutionError
from myshell.logger import get_logger
from myshell.process.spawner import ProcessSpawner
from .builtins import BuiltinCommands
from .context import ExecutionContext, STATUS_SUCCESS, STATUS_FAILURE
from .redirect import RedirectHandler
from .resolver import CommandResolver, CommandType, Resolution
from .segmenter import segment
from .tokenizer import Tokenizer


class ExecutionEngine:
    """
    Interpreter for single command lines.

    Every collaborator can be injected; anything left out is built from
    the real process environment and the global configuration.

    Example:
        >>> engine = ExecutionEngine()
        >>> engine.run('echo foo bar')
        foo bar
        ('foo bar', 0)
    """

    def __init__(
        self,
        environment: Optional[Environment] = None,
        spawner: Optional[ProcessSpawner] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None
    ):
        config = get_config()

        self._logger = get_logger('engine')
        self._environment = environment or Environment.from_os()
        self._spawner = spawner or ProcessSpawner(
            encoding=config.execution.encoding,
            timeout=config.execution.timeout,
        )
        self._stdout = stdout
        self._stderr = stderr

        self._tokenizer = Tokenizer()
        self._builtins = BuiltinCommands(self)
        self._redirect = RedirectHandler(self._environment, encoding=config.execution.encoding)
        self._resolver = CommandResolver(
            self._environment,
            self._builtins.get_commands(),
            redirect_handler=self._redirect,
        )

    @property
    def environment(self) -> Environment:
        return self._environment

    @property
    def resolver(self) -> CommandResolver:
        return self._resolver

    @property
    def builtins(self) -> BuiltinCommands:
        return self._builtins

    @property
    def out(self) -> TextIO:
        return self._stdout or sys.stdout

    @property
    def err(self) -> TextIO:
        return self._stderr or sys.stderr

    def run(self, line: str) -> Tuple[str, int]:
        """
        Execute a command line and report its result.

        Args:
            line: Raw input line

        Returns:
            The reported text (stdout on success, stderr on failure,
            stripped) and the final status

        Raises:
            SystemExit: When the line runs the ``exit`` builtin
        """
        words = self._tokenizer.tokenize(line)
        segments = segment(words)
        previous = ExecutionContext()

        self._logger.debug(
            "Running line",
            context={'words': len(words), 'segments': len(segments)}
        )

        for words_in_segment in segments:
            if not words_in_segment:
                continue

            ctx = ExecutionContext.for_segment(words_in_segment)
            try:
                ctx = self.execute_segment(ctx, previous)
            except SystemExit:
                self._report_exit(ctx)
                raise

            previous = ctx

        return self._report(previous)

    def execute_segment(
        self,
        ctx: ExecutionContext,
        previous: ExecutionContext
    ) -> ExecutionContext:
        """
        Execute one segment.

        ShellErrors raised by the handler end up in ``ctx.stderr`` with
        status 1; they never escape this method.
        """
        resolution = self._resolver.resolve(ctx.command_name)

        try:
            if resolution.command_type is CommandType.REDIRECT:
                return resolution.handler(ctx, previous)
            if resolution.command_type is CommandType.BUILTIN:
                return resolution.handler(ctx)
            if resolution.command_type is CommandType.SYSTEM:
                return self._execute_system(ctx, resolution)
            raise ResolutionError(ctx.command_name)
        except ShellError as e:
            self._logger.warning(
                f"Command failed: {e.message}",
                context={'command': ctx.command_name, 'error_code': e.error_code}
            )
            ctx.stdout = ''
            return ctx.fail(e.message)

    def _execute_system(
        self,
        ctx: ExecutionContext,
        resolution: Resolution
    ) -> ExecutionContext:
        """Run an external program found on PATH."""
        result = self._spawner.spawn(
            ctx.command_name,
            resolution.path,
            ctx.args[1:],
            cwd=self._environment.cwd,
            env=self._environment.variables,
        )

        ctx.stdout = result.stdout
        ctx.stderr = result.stderr
        ctx.status = STATUS_SUCCESS if result.succeeded else STATUS_FAILURE
        return ctx

    def _report(self, ctx: ExecutionContext) -> Tuple[str, int]:
        """
        Write the final context to the output streams.

        A successful context reports its stdout, a failed one only its
        stderr.
        """
        if ctx.succeeded:
            text = ctx.stdout.strip()
            self._write(self.out, text)
        else:
            text = ctx.stderr.strip()
            self._write(self.err, text)
        return text, ctx.status

    def _report_exit(self, ctx: ExecutionContext) -> None:
        self._write(self.err, ctx.stderr.strip())

    @staticmethod
    def _write(stream: TextIO, text: str) -> None:
        if not text:
            return
        stream.write(text + '\n')
        stream.flush()
