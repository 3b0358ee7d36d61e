"""
Shell Built-in Commands

Implements built-in shell commands.

Author: YSNRFD
Version: 1.0.0
"""

import os
import re
from typing import Callable, List

from myshell.exceptions import (
    ArgumentError,
    DirectoryNotFoundError,
    FilesystemError,
)
from myshell.logger import get_logger
from .context import ExecutionContext
from .resolver import CommandType

_EXIT_STATUS = re.compile(r'[+-]?\d+')


class BuiltinCommands:
    """
    Built-in shell commands.

    These commands run inside the shell without creating a new process.
    Each one takes the segment's ExecutionContext (args[0] is the builtin's
    own name) and returns it with its status and output filled in. Errors
    are raised as ShellError subclasses and turned into stderr by the
    engine.
    """

    def __init__(self, engine):
        """
        Initialize built-in commands.

        Args:
            engine: The execution engine; provides ``environment`` and
                ``resolver``
        """
        self._engine = engine
        self._logger = get_logger('builtins')
        self._commands: dict[str, Callable[[ExecutionContext], ExecutionContext]] = {
            'cd': self.cmd_cd,
            'echo': self.cmd_echo,
            'exit': self.cmd_exit,
            'pwd': self.cmd_pwd,
            'type': self.cmd_type,
        }

    def get_commands(self) -> dict[str, Callable[[ExecutionContext], ExecutionContext]]:
        """Get all built-in commands."""
        return self._commands

    # Command implementations

    def cmd_exit(self, ctx: ExecutionContext) -> ExecutionContext:
        """
        Exit the shell.

        A non-numeric status argument is reported but the shell still
        exits, with status 0.
        """
        if len(ctx.args) > 2:
            raise ArgumentError("too many arguments", command='exit')

        status = 0
        if len(ctx.args) > 1:
            arg = ctx.args[1]
            if _EXIT_STATUS.fullmatch(arg):
                status = int(arg)
            else:
                ctx.stderr = f"exit: {arg}: numeric argument required"

        ctx.status = status
        self._logger.info("Exiting shell", context={'status': status})
        raise SystemExit(status)

    def cmd_echo(self, ctx: ExecutionContext) -> ExecutionContext:
        """Echo arguments."""
        return ctx.succeed(' '.join(ctx.args[1:]))

    def cmd_cd(self, ctx: ExecutionContext) -> ExecutionContext:
        """Change directory. No argument or '~' means the home directory."""
        environment = self._engine.environment
        path = ''.join(ctx.args[1:]).strip()
        target = environment.home if path in ('', '~') else path

        try:
            new_cwd = environment.change_directory(target)
        except OSError:
            raise DirectoryNotFoundError(path or target)

        self._logger.debug("Changed directory", context={'cwd': new_cwd})
        return ctx.succeed()

    def cmd_pwd(self, ctx: ExecutionContext) -> ExecutionContext:
        """Print working directory."""
        if len(ctx.args[1:]) > 2:
            raise ArgumentError("too many arguments", command='pwd')

        cwd = self._engine.environment.cwd
        if not os.path.isdir(cwd):
            raise FilesystemError(f"pwd: {cwd}: No such file or directory", path=cwd)

        return ctx.succeed(cwd)

    def cmd_type(self, ctx: ExecutionContext) -> ExecutionContext:
        """
        Describe how each name would be interpreted.

        Names are reported in the order given. If any name is missing
        the whole report becomes the error text and the status is 1.
        """
        lines: List[str] = []
        missing = False

        for name in ctx.args[1:]:
            resolution = self._engine.resolver.resolve(name)
            if resolution.command_type is CommandType.BUILTIN:
                lines.append(f"{name} is a shell builtin")
            elif resolution.command_type is CommandType.SYSTEM:
                lines.append(f"{os.path.basename(resolution.path)} is {resolution.path}")
            else:
                lines.append(f"{name}: not found")
                missing = True

        report = '\n'.join(lines)
        if missing:
            return ctx.fail(report)
        return ctx.succeed(report)
