"""
myshell Shell Module

The interactive command-line shell.

Author: YSNRFD
Version: 1.0.0
"""

import sys
from typing import Optional, TextIO

from myshell.core.config_loader import get_config
from myshell.core.environment import Environment
from myshell.logger import get_logger
from .engine import ExecutionEngine


class Shell:
    """
    Interactive shell.

    Provides:
    - The read-eval-print loop
    - Script execution
    - End-of-input handling

    Example:
        >>> shell = Shell()
        >>> shell.run()
    """

    def __init__(
        self,
        engine: Optional[ExecutionEngine] = None,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None
    ):
        self._logger = get_logger('shell')
        self._stdin = stdin
        self._stdout = stdout
        self._stderr = stderr
        self._engine = engine or ExecutionEngine(stdout=stdout, stderr=stderr)
        self._last_status = 0

    @property
    def engine(self) -> ExecutionEngine:
        return self._engine

    @property
    def environment(self) -> Environment:
        return self._engine.environment

    @property
    def last_status(self) -> int:
        return self._last_status

    @property
    def out(self) -> TextIO:
        return self._stdout or sys.stdout

    @property
    def err(self) -> TextIO:
        return self._stderr or sys.stderr

    def run(self) -> int:
        """
        Run the interactive shell.

        This is the main REPL loop. It returns 0 once input is exhausted;
        the ``exit`` builtin leaves through SystemExit instead.
        """
        config = get_config()
        self._logger.info("Shell started", context={'cwd': self.environment.cwd})

        while True:
            try:
                line = self._read_line(config.shell.prompt)
            except EOFError:
                self.out.write('\n' + config.shell.exit_message + '\n')
                self.out.flush()
                self._logger.info("End of input")
                return 0
            except KeyboardInterrupt:
                self.out.write("^C\n")
                continue
            except OSError as e:
                self._logger.error(f"Read error: {e}")
                self.err.write(f"error: {e}\n")
                continue

            self._execute_line(line)

    def _read_line(self, prompt: str) -> str:
        """Read one line; raise EOFError at end of input."""
        if self._stdin is None:
            return input(prompt)

        self.out.write(prompt)
        self.out.flush()
        line = self._stdin.readline()
        if not line:
            raise EOFError
        return line.rstrip('\n')

    def _execute_line(self, line: str) -> int:
        """
        Execute a command line.

        Args:
            line: Command line string

        Returns:
            Exit code
        """
        if not line.strip():
            return self._last_status

        try:
            _, status = self._engine.run(line)
        except Exception as e:
            self._logger.exception(f"Shell error: {e}", exc=e)
            self.err.write(f"myshell: error: {e}\n")
            status = 1

        self._last_status = status
        return status

    def run_script(self, script: str) -> int:
        """
        Run a script (multiple commands).

        Blank lines and lines starting with '#' are skipped.

        Args:
            script: Script content

        Returns:
            Last exit code
        """
        exit_code = 0

        for line in script.split('\n'):
            line = line.strip()
            if line and not line.startswith('#'):
                exit_code = self._execute_line(line)

        return exit_code


def create_shell(
    environment: Optional[Environment] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None
) -> Shell:
    """Factory function to create a shell."""
    engine = ExecutionEngine(environment=environment, stdout=stdout, stderr=stderr)
    return Shell(engine, stdin=stdin, stdout=stdout, stderr=stderr)
