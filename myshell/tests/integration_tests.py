#!/usr/bin/env python3
"""
myshell Integration Tests

End-to-end tests of command resolution, builtins, redirection, external
programs, the interactive loop and the entry point. Every test works in
its own temporary directory with its own PATH.

Run with: python -m pytest myshell/tests -v
Or: python myshell/tests/integration_tests.py

Author: YSNRFD
Version: 1.0.0
"""

import io
import json
import os
import sys
import tempfile
import unittest
from unittest import mock

# Add repository root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from myshell.core.config_loader import ConfigLoader
from myshell.core.environment import Environment
from myshell.logger import Logger, LogLevel
from myshell.process.spawner import ProcessSpawner
from myshell.shell.engine import ExecutionEngine
from myshell.shell.resolver import CommandType
from myshell.shell.shell import Shell


def make_executable(directory, name, body='#!/bin/sh\nexit 0\n', mode=0o755):
    """Create a file in ``directory`` and set its permission bits."""
    path = os.path.join(directory, name)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(body)
    os.chmod(path, mode)
    return path


class ShellTestCase(unittest.TestCase):
    """Temporary work, home and bin directories plus an engine wired to them."""

    def setUp(self):
        ConfigLoader().reset()
        self._tmp = tempfile.TemporaryDirectory()
        self.root = os.path.realpath(self._tmp.name)
        self.work = os.path.join(self.root, 'work')
        self.home = os.path.join(self.root, 'home')
        self.bin = os.path.join(self.root, 'bin')
        for directory in (self.work, self.home, self.bin):
            os.makedirs(directory)

        self.env = Environment(
            {'PATH': self.bin, 'HOME': self.home},
            cwd=self.work
        )
        self.out = io.StringIO()
        self.err = io.StringIO()
        self.engine = self.make_engine()

    def tearDown(self):
        self._tmp.cleanup()
        ConfigLoader().reset()

    def make_engine(self, spawner=None):
        return ExecutionEngine(
            environment=self.env,
            spawner=spawner,
            stdout=self.out,
            stderr=self.err
        )

    def read(self, *parts):
        with open(os.path.join(*parts), encoding='utf-8') as f:
            return f.read()


class TestResolver(ShellTestCase):
    """Test command classification."""

    def test_redirect_markers(self):
        """Words ending in '>' are redirections."""
        for name in ['>', '1>', '2>', '>>']:
            self.assertIs(self.engine.resolver.resolve(name).command_type, CommandType.REDIRECT)

    def test_builtins(self):
        """The five builtins are recognized."""
        for name in ['cd', 'echo', 'exit', 'pwd', 'type']:
            resolution = self.engine.resolver.resolve(name)
            self.assertIs(resolution.command_type, CommandType.BUILTIN)
            self.assertTrue(callable(resolution.handler))

    def test_builtin_shadows_path(self):
        """A builtin wins over an executable of the same name."""
        make_executable(self.bin, 'echo')

        self.assertIs(self.engine.resolver.resolve('echo').command_type, CommandType.BUILTIN)

    def test_system_command(self):
        """Executables on PATH resolve to their absolute path."""
        path = make_executable(self.bin, 'tool')

        resolution = self.engine.resolver.resolve('tool')
        self.assertIs(resolution.command_type, CommandType.SYSTEM)
        self.assertEqual(resolution.path, path)

    def test_first_match_wins(self):
        """Earlier PATH directories take precedence."""
        other = os.path.join(self.root, 'other')
        os.makedirs(other)
        first = make_executable(other, 'tool')
        make_executable(self.bin, 'tool')
        self.env.set_variable('PATH', f"{other}:{self.bin}")

        self.assertEqual(self.engine.resolver.resolve('tool').path, first)

    def test_non_executable_is_skipped(self):
        """Files without any execute bit are ignored."""
        other = os.path.join(self.root, 'other')
        os.makedirs(other)
        make_executable(other, 'tool', mode=0o644)
        second = make_executable(self.bin, 'tool', mode=0o701)
        self.env.set_variable('PATH', f"{other}:{self.bin}")

        self.assertEqual(self.engine.resolver.resolve('tool').path, second)

    def test_directory_is_skipped(self):
        """A directory with the command's name is not a match."""
        os.makedirs(os.path.join(self.bin, 'tool'))

        self.assertIs(self.engine.resolver.resolve('tool').command_type, CommandType.NOT_FOUND)

    def test_not_found(self):
        """Unknown names are NOT_FOUND with no handler."""
        resolution = self.engine.resolver.resolve('nosuchcmd123')

        self.assertIs(resolution.command_type, CommandType.NOT_FOUND)
        self.assertIsNone(resolution.handler)
        self.assertFalse(resolution.found)

    def test_no_caching(self):
        """Filesystem and PATH changes are seen immediately."""
        self.assertFalse(self.engine.resolver.resolve('late').found)

        make_executable(self.bin, 'late')
        self.assertTrue(self.engine.resolver.resolve('late').found)

        self.env.set_variable('PATH', '')
        self.assertFalse(self.engine.resolver.resolve('late').found)

    def test_empty_path_entries_and_slashes(self):
        """Empty PATH entries are skipped; names with '/' are never searched."""
        make_executable(self.bin, 'tool')
        self.env.set_variable('PATH', f"::{self.bin}:")

        self.assertTrue(self.engine.resolver.resolve('tool').found)
        self.assertFalse(self.engine.resolver.resolve('bin/tool').found)

    def test_relative_path_entry(self):
        """Relative PATH entries are relative to the working directory."""
        local = os.path.join(self.work, 'scripts')
        os.makedirs(local)
        path = make_executable(local, 'tool')
        self.env.set_variable('PATH', 'scripts')

        self.assertEqual(self.engine.resolver.resolve('tool').path, path)


class TestBuiltins(ShellTestCase):
    """Test the builtin commands through the engine."""

    def test_echo(self):
        """echo joins its arguments with single spaces."""
        self.assertEqual(self.engine.run('echo foo bar'), ('foo bar', 0))
        self.assertEqual(self.out.getvalue(), 'foo bar\n')
        self.assertEqual(self.err.getvalue(), '')

    def test_echo_quoted(self):
        """Quoted spacing reaches echo intact."""
        self.engine.run('echo "a   b"  c')

        self.assertEqual(self.out.getvalue(), 'a   b c\n')

    def test_echo_without_arguments(self):
        """Empty output is not written at all."""
        self.assertEqual(self.engine.run('echo'), ('', 0))
        self.assertEqual(self.out.getvalue(), '')

    def test_cd_and_pwd(self):
        """cd changes the tracked directory and pwd reports it."""
        target = os.path.join(self.work, 'sub')
        os.makedirs(target)

        self.assertEqual(self.engine.run('cd sub'), ('', 0))
        self.assertEqual(self.env.cwd, target)
        self.assertEqual(self.engine.run('pwd'), (target, 0))

        self.engine.run('cd ..')
        self.assertEqual(self.env.cwd, self.work)

    def test_cd_absolute(self):
        """Absolute paths are used as given."""
        self.engine.run(f'cd {self.home}')

        self.assertEqual(self.env.cwd, self.home)

    def test_cd_home(self):
        """'~' and no argument both go home."""
        self.engine.run('cd ~')
        self.assertEqual(self.env.cwd, self.home)

        self.env.cwd = self.work
        self.engine.run('cd')
        self.assertEqual(self.env.cwd, self.home)

    def test_cd_missing_directory(self):
        """A missing directory leaves the cwd alone and reports an error."""
        text, status = self.engine.run('cd /no/such/place')

        self.assertEqual(status, 1)
        self.assertEqual(text, 'cd: /no/such/place: No such file or directory')
        self.assertEqual(self.err.getvalue(), 'cd: /no/such/place: No such file or directory\n')
        self.assertEqual(self.env.cwd, self.work)

    def test_cd_to_file(self):
        """A regular file is not a directory."""
        with open(os.path.join(self.work, 'file.txt'), 'w') as f:
            f.write('x')

        text, status = self.engine.run('cd file.txt')

        self.assertEqual(status, 1)
        self.assertEqual(text, 'cd: file.txt: No such file or directory')
        self.assertEqual(self.env.cwd, self.work)

    def test_pwd_argument_limit(self):
        """pwd tolerates two stray arguments but not three."""
        self.assertEqual(self.engine.run('pwd a b'), (self.work, 0))
        self.assertEqual(self.engine.run('pwd a b c'), ('too many arguments', 1))

    def test_exit_with_status(self):
        """exit N terminates with status N."""
        with self.assertRaises(SystemExit) as cm:
            self.engine.run('exit 3')

        self.assertEqual(cm.exception.code, 3)

    def test_exit_without_status(self):
        """Plain exit terminates with status 0."""
        with self.assertRaises(SystemExit) as cm:
            self.engine.run('exit')

        self.assertEqual(cm.exception.code, 0)

    def test_exit_non_numeric(self):
        """A non-numeric status is reported and the shell exits with 0."""
        with self.assertRaises(SystemExit) as cm:
            self.engine.run('exit abc')

        self.assertEqual(cm.exception.code, 0)
        self.assertEqual(self.err.getvalue(), 'exit: abc: numeric argument required\n')

    def test_exit_too_many_arguments(self):
        """Too many arguments is an error, not an exit."""
        text, status = self.engine.run('exit 1 2')

        self.assertEqual(status, 1)
        self.assertEqual(text, 'too many arguments')

    def test_type_builtin(self):
        """Builtins are described as such."""
        self.assertEqual(self.engine.run('type echo'), ('echo is a shell builtin', 0))

    def test_type_system(self):
        """Executables are described with their path."""
        path = make_executable(self.bin, 'tool')

        self.assertEqual(self.engine.run('type tool'), (f'tool is {path}', 0))

    def test_type_not_found(self):
        """Unknown names fail."""
        self.assertEqual(self.engine.run('type nosuch'), ('nosuch: not found', 1))

    def test_type_reports_in_input_order(self):
        """Every name is reported, in the order given."""
        path = make_executable(self.bin, 'tool')

        text, status = self.engine.run('type tool nosuch echo')

        report = f'tool is {path}\nnosuch: not found\necho is a shell builtin'
        self.assertEqual((text, status), (report, 1))
        self.assertEqual(self.out.getvalue(), '')
        self.assertEqual(self.err.getvalue(), report + '\n')

    def test_type_without_arguments(self):
        """No names, no output."""
        self.assertEqual(self.engine.run('type'), ('', 0))


class TestRedirection(ShellTestCase):
    """Test '>' and friends."""

    def test_redirect_echo(self):
        """Output goes to the file instead of the terminal."""
        text, status = self.engine.run('echo hi > out.txt')

        self.assertEqual((text, status), ('', 0))
        self.assertEqual(self.read(self.work, 'out.txt'), 'hi\n')
        self.assertEqual(self.out.getvalue(), '')
        self.assertEqual(self.err.getvalue(), '')

    def test_redirect_absolute_path(self):
        """Absolute targets ignore the working directory."""
        target = os.path.join(self.root, 'abs.txt')

        self.engine.run(f'echo hi > {target}')

        self.assertEqual(self.read(target), 'hi\n')

    def test_redirect_follows_cd(self):
        """Relative targets use the shell's current directory."""
        self.engine.run('cd ~')
        self.engine.run('echo hi > out.txt')

        self.assertEqual(self.read(self.home, 'out.txt'), 'hi\n')

    def test_extra_words_are_appended(self):
        """Words after the target are written after the captured output."""
        self.engine.run('echo hi > out.txt there')

        self.assertEqual(self.read(self.work, 'out.txt'), 'hi there\n')

    def test_truncate(self):
        """'>' replaces existing content."""
        self.engine.run('echo a much longer line > out.txt')
        self.engine.run('echo short > out.txt')

        self.assertEqual(self.read(self.work, 'out.txt'), 'short\n')

    def test_append(self):
        """'>>' appends."""
        self.engine.run('echo one >> out.txt')
        self.engine.run('echo two >> out.txt')

        self.assertEqual(self.read(self.work, 'out.txt'), 'one\ntwo\n')

    def test_stderr_redirect(self):
        """'2>' captures the previous segment's error text."""
        text, status = self.engine.run('nosuch 2> err.txt')

        self.assertEqual((text, status), ('', 0))
        self.assertEqual(self.read(self.work, 'err.txt'), 'nosuch: command not found\n')
        self.assertEqual(self.err.getvalue(), '')

    def test_stderr_redirect_keeps_stdout(self):
        """'2>' leaves the previous stdout on the terminal."""
        text, status = self.engine.run('echo hi 2> err.txt')

        self.assertEqual((text, status), ('hi', 0))
        self.assertEqual(self.out.getvalue(), 'hi\n')
        self.assertEqual(self.read(self.work, 'err.txt'), '')

    def test_missing_target(self):
        """A marker without a target is a syntax error."""
        text, status = self.engine.run('echo hi >')

        self.assertEqual(status, 1)
        self.assertIn('syntax error', text)

    def test_unwritable_target(self):
        """Open failures carry the OS message."""
        text, status = self.engine.run('echo hi > missing/dir/out.txt')

        self.assertEqual(status, 1)
        self.assertEqual(text, 'missing/dir/out.txt: No such file or directory')

    def test_unencodable_output(self):
        """Output the file encoding cannot hold is an error; the file is untouched."""
        with open(os.path.join(self.work, 'out.txt'), 'w') as f:
            f.write('keep\n')

        text, status = self.engine.run('echo \udcff > out.txt')

        self.assertEqual(status, 1)
        self.assertTrue(text.startswith('out.txt: cannot encode output'), text)
        self.assertEqual(self.read(self.work, 'out.txt'), 'keep\n')

    def test_leading_redirect(self):
        """A line starting with '>' creates an empty file."""
        self.assertEqual(self.engine.run('> empty.txt'), ('', 0))

        self.assertEqual(self.read(self.work, 'empty.txt'), '')

    def test_only_redirect_consumes_previous(self):
        """A second redirect gets the first redirect's (empty) output."""
        self.engine.run('echo a > first.txt > second.txt')

        self.assertEqual(self.read(self.work, 'first.txt'), 'a\n')
        self.assertEqual(self.read(self.work, 'second.txt'), '')

    def test_quoted_marker_still_redirects(self):
        """Quoting does not hide a marker: words are already decoded."""
        self.engine.run('echo hi ">" out.txt')

        self.assertEqual(self.read(self.work, 'out.txt'), 'hi\n')


class TestExternalCommands(ShellTestCase):
    """Test running programs found on PATH."""

    def test_arguments_and_output(self):
        """Arguments are passed and stdout captured."""
        make_executable(self.bin, 'greet', '#!/bin/sh\necho "args: $*"\n')

        self.assertEqual(self.engine.run("greet a 'b c'"), ('args: a b c', 0))
        self.assertEqual(self.out.getvalue(), 'args: a b c\n')

    def test_program_name(self):
        """The program is found under the name it was invoked by."""
        make_executable(self.bin, 'whoami0', '#!/bin/sh\necho "${0##*/}"\n')

        self.assertEqual(self.engine.run('whoami0'), ('whoami0', 0))

    def test_failure(self):
        """Non-zero exit gives status 1 and reports stderr."""
        make_executable(self.bin, 'broken', '#!/bin/sh\necho oops >&2\nexit 3\n')

        self.assertEqual(self.engine.run('broken'), ('oops', 1))
        self.assertEqual(self.err.getvalue(), 'oops\n')

    def test_failure_hides_stdout(self):
        """A failed program reports only its error text."""
        make_executable(self.bin, 'noisy', '#!/bin/sh\necho partial\necho oops >&2\nexit 1\n')

        self.assertEqual(self.engine.run('noisy'), ('oops', 1))
        self.assertEqual(self.out.getvalue(), '')
        self.assertEqual(self.err.getvalue(), 'oops\n')

    def test_runs_in_tracked_directory(self):
        """Programs start in the shell's working directory."""
        make_executable(self.bin, 'where', '#!/bin/sh\npwd\n')

        self.engine.run('cd ~')
        text, status = self.engine.run('where')

        self.assertEqual(status, 0)
        self.assertEqual(os.path.realpath(text), self.home)

    def test_environment_is_passed(self):
        """Programs see the shell's variables."""
        make_executable(self.bin, 'showhome', '#!/bin/sh\necho "$HOME"\n')

        self.assertEqual(self.engine.run('showhome'), (self.home, 0))

    def test_output_redirected(self):
        """External output can be redirected to a file."""
        make_executable(self.bin, 'lines', '#!/bin/sh\necho one\necho two\n')

        self.assertEqual(self.engine.run('lines > out.txt'), ('', 0))
        self.assertEqual(self.read(self.work, 'out.txt'), 'one\ntwo\n')

    def test_not_found(self):
        """Unknown commands report 'command not found'."""
        text, status = self.engine.run('nosuchcmd123')

        self.assertEqual((text, status), ('nosuchcmd123: command not found', 1))
        self.assertEqual(self.err.getvalue(), 'nosuchcmd123: command not found\n')

    def test_spawn_error(self):
        """A file the OS cannot execute is reported, not raised."""
        make_executable(self.bin, 'garbage', '\x00\x01\x02 not a program\n')

        text, status = self.engine.run('garbage')

        self.assertEqual(status, 1)
        self.assertTrue(text.startswith('garbage: '), text)

    def test_timeout(self):
        """A configured timeout kills the program."""
        make_executable(self.bin, 'napper', '#!/bin/sh\nexec sleep 5\n')
        self.env.set_variable('PATH', f"{self.bin}:/usr/bin:/bin")
        engine = self.make_engine(spawner=ProcessSpawner(timeout=0.5))

        self.assertEqual(engine.run('napper'), ('napper: timed out after 0.5s', 1))

    def test_segments_run_in_order(self):
        """Every segment runs even after a failure."""
        text, status = self.engine.run('nosuch > out.txt')

        self.assertEqual((text, status), ('', 0))
        self.assertEqual(self.read(self.work, 'out.txt'), '')

    def test_failures_are_logged(self):
        """Recovered errors are logged by the engine."""
        Logger.initialize(level=LogLevel.DEBUG)
        try:
            self.engine.run('nosuchcmd123')
            entries = Logger.get_recent_logs(level='WARNING', subsystem='engine')
        finally:
            Logger.reset()

        self.assertEqual(len(entries), 1)
        self.assertEqual(entries[0]['context']['command'], 'nosuchcmd123')
        self.assertEqual(entries[0]['context']['error_code'], 3002)


class TestShell(ShellTestCase):
    """Test the interactive loop."""

    def make_shell(self, text):
        return Shell(self.engine, stdin=io.StringIO(text), stdout=self.out, stderr=self.err)

    def test_repl_until_eof(self):
        """Lines run in order; end of input closes the shell with 0."""
        shell = self.make_shell('echo hi\nnosuch\n')

        self.assertEqual(shell.run(), 0)
        self.assertEqual(shell.last_status, 1)
        self.assertEqual(self.out.getvalue(), '$ hi\n$ $ \nclosing shell...\n')
        self.assertEqual(self.err.getvalue(), 'nosuch: command not found\n')

    def test_blank_lines(self):
        """Blank lines just show another prompt."""
        shell = self.make_shell('\n   \n')

        self.assertEqual(shell.run(), 0)
        self.assertEqual(self.out.getvalue(), '$ $ $ \nclosing shell...\n')

    def test_exit_leaves_loop(self):
        """exit stops the loop through SystemExit."""
        shell = self.make_shell('echo before\nexit 4\necho after\n')

        with self.assertRaises(SystemExit) as cm:
            shell.run()

        self.assertEqual(cm.exception.code, 4)
        self.assertNotIn('after', self.out.getvalue())

    def test_prompt_from_config(self):
        """The prompt comes from configuration."""
        path = os.path.join(self.root, 'config.json')
        with open(path, 'w', encoding='utf-8') as f:
            json.dump({'shell': {'prompt': '% '}}, f)
        ConfigLoader().load(path)
        shell = self.make_shell('')

        shell.run()

        self.assertTrue(self.out.getvalue().startswith('% '))

    def test_unexpected_error_does_not_stop_loop(self):
        """Bugs in a handler are reported and the loop continues."""
        def explode(ctx):
            raise RuntimeError('kaput')

        self.engine.builtins.get_commands()['pwd'] = explode
        shell = self.make_shell('pwd\necho fine\n')

        self.assertEqual(shell.run(), 0)
        self.assertIn('myshell: error: kaput', self.err.getvalue())
        self.assertIn('fine\n', self.out.getvalue())

    def test_blank_line_keeps_status(self):
        """A blank line does not change the last status."""
        shell = self.make_shell('echo ok\n\n')

        shell.run()

        self.assertEqual(shell.last_status, 0)

    def test_run_script(self):
        """Scripts skip comments and return the last status."""
        shell = self.make_shell('')

        status = shell.run_script('echo a\n# comment\n\nnosuch\n')

        self.assertEqual(status, 1)
        self.assertEqual(self.out.getvalue(), 'a\n')


class TestMain(unittest.TestCase):
    """Test the entry point."""

    def setUp(self):
        ConfigLoader().reset()
        self._tmp = tempfile.TemporaryDirectory()
        self.root = os.path.realpath(self._tmp.name)

    def tearDown(self):
        Logger.reset()
        ConfigLoader().reset()
        self._tmp.cleanup()

    def _write(self, name, content):
        path = os.path.join(self.root, name)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
        return path

    def test_runs_script(self):
        """A script argument is executed line by line."""
        from myshell.main import main

        out = os.path.join(self.root, 'out.txt')
        config = self._write('config.json', '{"logging": {"level": "DEBUG"}}')
        script = self._write('script.sh', f'echo from script > {out}\n')

        with mock.patch.dict(os.environ, {'MYSHELL_CONFIG': config}):
            status = main([script])

        self.assertEqual(status, 0)
        with open(out, encoding='utf-8') as f:
            self.assertEqual(f.read(), 'from script\n')
        self.assertTrue(Logger.get_recent_logs())

    def test_bad_config(self):
        """An unreadable configuration aborts startup."""
        from myshell.main import main

        config = self._write('config.json', '{broken')

        with mock.patch.dict(os.environ, {'MYSHELL_CONFIG': config}):
            with mock.patch('sys.stderr', new_callable=io.StringIO) as err:
                status = main([])

        self.assertEqual(status, 1)
        self.assertIn('Invalid JSON', err.getvalue())

    def test_missing_script(self):
        """A missing script exits with 127."""
        from myshell.main import main

        config = self._write('config.json', '{}')

        with mock.patch.dict(os.environ, {'MYSHELL_CONFIG': config}):
            with mock.patch('sys.stderr', new_callable=io.StringIO) as err:
                status = main([os.path.join(self.root, 'absent.sh')])

        self.assertEqual(status, 127)
        self.assertIn('absent.sh', err.getvalue())


def run_tests():
    """Run all tests."""
    loader = unittest.TestLoader()
    suite = loader.loadTestsFromModule(sys.modules[__name__])

    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)

    return 0 if result.wasSuccessful() else 1


if __name__ == '__main__':
    sys.exit(run_tests())
