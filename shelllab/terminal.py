#!/usr/bin/env python3
"""
Terminal emulator for shelllab.

This module turns typed lines into shell-like output. It owns the session
state and the virtual filesystem for one learner, dispatches each command to
its handler, and reports which exercise tasks a line has completed.

Design Principles:
- Failures are output: every handler returns a CommandResult, never raises
- Clean separation between parsing and execution
- One independent filesystem and session per TerminalSession
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .command_parser import Command, CommandKind, CommandParser
from .exercises import PLAYGROUND, Exercise
from .filesystem import FileSystem
from .paths import HOME_DIR, basename, join_path, resolve, strip_trailing_slash
from .session import LineKind, SessionState
from .tasks import TaskProgress

logger = logging.getLogger(__name__)


HELP_TEXT = """Available commands:
ls - list directory contents
pwd - print working directory
cd - change directory
mkdir - create directory
touch - create file
rm - remove file or directory
cp - copy file or directory
mv - move or rename file or directory
cat - display file contents
echo - display text
grep - search text
ps - show processes
whoami - show current user
clear - clear terminal
help - show this help"""

PS_TEXT = """  PID TTY          TIME CMD
 1001 pts/0    00:00:00 bash
 5678 pts/0    00:00:00 ps"""

GREP_USAGE = 'Usage: grep [OPTION]... PATTERN [FILE]...'

LONG_DATE = 'Jan 15 10:30'


@dataclass
class TerminalConfig:
    """Configuration for terminal session."""
    user: str = 'user'
    home_dir: str = HOME_DIR
    initial_dir: str = HOME_DIR
    prompt_format: str = '{cwd} $ '
    # Cosmetic by default: mkdir/touch/rm/cp/mv report success but leave
    # the filesystem as it was seeded.
    persistent_changes: bool = False


@dataclass
class CommandResult:
    """Output of one command; a non-zero exit code marks an error line."""
    text: str = ''
    exit_code: int = 0

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    def __str__(self) -> str:
        return self.text


@dataclass
class Submission:
    """What the host gets back for each submitted line."""
    output: str = ''
    completed: List[int] = field(default_factory=list)


class CommandExecutor:
    """
    Executes parsed commands against a filesystem and session state.

    Every ``CommandKind`` has exactly one handler; the table is checked when
    the executor is built.
    """

    def __init__(self, fs: FileSystem, state: SessionState,
                 config: Optional[TerminalConfig] = None):
        self.fs = fs
        self.state = state
        self.config = config or TerminalConfig()
        self.parser = CommandParser()
        self._handlers: Dict[CommandKind, Callable[[Command], CommandResult]] = {
            CommandKind.HELP: self._help,
            CommandKind.LS: self._ls,
            CommandKind.PWD: self._pwd,
            CommandKind.CD: self._cd,
            CommandKind.MKDIR: self._mkdir,
            CommandKind.TOUCH: self._touch,
            CommandKind.CAT: self._cat,
            CommandKind.ECHO: self._echo,
            CommandKind.GREP: self._grep,
            CommandKind.PS: self._ps,
            CommandKind.WHOAMI: self._whoami,
            CommandKind.CLEAR: self._clear,
            CommandKind.RM: self._rm,
            CommandKind.CP: self._cp,
            CommandKind.MV: self._mv,
            CommandKind.UNKNOWN: self._unknown,
        }
        missing = set(CommandKind) - set(self._handlers)
        if missing:
            raise RuntimeError(f"no handler for {sorted(k.name for k in missing)}")

    @property
    def cwd(self) -> str:
        return self.state.current_directory

    def execute(self, command_line: str) -> CommandResult:
        """Parse and run one line of input."""
        command = self.parser.parse(command_line)
        if not command.name:
            return CommandResult()
        return self._execute_command(command)

    def _execute_command(self, command: Command) -> CommandResult:
        """Execute a single command by calling its handler."""
        logger.debug("dispatch %s args=%s flags=%s", command.kind.name,
                     command.args, command.flags)
        try:
            return self._handlers[command.kind](command)
        except Exception as e:
            logger.exception("command %r failed", command.name)
            return CommandResult(text=f"{command.name}: {e}", exit_code=1)

    # Informational commands

    def _help(self, command: Command) -> CommandResult:
        return CommandResult(HELP_TEXT)

    def _pwd(self, command: Command) -> CommandResult:
        return CommandResult(self.cwd)

    def _echo(self, command: Command) -> CommandResult:
        return CommandResult(' '.join(command.args))

    def _ps(self, command: Command) -> CommandResult:
        return CommandResult(PS_TEXT)

    def _whoami(self, command: Command) -> CommandResult:
        return CommandResult(self.config.user)

    def _clear(self, command: Command) -> CommandResult:
        self.state.clear()
        return CommandResult()

    def _unknown(self, command: Command) -> CommandResult:
        return CommandResult(
            f"Command '{command.name}' not found. Type 'help' for available commands.",
            exit_code=127,
        )

    # Navigation

    def _cd(self, command: Command) -> CommandResult:
        target = command.arg(0)
        new_path = resolve(target, self.cwd, self.config.home_dir)

        if not self.fs.is_dir(new_path):
            return CommandResult(
                f"bash: cd: {target}: No such file or directory", exit_code=1)

        self.state.change_directory(new_path)
        return CommandResult()

    def _ls(self, command: Command) -> CommandResult:
        show_all = command.flags.get('all', False)
        long_format = command.flags.get('long', False)
        # The last positional argument wins.
        target = command.args[-1] if command.args else ''
        path = resolve(target, self.cwd, self.config.home_dir) if target else self.cwd

        children = self.fs.listdir(path)
        if children is None:
            return CommandResult(
                f"ls: cannot access '{target or path}': No such file or directory",
                exit_code=2,
            )

        entries = ['.', '..'] + children if show_all else children
        if not long_format:
            return CommandResult('    '.join(entries))

        lines = [f"total {math.ceil(len(entries) * 4)}"]
        lines.extend(self._long_entry(path, name) for name in entries)
        return CommandResult('\n'.join(lines))

    def _long_entry(self, directory: str, name: str) -> str:
        """One synthetic ``ls -l`` line."""
        user = self.config.user
        if name == '.':
            return f"drwxr-xr-x  3 {user} {user}  4096 {LONG_DATE} ."
        if name == '..':
            return "drwxr-xr-x  5 root root  4096 Jan 15 09:15 .."

        node = self.fs.lookup(join_path(name, directory))
        if node is None:
            # Listed but never seeded: shown as an empty placeholder file.
            permissions, links, size = '-rw-r--r--', 1, 1024
        elif node.is_dir():
            permissions, links, size = node.permissions(), 2, 4096
        else:
            permissions, links, size = node.permissions(), 1, len(node.content) or 1024
        return f"{permissions}  {links} {user} {user} {size:>6} {LONG_DATE} {name}"

    # Reading files

    def _cat(self, command: Command) -> CommandResult:
        if not command.args:
            return CommandResult('cat: missing file operand', exit_code=1)

        name = command.args[0]
        node = self.fs.lookup(join_path(name, self.cwd))
        if node is not None and node.is_file():
            return CommandResult(node.content)
        if node is not None and node.is_dir():
            return CommandResult(f"cat: {name}: Is a directory", exit_code=1)
        return CommandResult(f"cat: {name}: No such file or directory", exit_code=1)

    def _grep(self, command: Command) -> CommandResult:
        if len(command.args) < 2:
            return CommandResult(GREP_USAGE, exit_code=2)

        pattern, filename = command.args[0], command.args[1]
        content = self.fs.read(join_path(filename, self.cwd))
        if content is None:
            return CommandResult(
                f"grep: {filename}: No such file or directory", exit_code=2)

        needle = pattern.lower()
        matches = [line for line in content.split('\n') if needle in line.lower()]
        return CommandResult('\n'.join(matches), exit_code=0 if matches else 1)

    # Creating and removing

    def _operand_path(self, name: str) -> str:
        return join_path(strip_trailing_slash(name), self.cwd)

    @staticmethod
    def _is_dot_entry(path: str) -> bool:
        return basename(path) in ('.', '..')

    def _mkdir(self, command: Command) -> CommandResult:
        if not command.args:
            return CommandResult('mkdir: missing operand', exit_code=1)

        name = command.args[0]
        if self.config.persistent_changes:
            path = self._operand_path(name)
            if self.fs.exists(path) or self._is_dot_entry(path):
                return CommandResult(
                    f"mkdir: cannot create directory '{name}': File exists", exit_code=1)
            if not self.fs.mkdir(path):
                return CommandResult(
                    f"mkdir: cannot create directory '{name}': No such file or directory",
                    exit_code=1)
        return CommandResult(f"Directory '{name}' created")

    def _touch(self, command: Command) -> CommandResult:
        if not command.args:
            return CommandResult('touch: missing file operand', exit_code=1)

        name = command.args[0]
        if self.config.persistent_changes:
            path = self._operand_path(name)
            existing = self._is_dot_entry(path) or self.fs.exists(path)
            if not existing and not self.fs.write(path, ''):
                return CommandResult(
                    f"touch: cannot touch '{name}': No such file or directory",
                    exit_code=1)
        return CommandResult(f"File '{name}' created")

    def _busy(self, path: str) -> bool:
        """True if ``path`` is the working directory or one of its ancestors."""
        cwd = self.cwd
        return cwd == path or cwd.startswith(path.rstrip('/') + '/')

    def _rm(self, command: Command) -> CommandResult:
        if not command.args:
            return CommandResult('rm: missing operand', exit_code=1)

        name = command.args[0]
        path = self._operand_path(name)
        node = self.fs.lookup(path)
        if node is None:
            return CommandResult(
                f"rm: cannot remove '{name}': No such file or directory", exit_code=1)
        if node.is_dir() and not command.flags.get('recursive'):
            return CommandResult(
                f"rm: cannot remove '{name}': Is a directory", exit_code=1)
        if self._busy(path):
            return CommandResult(
                f"rm: cannot remove '{name}': Device or resource busy", exit_code=1)

        if self.config.persistent_changes:
            self.fs.remove(path)
        return CommandResult(f"removed '{name}'")

    def _transfer(self, command: Command, verb: str) -> Optional[CommandResult]:
        """Shared operand and source checks for cp and mv."""
        if not command.args:
            return CommandResult(f"{verb}: missing file operand", exit_code=1)
        src = command.args[0]
        if len(command.args) < 2:
            return CommandResult(
                f"{verb}: missing destination file operand after '{src}'", exit_code=1)
        if not self.fs.exists(self._operand_path(src)):
            return CommandResult(
                f"{verb}: cannot stat '{src}': No such file or directory", exit_code=1)
        return None

    def _cp(self, command: Command) -> CommandResult:
        error = self._transfer(command, 'cp')
        if error:
            return error

        src, dst = command.args[0], command.args[1]
        src_path = self._operand_path(src)
        if self.fs.is_dir(src_path) and not command.flags.get('recursive'):
            return CommandResult(
                f"cp: -r not specified; omitting directory '{src}'", exit_code=1)

        if self.config.persistent_changes and \
                not self.fs.copy(src_path, self._operand_path(dst)):
            return CommandResult(
                f"cp: cannot copy '{src}' to '{dst}'", exit_code=1)
        return CommandResult(f"'{src}' -> '{dst}'")

    def _mv(self, command: Command) -> CommandResult:
        error = self._transfer(command, 'mv')
        if error:
            return error

        src, dst = command.args[0], command.args[1]
        src_path = self._operand_path(src)
        if self._busy(src_path):
            return CommandResult(
                f"mv: cannot move '{src}': Device or resource busy", exit_code=1)

        if self.config.persistent_changes and \
                not self.fs.move(src_path, self._operand_path(dst)):
            return CommandResult(
                f"mv: cannot move '{src}' to '{dst}'", exit_code=1)
        return CommandResult(f"renamed '{src}' -> '{dst}'")


class TerminalSession:
    """
    Main terminal session manager.

    Owns one filesystem, one session state and the progress on one exercise.
    Callers feed it lines with ``submit`` and render ``state.history``.
    """

    def __init__(self, config: Optional[TerminalConfig] = None,
                 exercise: Optional[Exercise] = None,
                 fs: Optional[FileSystem] = None):
        """Initialize terminal session."""
        self.config = config or TerminalConfig()
        self.exercise = exercise or PLAYGROUND
        self.fs = fs or FileSystem()
        if not self.fs.is_dir(self.config.initial_dir):
            raise ValueError(f"initial directory {self.config.initial_dir!r} does not exist")

        self.state = SessionState(current_directory=self.config.initial_dir)
        self.executor = CommandExecutor(self.fs, self.state, self.config)
        self.progress = TaskProgress(self.exercise.tasks)
        self._welcome()

    def _welcome(self):
        self.state.record(LineKind.OUTPUT,
                          f"Welcome to the DevOps Shell Lab - {self.exercise.title}")
        self.state.record(LineKind.OUTPUT,
                          'Type "help" to see available commands or start practicing!')

    @property
    def cwd(self) -> str:
        return self.state.current_directory

    def get_prompt(self) -> str:
        """Generate the command prompt."""
        return self.config.prompt_format.format(cwd=self.cwd, user=self.config.user)

    def submit(self, command_line: str) -> Submission:
        """
        Run one line: record it, execute it, and match it against the tasks.

        Blank lines are ignored entirely.
        """
        command_line = command_line.strip()
        if not command_line:
            return Submission()

        self.state.record(LineKind.COMMAND, f"{self.cwd} $ {command_line}")
        result = self.executor.execute(command_line)
        if result.text:
            kind = LineKind.OUTPUT if result.ok else LineKind.ERROR
            self.state.record(kind, result.text)

        completed = self.progress.update(command_line)
        for index in completed:
            self.state.record(LineKind.OUTPUT,
                              f"✅ Task completed: {self.exercise.tasks[index]}")

        return Submission(output=result.text, completed=completed)

    def execute_command(self, command_line: str) -> str:
        """Execute a command line and return the output."""
        return self.submit(command_line).output

    def run_example(self, index: int) -> Submission:
        """Submit one of the exercise's worked examples."""
        return self.submit(self.exercise.examples[index].command)

    def run_script(self, script_lines: List[str]) -> List[str]:
        """
        Run a script (list of command lines) and return outputs.
        """
        outputs = []
        for line in script_lines:
            # Skip comments and empty lines
            line = line.strip()
            if not line or line.startswith('#'):
                continue
            outputs.append(self.execute_command(line))
        return outputs

    def reset(self):
        """Replace the scrollback with a single banner line."""
        self.state.clear()
        self.state.record(LineKind.OUTPUT, f"Terminal cleared - {self.exercise.title}")

    def run_interactive(self):
        """Run the interactive REPL loop."""
        for line in self.state.lines():
            print(line)
        print()

        while True:
            try:
                command_line = input(self.get_prompt())
            except KeyboardInterrupt:
                print("^C")
                continue
            except EOFError:
                print()
                break

            if command_line.strip() in ('exit', 'quit'):
                break

            submission = self.submit(command_line)
            if self.executor.parser.parse(command_line).kind is CommandKind.CLEAR:
                print('\033[2J\033[H', end='')
            if submission.output:
                print(submission.output)
            for index in submission.completed:
                print(f"✅ Task completed: {self.exercise.tasks[index]}")

        if self.exercise.tasks:
            print(f"Progress: {self.progress.summary()}")
        print("Goodbye!")


def main():
    """Main entry point for terminal emulator."""
    import argparse
    from . import exercises

    parser = argparse.ArgumentParser(description='shelllab teaching terminal')
    parser.add_argument('-c', '--command', help='Execute command and exit')
    parser.add_argument('-e', '--exercise', help='JSON file with exercise descriptors')
    parser.add_argument('-n', '--number', type=int, default=0,
                        help='Which exercise in the file to load (default: first)')
    parser.add_argument('--persistent', action='store_true',
                        help='Let mkdir/touch/rm/cp/mv really change the filesystem')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(name)s %(levelname)s %(message)s',
    )

    exercise = None
    if args.exercise:
        try:
            exercise = exercises.load(args.exercise)[args.number]
        except (OSError, IndexError, exercises.ExerciseError) as e:
            parser.error(f"cannot load exercise: {e}")

    config = TerminalConfig(persistent_changes=args.persistent)
    session = TerminalSession(config=config, exercise=exercise)

    if args.command:
        output = session.execute_command(args.command)
        if output:
            print(output)
    else:
        session.run_interactive()


if __name__ == '__main__':
    main()
