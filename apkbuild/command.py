"""
    External tools invocation.
"""
import shlex
from collections import namedtuple
from subprocess import PIPE
from subprocess import run

from rich.markup import escape

from apkbuild import logger


CommandResult = namedtuple("CommandResult", ["exit_code", "stdout", "stderr"])


class ExternalCommandError(RuntimeError):
    """ An external tool could not be run or exited with a non-zero code. """

    def __init__(self, command, exit_code=None, stdout="", stderr="", reason=None):
        self.command = command
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr

        if reason is None:
            reason = f"exited with code {exit_code}"
        super().__init__(f"Command `{command}` {reason}.")


class ExternalCommand:
    """ Invocation of a tool outside apkbuild's process.
    Arguments are kept exactly as given and passed to the process as a list, no shell is involved.
    """

    def __init__(self, executable, args=(), cwd=None, fail_on_error=True):
        """ ExternalCommand initialization

        Args:
            executable (str | Path): Path or name of the executable.
            args (iterable, optional): Arguments for the executable, each item is passed as a single argument.
            cwd (str | Path, optional): Working directory for the process. Defaults to the current directory.
            fail_on_error (bool, optional): Whether a non-zero exit code should raise. Defaults to True.
        """
        self.executable = str(executable)
        self.args = tuple(str(arg) for arg in args)
        self.cwd = None if cwd is None else str(cwd)
        self.fail_on_error = fail_on_error

    @property
    def command_line(self):
        return [self.executable, *self.args]

    def execute(self):
        """ Run the command, wait for it to finish and capture all of its output.

        Raises:
            ExternalCommandError: When the executable can not be run, or when it exits with a non-zero code and
                `fail_on_error` is set.

        Returns:
            CommandResult: Exit code and captured stdout and stderr.
        """
        logger.debug(f"Running [bold]{escape(str(self))}[/bold]" + (f" in {escape(self.cwd)}" if self.cwd else ""))

        try:
            process = run(self.command_line, cwd=self.cwd, stdout=PIPE, stderr=PIPE, encoding="utf-8", errors="replace")
        except OSError as exc:
            raise ExternalCommandError(command=str(self), reason=f"could not be run: {exc.strerror or exc}") from exc

        result = CommandResult(exit_code=process.returncode, stdout=process.stdout, stderr=process.stderr)

        if result.stdout:
            logger.debug(escape(result.stdout.rstrip()))

        if result.exit_code != 0 and self.fail_on_error:
            raise ExternalCommandError(command=str(self),
                                       exit_code=result.exit_code,
                                       stdout=result.stdout,
                                       stderr=result.stderr)

        return result

    def __eq__(self, other):
        return (isinstance(other, ExternalCommand)
                and self.command_line == other.command_line
                and self.cwd == other.cwd
                and self.fail_on_error == other.fail_on_error)

    def __str__(self):
        return shlex.join(self.command_line)

    def __repr__(self):
        return f"ExternalCommand({self.command_line!r}, cwd={self.cwd!r})"
