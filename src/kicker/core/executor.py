import contextlib
import datetime
import sys
from typing import IO, Any, Callable, Mapping

from kicker.core.common_types import (
    COMMAND_NOT_EXECUTABLE_EXIT_CODE,
    COMMAND_NOT_FOUND_EXIT_CODE,
    COMMAND_SYNTAX_ERROR_EXIT_CODE,
    LastExecution,
)
from kicker.core.job import Job
from kicker.core.settings import Settings
from kicker.logutils import logger
from kicker.notification import Notifier, NullNotifier
from kicker.output.output import CLEAR_SCREEN
from kicker.system_helpers import (
    ExitCode,
    split_command,
    subprocess_combined,
    unbuffered_output,
)

Work = Callable[[Job], Any]
"""Unit of work run by Executor.perform_work. Expected to set exit_code and output on
the job."""

CommandOrOptions = str | Mapping[str, Any]


def format_log_line(message: str, now: datetime.datetime | None = None) -> str:
    """Prefix message with a HH:MM:SS.cc timestamp, cc being hundredths of a second."""
    now = now or datetime.datetime.now()
    return f"{now:%H:%M:%S}.{now.microsecond // 10000:02d} | {message}"


class Executor:
    """
    Runs jobs and reports on them: logs before and after, sends notifications and
    clears the console when asked to.

    Parameters
    ----------
    settings : Settings, optional
        Flags shared with the caller. The executor resets should_clear_screen.
    notifier : Notifier, optional
        Receives the before and after notifications. Default is NullNotifier().
    stream : IO[str], optional
        Where all output goes. Default is whatever sys.stdout is at the time of
        writing.
    use_shell : bool, optional
        Run commands through the shell instead of splitting them into arguments.
        Default is False.
    """

    settings: Settings
    notifier: Notifier
    use_shell: bool
    last_execution: LastExecution | None

    def __init__(
        self,
        settings: Settings | None = None,
        notifier: Notifier | None = None,
        *,
        stream: IO[str] | None = None,
        use_shell: bool = False,
    ):
        self.settings = settings if settings is not None else Settings()
        self.notifier = notifier if notifier is not None else NullNotifier()
        self.use_shell = use_shell
        self.last_execution = None
        self._stream = stream

    @property
    def stream(self) -> IO[str]:
        return self._stream if self._stream is not None else sys.stdout

    def log(self, message: str):
        """Print message, with a timestamp unless in quiet mode."""
        if self.settings.quiet:
            print(message, file=self.stream)
        else:
            print(format_log_line(message), file=self.stream)

    def perform_work(self, command_or_options: CommandOrOptions, work: Work) -> Job:
        """
        Wrap work in the same logging and notifications as a command run by execute.
        Use this for work that isn't a plain shell command.

        Parameters
        ----------
        command_or_options : str | Mapping[str, Any]
            A command, or initial attributes for the Job.
        work : Work
            Called with the Job. Should set its exit_code and output.

        Returns
        -------
        Job
            The job, after work has been performed on it.

        Raises
        ------
        TypeError
            If command_or_options is neither a string nor a mapping, or if the mapping
            contains names that aren't Job attributes.
        """
        if isinstance(command_or_options, Mapping):
            options = dict(command_or_options)
        elif isinstance(command_or_options, str):
            options = {"command": command_or_options}
        else:
            raise TypeError("Should be a string or a mapping.")

        job = Job.from_mapping(options, self.settings)
        logger.debug("Performing work for %r", job)

        self._will_execute_command(job)
        work(job)
        self._did_execute_command(job)
        return job

    def execute(
        self, command_or_options: CommandOrOptions, callback: Work | None = None
    ) -> Job:
        """
        Run a command, echoing its output as it arrives, and report on it.

        The callback, if given, is called with the finished Job before the after
        logging and notification, so it can still change what is reported.
        """

        def work(job: Job):
            self._execute(job)
            if callback is not None:
                callback(job)

        return self.perform_work(command_or_options, work)

    def clear_console(self):
        if self.settings.clear_console:
            print(CLEAR_SCREEN, file=self.stream)

    def last_command_succeeded(self) -> bool:
        return self.last_execution is not None and bool(self.last_execution.status)

    def last_command_status(self) -> int | None:
        if self.last_execution is None:
            return None
        return int(self.last_execution.status)

    @property
    def last_command(self) -> str | None:
        return self.last_execution.command if self.last_execution else None

    def _execute(self, job: Job) -> Job:
        silent = self.settings.silent
        stream = self.stream

        if not silent:
            print(file=stream)

        try:
            with contextlib.nullcontext() if silent else unbuffered_output(stream):
                output, status = self._run_command(
                    job.command, None if silent else stream
                )
            job.output = output.strip()
            job.exit_code = int(status)
            self.last_execution = LastExecution(job.command, status)
        finally:
            if not silent:
                print("\n", file=stream)

        return job

    def _run_command(
        self, command: str | None, echo: IO[str] | None
    ) -> tuple[str, ExitCode]:
        try:
            if not command:
                raise ValueError("No command given")
            cmd = command if self.use_shell else split_command(command)
            process = subprocess_combined(cmd, shell=self.use_shell)
        except ValueError as e:
            return self._spawn_failed(command, e, COMMAND_SYNTAX_ERROR_EXIT_CODE, echo)
        except FileNotFoundError as e:
            return self._spawn_failed(command, e, COMMAND_NOT_FOUND_EXIT_CODE, echo)
        except OSError as e:
            return self._spawn_failed(
                command, e, COMMAND_NOT_EXECUTABLE_EXIT_CODE, echo
            )

        chunks: list[str] = []
        with contextlib.closing(process):
            for chunk in process:
                chunks.append(chunk)
                if echo is not None:
                    echo.write(chunk)
                    echo.flush()

        logger.debug("Command %s exited with %d", command, process.returncode)
        return "".join(chunks), ExitCode(process.returncode)

    def _spawn_failed(
        self,
        command: str | None,
        error: Exception,
        exit_code: int,
        echo: IO[str] | None,
    ) -> tuple[str, ExitCode]:
        logger.debug("Could not run command %s: %s", command, error)
        message = f"kicker: {command}: {error}"
        if echo is not None:
            echo.write(message)
            echo.flush()
        return message, ExitCode(exit_code)

    def _will_execute_command(self, job: Job):
        if self.settings.clear_console and self.settings.should_clear_screen:
            print(CLEAR_SCREEN, file=self.stream)
        self.settings.should_clear_screen = False

        if message := job.print_before:
            self.log(message)

        if notification := job.notify_before:
            self.notifier.notify(*notification)

    def _did_execute_command(self, job: Job):
        if message := job.print_after:
            print(message, file=self.stream)

        self.log("Success" if job.success else f"Failed ({job.exit_code})")

        if notification := job.notify_after:
            self.notifier.notify(*notification)
