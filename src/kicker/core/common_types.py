from dataclasses import dataclass

from kicker.system_helpers import ExitCode

Notification = tuple[str, str]
"""A (title, message) pair handed to a notifier."""


@dataclass
class LastExecution:
    """The most recently spawned command. Overwritten by every execution."""

    command: str | None
    status: ExitCode


COMMAND_NOT_FOUND_EXIT_CODE = 127
"""Exit code used when the executable of a command could not be found."""

COMMAND_NOT_EXECUTABLE_EXIT_CODE = 126
"""Exit code used when a command was found but could not be spawned."""

COMMAND_SYNTAX_ERROR_EXIT_CODE = 2
"""Exit code used when a command line could not be split, e.g. unbalanced quotes."""
