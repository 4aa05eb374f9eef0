from dataclasses import dataclass


@dataclass
class Settings:
    """
    Flags shared between the executor, the jobs it creates and the watcher that drives
    it. Owned by the caller; the executor reads them and resets should_clear_screen.
    """

    silent: bool = False
    """Don't echo command output or send the before notification. Output of failed
    commands is printed after the fact instead."""

    quiet: bool = False
    """Don't prefix log lines with a timestamp."""

    clear_console: bool = False
    """Allow clearing the console before a job runs."""

    should_clear_screen: bool = False
    """Set by the watcher when a new run starts; cleared by the executor after the
    console has been cleared (or clearing was skipped)."""
