import datetime
import logging
import os

from kicker.output.output import TerminalStyle as TS

LOGGER_NAME = "kicker"
DEBUG_ENVIRONMENT_VARIABLE = "DEBUG_KICKER"


def __getattr__(name):
    if name == "logger":
        return logging.getLogger(LOGGER_NAME)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


class LogFormatter(logging.Formatter):
    """Formats records as `time | level | file:line | message`, with the level coloured
    unless colours are turned off."""

    LEVEL_COLORS = {
        "DEBUG": TS.Fg.BLUE,
        "INFO": TS.Fg.GREEN,
        "WARNING": TS.Fg.YELLOW,
        "ERROR": TS.Fg.RED,
        "CRITICAL": TS.Fg.RED + TS.BOLD,
    }

    def __init__(self, no_colors: bool = False):
        super().__init__(
            "%(asctime)s | %(levelname)s | %(filename)s:%(lineno)d | %(message)s"
        )
        self.no_colors = no_colors

    def format(self, record: logging.LogRecord) -> str:
        level = f"{record.levelname:<8}"
        if not self.no_colors:
            level = f"{self.LEVEL_COLORS.get(record.levelname, '')}{level}{TS.RESET}"
        # Copy so that other handlers see the original level name
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = level
        return super().format(record)


def setup_logging():
    """
    Configures the kicker logger from the DEBUG_KICKER environment variable.

    Unset or empty disables the logger. Any other value logs to stderr; values
    containing "file" also log to a file, and "silent" logs only to the file.
    """
    debug = str.lower(os.environ.get(DEBUG_ENVIRONMENT_VARIABLE, ""))

    logger = logging.getLogger(LOGGER_NAME)

    if not debug:
        logger.disabled = True
        return

    logger.disabled = False
    logger.setLevel(logging.DEBUG)

    if "silent" not in debug:
        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(logging.DEBUG)
        stream_handler.setFormatter(LogFormatter())
        logger.addHandler(stream_handler)

    # file or silent enables file debugging
    if "file" in debug or "silent" in debug:
        iso_datetime = datetime.datetime.now().isoformat(timespec="seconds")
        file_handler = logging.FileHandler(f"debug_{iso_datetime}.log")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(LogFormatter(no_colors=True))
        logger.addHandler(file_handler)

        # Create symlink to latest log
        latest_log_link = "debug_latest.log"
        if os.path.lexists(latest_log_link):
            os.unlink(latest_log_link)
        os.symlink(f"debug_{iso_datetime}.log", latest_log_link)

    logger.debug("Debug logging enabled")
