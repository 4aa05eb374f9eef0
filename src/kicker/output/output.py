import sys

isatty = sys.stdout.isatty()

CLEAR_SCREEN = "\033[H\033[2J"
"""Moves the cursor home and clears the screen. Printed regardless of isatty."""


class TerminalStyle:
    """Terminal Text Styling"""

    RESET = "\033[0m" if isatty else ""
    BOLD = "\033[1m" if isatty else ""
    NOBOLD = "\033[22m" if isatty else ""
    DIM = "\033[2m" if isatty else ""

    class Fg:
        """Foreground Text Color"""

        RED = "\033[31m" if isatty else ""
        GREEN = "\033[32m" if isatty else ""
        YELLOW = "\033[33m" if isatty else ""
        BLUE = "\033[34m" if isatty else ""
        MAGENTA = "\033[35m" if isatty else ""
        CYAN = "\033[36m" if isatty else ""
        WHITE = "\033[37m" if isatty else ""
        RESET = "\033[39m" if isatty else ""

        BRIGHT_RED = "\033[91m" if isatty else ""
        BRIGHT_GREEN = "\033[92m" if isatty else ""
        BRIGHT_YELLOW = "\033[93m" if isatty else ""
        BRIGHT_CYAN = "\033[96m" if isatty else ""


STATUS_TEXT_FIELD_WIDTH = 10


kicker_prefix_string = f"{TerminalStyle.Fg.BRIGHT_CYAN}{'kicker >>>':<{STATUS_TEXT_FIELD_WIDTH}}{TerminalStyle.Fg.RESET}{TerminalStyle.NOBOLD}"


def output_info(s: str):
    print(
        f"{kicker_prefix_string} {TerminalStyle.Fg.BRIGHT_CYAN}{s}{TerminalStyle.Fg.RESET}"
    )


def output_warning(s: str):
    print(
        f"{kicker_prefix_string} {TerminalStyle.Fg.BRIGHT_YELLOW}{s}{TerminalStyle.Fg.RESET}"
    )


def output_error(s: str):
    print(
        f"{kicker_prefix_string} {TerminalStyle.Fg.BRIGHT_RED}{s}{TerminalStyle.Fg.RESET}"
    )


def output_ok(s: str):
    print(
        f"{kicker_prefix_string} {TerminalStyle.Fg.BRIGHT_GREEN}{s}{TerminalStyle.Fg.RESET}"
    )


def output_plain(s: str):
    print(s)
