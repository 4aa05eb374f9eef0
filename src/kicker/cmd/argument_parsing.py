import argparse
from dataclasses import dataclass, field
import shlex
import shutil
import textwrap
from typing import Any

from argcomplete.completers import DirectoriesCompleter, FilesCompleter

from kicker.logutils import logger


@dataclass
class KickerNamespace:
    """Wrapper for the arguments parsed by argparse. Improves ergonomics when working
    with the arguments."""

    command: list[str]
    version: bool
    silent: bool | None
    quiet: bool | None
    clear: bool | None
    notifications: bool | None
    shell: bool | None
    config: str | None
    dump_schema: bool
    completions: bool
    watch: list[str] = field(default_factory=list)
    directory: list[str] = field(default_factory=list)


def command_from_words(words: list[str]) -> str | None:
    """
    Turn the command words from the command line into a command line. A single word is
    used as is, so that `kicker "make test"` works; several words are quoted and joined
    so that `kicker echo 'a b'` keeps its arguments intact.
    """
    if not words:
        return None
    if len(words) == 1:
        return words[0]
    return shlex.join(words)


class KickerHelpFormatter(argparse.RawDescriptionHelpFormatter):
    formatting_width = 80

    def __init__(self, prog):
        terminal_cols, terminal_rows = shutil.get_terminal_size()
        self.formatting_width = min(terminal_cols, self.formatting_width)

        indent_increment = 2
        max_help_position = 24

        super().__init__(
            prog, indent_increment, max_help_position, self.formatting_width
        )

    def _fill_text(self, text, width, indent):
        return fill_help_text(text, width, indent)


def fill_help_text(text: str, width: int, indent: str) -> str:
    # Assuming main description starts with a newline
    if text.startswith("\n"):
        return "\n".join(
            [
                "\n".join(
                    textwrap.wrap(
                        line, width=width, initial_indent=indent, subsequent_indent=indent
                    )
                )
                for line in text.splitlines()
            ]
        )
    return textwrap.fill(
        " ".join(text.split()),
        width,
        initial_indent=indent,
        subsequent_indent=indent,
    )


def create_argument_parser():
    logger.info("Creating argument parser")

    parser = argparse.ArgumentParser(
        prog="kicker",
        formatter_class=KickerHelpFormatter,
        description="""
Runs a command, echoes its output as it arrives and reports how it went, with timestamps and desktop notifications.

Run COMMAND once:
 %(prog)s COMMAND

Run COMMAND, then again every time something under PATH changes:
 %(prog)s -w PATH COMMAND
""",
    )

    parser._positionals.title = "POSITIONAL ARGUMENTS"
    parser._optionals.title = "OPTIONS"

    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        default=[],
        help="The command to run. A single argument is used as a complete command line.",
    )

    parser.add_argument(
        "-v", "--version", action="store_true", help="Show version string and exit."
    )

    output_group = parser.add_argument_group(
        "Output",
        "These override the corresponding settings in Kickerfile.toml.",
    )
    output_group.add_argument(
        "-s",
        "--silent",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Don't echo the command's output or notify before running it. The output of failed commands is printed afterwards.",
    )
    output_group.add_argument(
        "-q",
        "--quiet",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Don't prefix log lines with timestamps.",
    )
    output_group.add_argument(
        "-c",
        "--clear",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Clear the console before each run.",
    )
    output_group.add_argument(
        "--notifications",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Show desktop notifications.",
    )

    execution_group = parser.add_argument_group("Execution")
    execution_group.add_argument(
        "--shell",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Run the command through the shell instead of splitting it into arguments. Needed for pipes and redirections.",
    )
    # Use Any to get around type checking for argcomplete:
    arg: Any = execution_group.add_argument(
        "-w",
        "--watch",
        action="append",
        type=str,
        default=[],
        metavar="PATH",
        help="Run the command again when files under PATH change. Can be given multiple times.",
    )
    arg.completer = FilesCompleter()

    arg = execution_group.add_argument(
        "-C",
        "--directory",
        nargs=1,
        type=str,
        default=[],
        help="Change to the specified directory before doing anything else.",
    )
    arg.completer = DirectoriesCompleter()

    arg = execution_group.add_argument(
        "--config",
        type=str,
        default=None,
        metavar="FILE",
        help="Read the configuration from FILE instead of Kickerfile.toml.",
    )
    arg.completer = FilesCompleter(allowednames=["toml"])

    meta_group = parser.add_argument_group("Meta arguments")
    meta_group.add_argument(
        "--dump-schema",
        action="store_true",
        help="Generate a JSON Schema for Kickerfile.toml. The schema will be printed to stdout.",
    )
    meta_group.add_argument(
        "--completions",
        action="store_true",
        help="Output instructions for how to set up shell completions via the shell's startup script.",
    )

    return parser
