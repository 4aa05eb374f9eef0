import argparse
from pathlib import Path
import shutil
import sys
import textwrap

from argcomplete.finders import CompletionFinder

from kicker.output.output import output_plain

singular_options = {
    "--completions",
    "--dump-schema",
    "--help",
    "--version",
    "-h",
    "-v",
}


class KickerCompletionFinder(CompletionFinder):
    """
    Override _get_completions because we want custom completion patterns that are not
    expressed in argparse.
    """

    def _get_completions(
        self, comp_words, cword_prefix, cword_prequote, last_wordbreak_pos
    ) -> list[str]:
        # Stop completions if we already have a "singular" option, i.e. an option that
        # should not be followed by anything else.
        if set(comp_words) & singular_options:
            return []

        return super()._get_completions(
            comp_words, cword_prefix, cword_prequote, last_wordbreak_pos
        )


def do_completion(parser: argparse.ArgumentParser):
    completer = KickerCompletionFinder()
    completer(parser)


def generate_shell_completions(print_and_exit: bool):
    kicker_bin = Path(sys.argv[0])
    kicker_completions = kicker_bin.resolve().parent / "_kicker_completions.sh"
    if not kicker_completions.exists():
        import argcomplete.shell_integration

        with open(kicker_completions, "w") as f:
            f.write(argcomplete.shell_integration.shellcode([str(kicker_bin.name)]))

    if print_and_exit:
        terminal_cols, _ = shutil.get_terminal_size()
        indent_string = "# "
        width = min(terminal_cols, 80) - len(indent_string)
        description = f"""\
            A shell completions script has been generated in {kicker_completions}. It
            will pick up the kicker that is in PATH. Add the following line to your
            shell's startup script to load completions:
        """
        output_plain(
            textwrap.indent(
                textwrap.fill(
                    textwrap.dedent(description),
                    width=width,
                    break_long_words=False,
                    break_on_hyphens=False,
                ),
                indent_string,
            )
        )
        output_plain(f"\nsource {kicker_completions}")

        sys.exit(0)
