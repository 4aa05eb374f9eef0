#!/usr/bin/env python3

from pathlib import Path

from kicker.output.output import TerminalStyle as TS
from kicker.output.output import output_error
from src.kicker.system_helpers import call

directories = [
    Path("src/kicker"),
    Path("tests"),
]
mypy = Path(".venv/bin/mypy")

exit_code = 0

for directory in directories:
    print(f"\n{TS.BOLD}=== Running mypy in {directory} ==={TS.RESET}")
    s = call(
        f"{mypy} --no-warn-no-return --check-untyped-defs --ignore-missing-imports --pretty {directory}"
    )
    if not s:
        output_error(f"Failed to run mypy in {directory}")
        exit_code |= s

exit(exit_code)
