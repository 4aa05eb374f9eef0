"""
Runs commands for file-watching automation and reports how they went.
"""

# PYTHON_ARGCOMPLETE_OK

import sys

from kicker.cmd.dispatcher import kicker
from kicker.logutils import logger, setup_logging
from kicker.output.output import output_warning


def main():
    setup_logging()
    logger.info("Starting")
    try:
        return kicker()
    except KeyboardInterrupt:
        output_warning("Interrupted by user. Aborting.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
