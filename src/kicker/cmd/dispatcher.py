import os

from kicker.cmd.argument_parsing import (
    KickerNamespace,
    command_from_words,
    create_argument_parser,
)
from kicker.cmd.completions import do_completion, generate_shell_completions
from kicker.cmd.configuration import ConfigurationError, dump_schema, read_config_file
from kicker.cmd.datastructures import (
    KickerContext,
    get_paths_to_watch,
    init_kicker_context,
)
from kicker.logutils import logger
from kicker.output.output import output_error, output_info
from kicker.system_helpers import change_dir


def print_version():
    import importlib.metadata

    output_info(f"kicker {importlib.metadata.version('kicker')}")


def kicker(argv: list[str] | None = None) -> int:
    """Entry point for the Kicker command line interface."""
    parser = create_argument_parser()
    do_completion(parser)
    args = KickerNamespace(**vars(parser.parse_args(argv)))

    if args.completions:
        generate_shell_completions(True)

    if args.dump_schema:
        dump_schema()
        return 0

    if args.version:
        print_version()
        return 0

    directory = args.directory[0] if args.directory else None
    if directory:
        output_info(f"Entering directory '{directory}'")

    with change_dir(directory):
        try:
            configuration = read_config_file(args.config)
        except ConfigurationError as e:
            output_error(str(e))
            return 1

        command = command_from_words(args.command)
        if command is None:
            output_error("No command given.")
            parser.print_usage()
            return 1

        ctx = init_kicker_context(configuration, args)
        return run_command(ctx, command)


def is_watchable(path: str) -> bool:
    """Existing paths can be watched, as can files yet to be created in an existing
    directory."""
    path = os.path.realpath(path)
    return os.path.exists(path) or os.path.isdir(os.path.dirname(path))


def run_command(ctx: KickerContext, command: str) -> int:
    """
    Run command once, or, if there are paths to watch, again every time something
    changes under them. Returns the exit code of the last run; in watch mode this only
    returns through an exception such as KeyboardInterrupt.
    """
    paths_to_watch = get_paths_to_watch(ctx)
    logger.info("Running %s, watching %s", command, paths_to_watch)

    unwatchable = sorted(p for p in paths_to_watch if not is_watchable(p))
    if unwatchable:
        output_error(f"Can't watch {', '.join(unwatchable)}: no such directory.")
        return 1

    while True:
        job = ctx.executor.execute(command)
        if not paths_to_watch:
            return job.exit_code

        from kicker.cmd.watch import do_watch

        output_info("Watching for changes")
        do_watch(paths_to_watch)
        ctx.settings.should_clear_screen = True
