from dataclasses import dataclass

from kicker.cmd.argument_parsing import KickerNamespace
from kicker.cmd.configuration import KickerConfig
from kicker.core.executor import Executor
from kicker.core.settings import Settings
from kicker.notification import DesktopNotifier, NullNotifier


@dataclass
class KickerContext:
    """Container for various state"""

    executor: Executor
    settings: Settings
    configuration: KickerConfig
    args: KickerNamespace


def override(configured: bool, given: bool | None) -> bool:
    """Command line flags win over the configuration file when they are given."""
    return configured if given is None else given


def settings_from(configuration: KickerConfig, args: KickerNamespace) -> Settings:
    return Settings(
        silent=override(configuration.silent, args.silent),
        quiet=override(configuration.quiet, args.quiet),
        clear_console=override(configuration.clear_console, args.clear),
        should_clear_screen=True,
    )


def init_kicker_context(
    configuration: KickerConfig, args: KickerNamespace
) -> KickerContext:
    settings = settings_from(configuration, args)
    notifier = (
        DesktopNotifier()
        if override(configuration.notifications, args.notifications)
        else NullNotifier()
    )
    executor = Executor(
        settings,
        notifier,
        use_shell=override(configuration.shell, args.shell),
    )
    return KickerContext(executor, settings, configuration, args)


def get_paths_to_watch(ctx: KickerContext) -> set[str]:
    return {*ctx.configuration.watch, *ctx.args.watch}
