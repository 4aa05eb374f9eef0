from .core.executor import Executor
from .core.job import Job, attribute_with_default
from .core.settings import Settings
from .notification import DesktopNotifier, Notifier, NullNotifier
from .system_helpers import ExitCode

__all__ = [
    "DesktopNotifier",
    "Executor",
    "ExitCode",
    "Job",
    "Notifier",
    "NullNotifier",
    "Settings",
    "attribute_with_default",
]
