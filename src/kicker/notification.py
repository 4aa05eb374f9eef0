"""
Notifiers that the executor hands (title, message) pairs to before and after a job.
"""

from typing import Any, Protocol

from kicker.logutils import logger

APP_NAME = "Kicker"
MAX_MESSAGE_LENGTH = 256


class Notifier(Protocol):
    def notify(self, title: str, message: str) -> None: ...


class NullNotifier:
    """Drops all notifications."""

    def notify(self, title: str, message: str) -> None:
        logger.debug("Dropping notification: %s", title)


class DesktopNotifier:
    """
    Shows desktop notifications through plyer. If plyer has no backend for the current
    platform, or the backend fails (e.g. no D-Bus session bus), a warning is logged once
    and further notifications are dropped.

    Parameters
    ----------
    backend : optional
        Object with a plyer-compatible notify(title=, message=, app_name=, timeout=)
        method. Default is plyer.notification, imported on first use.
    timeout : int, optional
        Seconds to show the notification for, where the platform supports it.
    """

    def __init__(self, backend: Any = None, timeout: int = 5):
        self.backend = backend
        self.timeout = timeout
        self.enabled = True

    def notify(self, title: str, message: str) -> None:
        if not self.enabled:
            return

        if self.backend is None:
            from plyer import notification  # type: ignore

            self.backend = notification

        if len(message) > MAX_MESSAGE_LENGTH:
            message = message[: MAX_MESSAGE_LENGTH - 3] + "..."

        logger.debug("Notifying: %s", title)
        try:
            self.backend.notify(
                title=title,
                message=message,
                app_name=APP_NAME,
                timeout=self.timeout,
            )
        except NotImplementedError:
            logger.warning("No notification backend available, disabling notifications")
            self.enabled = False
        except Exception as e:
            logger.warning("Notification failed, disabling notifications: %s", e)
            self.enabled = False
