import io

import pytest

from kicker.core.executor import Executor
from kicker.core.settings import Settings


class RecordingNotifier:
    def __init__(self):
        self.notifications: list[tuple[str, str]] = []

    def notify(self, title: str, message: str) -> None:
        self.notifications.append((title, message))


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def stream():
    return io.StringIO()


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def executor(settings, notifier, stream):
    return Executor(settings, notifier, stream=stream)


@pytest.fixture(autouse=True)
def no_debug_logging(monkeypatch):
    monkeypatch.delenv("DEBUG_KICKER", raising=False)
