"""Failure notifiers: where user-facing error messages are sent."""

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class Notifier(ABC):
    """Fire-and-forget sink for user-facing failure messages."""

    @abstractmethod
    def notify(self, message: str) -> None:
        """Surface ``message`` to the user."""


class LoggingNotifier(Notifier):
    """Writes messages to the log at WARNING level."""

    def __init__(self, name: str = "listing") -> None:
        self._logger = logger.getChild(name)

    def notify(self, message: str) -> None:
        self._logger.warning("%s", message)


class RecordingNotifier(Notifier):
    """Keeps every message in order, e.g. for a summary at the end of a run."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def notify(self, message: str) -> None:
        self.messages.append(message)
