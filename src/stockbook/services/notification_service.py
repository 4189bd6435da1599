from __future__ import annotations

import logging
from dataclasses import dataclass

LEVEL_INFO = "info"
LEVEL_ERROR = "error"

log = logging.getLogger("stockbook.notifications")


@dataclass(frozen=True)
class Notification:
    level: str
    message: str


class LoggingNotifier:
    def notify(self, level: str, message: str) -> None:
        if level == LEVEL_ERROR:
            log.warning(message)
        else:
            log.info(message)


class RecordingNotifier:
    """Keeps every notification in order; UIs can drain it after each action."""

    def __init__(self):
        self.items: list[Notification] = []

    def notify(self, level: str, message: str) -> None:
        self.items.append(Notification(level, message))

    def drain(self) -> list[Notification]:
        items, self.items = self.items, []
        return items

    def messages(self, level: str | None = None) -> list[str]:
        return [n.message for n in self.items if level is None or n.level == level]
