from __future__ import annotations

from typing import Optional, Protocol


class KeyValueStore(Protocol):
    def load(self, key: str) -> Optional[str]: ...
    def save(self, key: str, value: str) -> None: ...


class NotificationSink(Protocol):
    def notify(self, level: str, message: str) -> None: ...
