from __future__ import annotations

from typing import Optional


class MemoryKeyValueStore:
    """Process-local store; nothing survives the interpreter."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def load(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def save(self, key: str, value: str) -> None:
        self._data[key] = str(value)
