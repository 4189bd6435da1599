from __future__ import annotations

from typing import Iterable

from stockbook.domain.models import Movement


class MovementLedger:
    """Append-only sequence of recorded movements."""

    def __init__(self, movements: Iterable[Movement] = ()):
        self._entries: list[Movement] = list(movements)

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, movement: Movement) -> None:
        self._entries.append(movement)

    def all(self) -> list[Movement]:
        return list(self._entries)

    def recent(self, limit: int) -> list[Movement]:
        if limit <= 0:
            return []
        return list(reversed(self._entries[-limit:]))
