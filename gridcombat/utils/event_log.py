"""Thread-safe log of combat events (moves, attacks, deaths, end of combat)."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CombatEvent:
    """A single thing that happened during a round."""

    round: int          # zero-based index of the round being played
    category: str       # "move" | "attack" | "death" | "end"
    message: str
    unit_ids: tuple[int, ...] = ()


class EventLog:
    """Unbounded event log. The simulator appends; readers take copies.

    Guarded by a lock so boost trials on worker threads may share one log.
    """

    __slots__ = ("_buffer", "_lock")

    def __init__(self) -> None:
        self._buffer: deque[CombatEvent] = deque()
        self._lock = threading.Lock()

    def append(self, event: CombatEvent) -> None:
        with self._lock:
            self._buffer.append(event)

    def record(self, round_index: int, category: str, message: str, *unit_ids: int) -> None:
        self.append(CombatEvent(round_index, category, message, tuple(unit_ids)))

    def since_round(self, round_index: int) -> list[CombatEvent]:
        """Return all events with round >= *round_index*."""
        with self._lock:
            return [e for e in self._buffer if e.round >= round_index]

    def by_category(self, category: str) -> list[CombatEvent]:
        with self._lock:
            return [e for e in self._buffer if e.category == category]

    def all(self) -> list[CombatEvent]:
        with self._lock:
            return list(self._buffer)

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffer)

    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()
