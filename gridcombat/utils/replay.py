"""Replay serialization: per-round unit states for offline inspection."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from gridcombat.core.registry import UnitRegistry

logger = logging.getLogger(__name__)


class ReplayRecorder:
    """Accumulates round states and flushes them to a JSON replay file."""

    __slots__ = ("_path", "_rounds", "_board")

    def __init__(self, path: str | Path, board: str = "") -> None:
        self._path = Path(path)
        self._board = board
        self._rounds: list[dict[str, Any]] = []

    @property
    def rounds(self) -> list[dict[str, Any]]:
        return self._rounds

    def record_round(self, completed_rounds: int, units: UnitRegistry, state: str) -> None:
        units_snapshot = [
            {
                "id": u.id,
                "faction": u.faction.name.lower(),
                "pos": [u.pos.row, u.pos.col],
                "hp": u.hp,
                "attack": u.attack,
            }
            for u in units
            if u.alive
        ]
        self._rounds.append(
            {
                "completed_rounds": completed_rounds,
                "state": state,
                "units": units_snapshot,
            }
        )

    def flush(self) -> None:
        """Write accumulated data to disk."""
        replay = {
            "version": "1.0",
            "initial_board": self._board.splitlines(),
            "total_rounds": len(self._rounds),
            "rounds": self._rounds,
        }
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(replay, indent=2), encoding="utf-8")
        logger.info("Replay saved to %s (%d rounds)", self._path, len(self._rounds))
