"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import IntEnum, unique


@unique
class Tile(IntEnum):
    """Tile kinds on the grid."""

    OPEN = 0
    WALL = 1


@unique
class Faction(IntEnum):
    """The two sides of a fight."""

    GOBLIN = 0
    ELF = 1

    @property
    def enemy(self) -> Faction:
        return Faction.ELF if self is Faction.GOBLIN else Faction.GOBLIN

    @property
    def symbol(self) -> str:
        return "G" if self is Faction.GOBLIN else "E"


@unique
class CombatState(IntEnum):
    """Signals produced by a turn or a round."""

    CONTINUE = 0
    COMBAT_ENDS = 1   # one faction has no living units
    ELF_DIED = 2      # only raised in abort-on-elf-death mode
