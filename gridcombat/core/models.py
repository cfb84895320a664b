"""Core data models: Position, Unit."""

from __future__ import annotations

from dataclasses import dataclass

from gridcombat.core.enums import Faction

DEFAULT_HIT_POINTS = 200
DEFAULT_ATTACK_POWER = 3


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Immutable grid coordinate.

    Field order makes the natural ordering equal to reading order:
    top row first, then left to right within a row.
    """

    row: int = 0
    col: int = 0

    def __add__(self, other: Position) -> Position:
        return Position(self.row + other.row, self.col + other.col)

    def __repr__(self) -> str:
        return f"({self.row}, {self.col})"


# Neighbor offsets in enumeration order: up, left, right, down
NEIGHBOR_OFFSETS: tuple[Position, ...] = (
    Position(-1, 0),
    Position(0, -1),
    Position(0, 1),
    Position(1, 0),
)


@dataclass(slots=True)
class Unit:
    """A single combatant. Mutated in place by the turn engine."""

    id: int
    faction: Faction
    pos: Position
    hp: int = DEFAULT_HIT_POINTS
    attack: int = DEFAULT_ATTACK_POWER
    alive: bool = True

    def copy(self) -> Unit:
        return Unit(
            id=self.id, faction=self.faction, pos=self.pos,
            hp=self.hp, attack=self.attack, alive=self.alive,
        )

    def __repr__(self) -> str:
        state = "" if self.alive else " dead"
        return f"{self.faction.symbol}#{self.id}@{self.pos} hp={self.hp}{state}"
