"""Unit registry: the single source of truth for combatants.

Units are kept in an append-only list addressed by stable index; dead units
stay in place with ``alive=False`` so indices captured at round start remain
valid. A position -> index occupancy map caches where living units stand.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, KeysView

from gridcombat.core.enums import Faction
from gridcombat.core.errors import InternalConsistencyError
from gridcombat.core.models import DEFAULT_ATTACK_POWER, DEFAULT_HIT_POINTS, Position, Unit

if TYPE_CHECKING:
    from gridcombat.core.grid import GridMap


class UnitRegistry:
    """Arena of units plus an incrementally maintained occupancy index."""

    __slots__ = ("_units", "_occupancy")

    def __init__(self, units: list[Unit] | None = None) -> None:
        self._units: list[Unit] = []
        self._occupancy: dict[Position, int] = {}
        for unit in units or ():
            self._append(unit.copy())

    def _append(self, unit: Unit) -> int:
        idx = len(self._units)
        if unit.id != idx:
            unit.id = idx
        if unit.alive:
            if unit.pos in self._occupancy:
                raise InternalConsistencyError(
                    f"two living units placed on {unit.pos}"
                )
            self._occupancy[unit.pos] = idx
        self._units.append(unit)
        return idx

    def add(
        self,
        faction: Faction,
        pos: Position,
        hp: int = DEFAULT_HIT_POINTS,
        attack: int = DEFAULT_ATTACK_POWER,
    ) -> int:
        return self._append(Unit(id=len(self._units), faction=faction, pos=pos, hp=hp, attack=attack))

    # -- access --

    def __len__(self) -> int:
        return len(self._units)

    def __iter__(self) -> Iterator[Unit]:
        return iter(self._units)

    def __getitem__(self, idx: int) -> Unit:
        return self._units[idx]

    def at(self, pos: Position) -> int | None:
        """Index of the living unit on *pos*, if any."""
        return self._occupancy.get(pos)

    def occupied(self) -> KeysView[Position]:
        """Live view of squares holding a living unit."""
        return self._occupancy.keys()

    def living(self, faction: Faction | None = None) -> list[int]:
        return [
            u.id for u in self._units
            if u.alive and (faction is None or u.faction == faction)
        ]

    def living_in_reading_order(self) -> list[int]:
        """Snapshot of living unit indices sorted by position."""
        return sorted(self.living(), key=lambda idx: self._units[idx].pos)

    def count_alive(self, faction: Faction) -> int:
        return sum(1 for u in self._units if u.alive and u.faction == faction)

    def count_dead(self, faction: Faction) -> int:
        return sum(1 for u in self._units if not u.alive and u.faction == faction)

    def total_hit_points(self) -> int:
        return sum(u.hp for u in self._units if u.alive)

    # -- mutation --

    def move(self, idx: int, new_pos: Position) -> None:
        unit = self._units[idx]
        if not unit.alive:
            raise InternalConsistencyError(f"dead unit {unit!r} asked to move")
        holder = self._occupancy.get(new_pos)
        if holder is not None:
            raise InternalConsistencyError(
                f"{unit!r} cannot move onto {new_pos}, held by {self._units[holder]!r}"
            )
        if self._occupancy.get(unit.pos) != idx:
            raise InternalConsistencyError(f"occupancy index lost track of {unit!r}")
        del self._occupancy[unit.pos]
        unit.pos = new_pos
        self._occupancy[new_pos] = idx

    def apply_damage(self, idx: int, amount: int) -> bool:
        """Subtract *amount* hit points. Returns True if the unit died."""
        unit = self._units[idx]
        if not unit.alive:
            raise InternalConsistencyError(f"dead unit {unit!r} was attacked")
        unit.hp -= amount
        if unit.hp > 0:
            return False
        unit.alive = False
        del self._occupancy[unit.pos]
        return True

    # -- copy --

    def copy(self) -> UnitRegistry:
        return UnitRegistry(self._units)

    def with_attack_boost(self, faction: Faction, boost: int) -> UnitRegistry:
        """Fresh copy with every *faction* unit's attack raised by *boost*."""
        new = self.copy()
        for unit in new._units:
            if unit.faction == faction:
                unit.attack += boost
        return new

    # -- invariants --

    def verify(self, grid: GridMap) -> None:
        """Raise InternalConsistencyError if the occupancy cache disagrees with the units."""
        for pos, idx in self._occupancy.items():
            unit = self._units[idx]
            if not unit.alive:
                raise InternalConsistencyError(f"occupancy index references dead unit {unit!r}")
            if unit.pos != pos:
                raise InternalConsistencyError(f"occupancy index has {unit!r} at {pos}")
        for unit in self._units:
            if not unit.alive:
                continue
            if self._occupancy.get(unit.pos) != unit.id:
                raise InternalConsistencyError(f"{unit!r} missing from occupancy index")
            if not grid.is_open(unit.pos):
                raise InternalConsistencyError(f"{unit!r} stands on a wall")
