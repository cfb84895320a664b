"""TurnEngine: how one unit takes its turn.

The stages always run in this order:
  1. Adjacency check: an enemy next to the mover skips the move
  2. Move: at most one square towards the nearest candidate destination
  3. Attack: weakest adjacent enemy, ties broken by reading order
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gridcombat.core.enums import CombatState, Faction

if TYPE_CHECKING:
    from gridcombat.core.grid import GridMap
    from gridcombat.core.models import Position
    from gridcombat.core.registry import UnitRegistry
    from gridcombat.engine.pathfinding import Pathfinder
    from gridcombat.utils.event_log import EventLog

logger = logging.getLogger(__name__)


class TurnEngine:
    """Executes single turns against a shared grid and unit registry."""

    __slots__ = ("_grid", "_units", "_pathfinder", "_abort_on_elf_death", "_events")

    def __init__(
        self,
        grid: GridMap,
        units: UnitRegistry,
        pathfinder: Pathfinder,
        abort_on_elf_death: bool = False,
        events: EventLog | None = None,
    ) -> None:
        self._grid = grid
        self._units = units
        self._pathfinder = pathfinder
        self._abort_on_elf_death = abort_on_elf_death
        self._events = events

    # -- queries --

    def adjacent_enemies(self, idx: int) -> list[int]:
        """Living enemies on the four squares around unit *idx*."""
        units = self._units
        mover = units[idx]
        result: list[int] = []
        for n in self._grid.neighbors(mover.pos):
            other = units.at(n)
            if other is not None and units[other].faction != mover.faction:
                result.append(other)
        return result

    def candidate_destinations(self, faction: Faction) -> set[Position]:
        """Open, unoccupied squares adjacent to a living unit of *faction*."""
        grid = self._grid
        units = self._units
        squares: set[Position] = set()
        for enemy_idx in units.living(faction):
            for n in grid.neighbors(units[enemy_idx].pos):
                if grid.is_open(n) and units.at(n) is None:
                    squares.add(n)
        return squares

    def select_target(self, idx: int) -> int | None:
        """Adjacent enemy with the fewest hit points, then first in reading order."""
        enemies = self.adjacent_enemies(idx)
        if not enemies:
            return None
        units = self._units
        return min(enemies, key=lambda e: (units[e].hp, units[e].pos))

    # -- turn --

    def take_turn(self, idx: int, round_index: int = 0) -> CombatState:
        units = self._units
        mover = units[idx]

        if not self.adjacent_enemies(idx):
            enemy = mover.faction.enemy
            if units.count_alive(enemy) == 0:
                logger.debug("Round %d: %r finds no enemies left", round_index, mover)
                self._record(round_index, "end", f"{mover!r} finds no {enemy.name.lower()}s left", idx)
                return CombatState.COMBAT_ENDS
            self._move(idx, enemy, round_index)

        target = self.select_target(idx)
        if target is None:
            return CombatState.CONTINUE
        return self._attack(idx, target, round_index)

    def _move(self, idx: int, enemy: Faction, round_index: int) -> None:
        units = self._units
        mover = units[idx]
        destinations = self.candidate_destinations(enemy)
        step = self._pathfinder.next_step(mover.pos, destinations, units.occupied())
        if step is None:
            return
        old_pos = mover.pos
        units.move(idx, step)
        self._record(round_index, "move", f"{mover!r} moved from {old_pos}", idx)

    def _attack(self, idx: int, target: int, round_index: int) -> CombatState:
        units = self._units
        attacker = units[idx]
        defender = units[target]
        died = units.apply_damage(target, attacker.attack)
        self._record(
            round_index, "attack",
            f"{attacker.faction.symbol}#{idx} hit {defender.faction.symbol}#{target} for {attacker.attack}",
            idx, target,
        )
        if not died:
            return CombatState.CONTINUE

        logger.debug("Round %d: %r killed %r", round_index, attacker, defender)
        self._record(round_index, "death", f"{defender!r} killed by {attacker.faction.symbol}#{idx}", target, idx)
        if self._abort_on_elf_death and defender.faction == Faction.ELF:
            return CombatState.ELF_DIED
        return CombatState.CONTINUE

    def _record(self, round_index: int, category: str, message: str, *unit_ids: int) -> None:
        if self._events is not None:
            self._events.record(round_index, category, message, *unit_ids)
