"""CombatArena: test fixture for turn and round mechanics.

Builds a scenario from map text, lets tests tweak unit stats, runs rounds
and collects events for assertion.

Usage:
    arena = CombatArena("#EG#")
    arena.unit_at(1, 2).hp = 3
    arena.run_rounds(1)
    assert not arena.unit(1).alive
"""

from __future__ import annotations

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from gridcombat.config import CombatConfig
from gridcombat.core.board import format_board, parse_scenario
from gridcombat.core.enums import CombatState
from gridcombat.core.models import Position, Unit
from gridcombat.engine.pathfinding import Pathfinder
from gridcombat.engine.simulator import CombatResult, CombatSimulator
from gridcombat.engine.turn import TurnEngine
from gridcombat.utils.event_log import CombatEvent, EventLog


class CombatArena:
    """Small world with a full simulator pipeline.

    Set up units by hand, then step turns or rounds and inspect the result.
    """

    def __init__(
        self,
        text: str,
        abort_on_elf_death: bool = False,
        hit_points: int = 200,
        attack_power: int = 3,
        **config_overrides,
    ):
        scenario = parse_scenario(text, hit_points=hit_points, attack_power=attack_power)
        self.grid = scenario.grid
        self.units = scenario.units
        self.config = CombatConfig(**config_overrides)
        self.events = EventLog()
        self.sim = CombatSimulator(
            self.grid, self.units, self.config,
            abort_on_elf_death=abort_on_elf_death, events=self.events,
        )
        self.turns = TurnEngine(
            self.grid, self.units, Pathfinder(self.grid),
            abort_on_elf_death=abort_on_elf_death, events=self.events,
        )

    # -- access --

    def unit(self, idx: int) -> Unit:
        return self.units[idx]

    def unit_at(self, row: int, col: int) -> Unit:
        idx = self.units.at(Position(row, col))
        assert idx is not None, f"no living unit at ({row}, {col})"
        return self.units[idx]

    def board(self, show_hp: bool = True) -> str:
        return format_board(self.grid, self.units, show_hp=show_hp)

    def events_of(self, category: str) -> list[CombatEvent]:
        return self.events.by_category(category)

    # -- driving --

    def take_turn(self, row: int, col: int) -> CombatState:
        """Play the turn of the unit standing on (row, col)."""
        return self.turns.take_turn(self.unit_at(row, col).id)

    def run_rounds(self, count: int) -> CombatState:
        state = CombatState.CONTINUE
        for _ in range(count):
            state = self.sim.run_round()
            if state != CombatState.CONTINUE:
                break
        return state

    def run(self) -> CombatResult:
        return self.sim.run()
