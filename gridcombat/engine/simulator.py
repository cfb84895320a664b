"""CombatSimulator: drives rounds until one side is wiped out.

Round cycle:
  1. Snapshot living units in reading order of their round-start positions
  2. Each snapshot unit still alive takes one turn
  3. A turn signalling COMBAT_ENDS or ELF_DIED stops the round immediately;
     that round does not count as completed
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from gridcombat.config import CombatConfig
from gridcombat.core.enums import CombatState, Faction
from gridcombat.core.errors import CombatStalledError
from gridcombat.engine.outcome import compute_outcome
from gridcombat.engine.pathfinding import Pathfinder
from gridcombat.engine.turn import TurnEngine

if TYPE_CHECKING:
    from gridcombat.core.grid import GridMap
    from gridcombat.core.registry import UnitRegistry
    from gridcombat.utils.event_log import EventLog
    from gridcombat.utils.replay import ReplayRecorder

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CombatResult:
    """Final state of a finished combat."""

    state: CombatState
    completed_rounds: int
    hit_points: int
    outcome: int
    winner: Faction | None      # None when the run was aborted by an elf death
    elf_deaths: int
    goblin_deaths: int
    units: UnitRegistry

    @property
    def flawless_elf_victory(self) -> bool:
        return (
            self.state == CombatState.COMBAT_ENDS
            and self.winner == Faction.ELF
            and self.elf_deaths == 0
        )


class CombatSimulator:
    """Owns one grid + registry pair for the duration of a combat."""

    __slots__ = (
        "_config",
        "_grid",
        "_units",
        "_turns",
        "_recorder",
        "completed_rounds",
        "round_order",
    )

    def __init__(
        self,
        grid: GridMap,
        units: UnitRegistry,
        config: CombatConfig | None = None,
        abort_on_elf_death: bool = False,
        events: EventLog | None = None,
        recorder: ReplayRecorder | None = None,
    ) -> None:
        self._config = config or CombatConfig()
        self._grid = grid
        self._units = units
        self._turns = TurnEngine(
            grid, units, Pathfinder(grid),
            abort_on_elf_death=abort_on_elf_death, events=events,
        )
        self._recorder = recorder
        self.completed_rounds = 0
        self.round_order: list[int] = []

    @property
    def units(self) -> UnitRegistry:
        return self._units

    def run_round(self) -> CombatState:
        """Play one round. Only a fully played round is counted."""
        units = self._units
        if self._config.verify_invariants:
            units.verify(self._grid)

        order = units.living_in_reading_order()
        self.round_order = order
        for idx in order:
            if not units[idx].alive:
                continue
            state = self._turns.take_turn(idx, self.completed_rounds)
            if state != CombatState.CONTINUE:
                logger.debug(
                    "Round %d interrupted by %s", self.completed_rounds + 1, state.name,
                )
                return state

        self.completed_rounds += 1
        logger.debug(
            "Round %d complete: %d goblins, %d elves alive",
            self.completed_rounds,
            units.count_alive(Faction.GOBLIN),
            units.count_alive(Faction.ELF),
        )
        return CombatState.CONTINUE

    def run(self) -> CombatResult:
        """Play rounds until combat ends (or an elf dies in abort mode)."""
        state = CombatState.CONTINUE
        while state == CombatState.CONTINUE:
            if self.completed_rounds >= self._config.max_rounds:
                raise CombatStalledError(
                    f"combat still running after {self.completed_rounds} rounds"
                )
            state = self.run_round()
            if self._recorder is not None:
                self._recorder.record_round(self.completed_rounds, self._units, state.name)

        result = self._result(state)
        logger.info(
            "Combat finished (%s) after %d full rounds: winner=%s hp=%d outcome=%d",
            state.name, result.completed_rounds,
            result.winner.name if result.winner is not None else "-",
            result.hit_points, result.outcome,
        )
        return result

    def _result(self, state: CombatState) -> CombatResult:
        units = self._units
        winner: Faction | None = None
        if state == CombatState.COMBAT_ENDS:
            for faction in Faction:
                if units.count_alive(faction) > 0:
                    winner = faction
        return CombatResult(
            state=state,
            completed_rounds=self.completed_rounds,
            hit_points=units.total_hit_points(),
            outcome=compute_outcome(self.completed_rounds, units),
            winner=winner,
            elf_deaths=units.count_dead(Faction.ELF),
            goblin_deaths=units.count_dead(Faction.GOBLIN),
            units=units,
        )


def simulate(
    grid: GridMap,
    units: UnitRegistry,
    config: CombatConfig | None = None,
    events: EventLog | None = None,
    recorder: ReplayRecorder | None = None,
) -> CombatResult:
    """Run a plain combat on a copy of *units* and return its result."""
    sim = CombatSimulator(grid, units.copy(), config, events=events, recorder=recorder)
    return sim.run()
