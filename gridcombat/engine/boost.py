"""BoostSearch: minimal elf attack boost for a victory without elf losses.

Every trial re-runs the combat from a fresh copy of the initial units with
all elf attack powers raised by the boost, aborting at the first elf death.
A larger boost never turns a flawless elf victory into a loss, so both the
plain linear scan and the bisecting strategy find the same minimum.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import TYPE_CHECKING

from gridcombat.config import CombatConfig
from gridcombat.core.enums import Faction
from gridcombat.core.errors import NoQualifyingBoostError
from gridcombat.engine.simulator import CombatResult, CombatSimulator

if TYPE_CHECKING:
    from gridcombat.core.grid import GridMap
    from gridcombat.core.registry import UnitRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BoostTrial:
    boost: int
    result: CombatResult

    @property
    def succeeded(self) -> bool:
        return self.result.flawless_elf_victory


@dataclass(frozen=True, slots=True)
class BoostResult:
    """The accepted trial plus how much searching it took."""

    boost: int
    elf_attack: int
    result: CombatResult
    trials: int

    @property
    def outcome(self) -> int:
        return self.result.outcome


class BoostSearch:
    """Searches elf attack boosts against one initial configuration."""

    __slots__ = ("_grid", "_units", "_config", "_trials")

    def __init__(
        self,
        grid: GridMap,
        units: UnitRegistry,
        config: CombatConfig | None = None,
    ) -> None:
        self._grid = grid
        self._units = units.copy()
        self._config = config or CombatConfig()
        self._trials: dict[int, BoostTrial] = {}

    @property
    def trials_run(self) -> int:
        return len(self._trials)

    def upper_bound(self) -> int:
        """Smallest boost at which every elf hit kills any goblin outright.

        No larger boost changes how a fight plays out, so the search stops here.
        """
        units = self._units
        elves = [u for u in units if u.faction == Faction.ELF]
        if not elves:
            raise NoQualifyingBoostError("scenario has no elves")
        goblin_hp = [u.hp for u in units if u.faction == Faction.GOBLIN]
        if not goblin_hp:
            return 0
        weakest_attack = min(u.attack for u in elves)
        return max(0, max(goblin_hp) - weakest_attack)

    def trial(self, boost: int) -> BoostTrial:
        """Run (or recall) the combat for one boost value."""
        cached = self._trials.get(boost)
        if cached is not None:
            return cached
        units = self._units.with_attack_boost(Faction.ELF, boost)
        sim = CombatSimulator(self._grid, units, self._config, abort_on_elf_death=True)
        result = sim.run()
        trial = BoostTrial(boost=boost, result=result)
        self._trials[boost] = trial
        logger.info(
            "Boost %d: %s after %d full rounds",
            boost, "elves win flawlessly" if trial.succeeded else result.state.name,
            result.completed_rounds,
        )
        return trial

    def search(self) -> BoostResult:
        bound = self.upper_bound()
        if self._config.boost_strategy == "binary":
            trial = self._binary(bound)
        else:
            trial = self._linear(bound)
        elf_attack = min(
            u.attack for u in self._units if u.faction == Faction.ELF
        ) + trial.boost
        logger.info(
            "Minimal boost %d (elf attack %d) found after %d trials: outcome=%d",
            trial.boost, elf_attack, self.trials_run, trial.result.outcome,
        )
        return BoostResult(
            boost=trial.boost,
            elf_attack=elf_attack,
            result=trial.result,
            trials=self.trials_run,
        )

    # -- strategies --

    def _linear(self, bound: int) -> BoostTrial:
        workers = self._config.boost_workers

        # Fast path: a single worker runs trials inline
        if workers <= 1:
            for boost in range(bound + 1):
                trial = self.trial(boost)
                if trial.succeeded:
                    return trial
            raise NoQualifyingBoostError(f"no boost up to {bound} avoids elf deaths")

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="boost-trial") as executor:
            for start in range(0, bound + 1, workers):
                window = range(start, min(start + workers, bound + 1))
                trials = list(executor.map(self._run_detached, window))
                for trial in trials:
                    self._trials[trial.boost] = trial
                winners = [t for t in trials if t.succeeded]
                if winners:
                    return min(winners, key=lambda t: t.boost)
        raise NoQualifyingBoostError(f"no boost up to {bound} avoids elf deaths")

    def _run_detached(self, boost: int) -> BoostTrial:
        """Worker-thread trial that leaves the shared cache alone."""
        units = self._units.with_attack_boost(Faction.ELF, boost)
        sim = CombatSimulator(self._grid, units, self._config, abort_on_elf_death=True)
        return BoostTrial(boost=boost, result=sim.run())

    def _binary(self, bound: int) -> BoostTrial:
        if self.trial(0).succeeded:
            return self._trials[0]
        if not self.trial(bound).succeeded:
            raise NoQualifyingBoostError(f"no boost up to {bound} avoids elf deaths")

        # Exponential probe keeps trials cheap when the answer is small
        failing, passing = 0, bound
        probe = 1
        while probe < bound:
            if self.trial(probe).succeeded:
                passing = probe
                break
            failing = probe
            probe *= 2

        while passing - failing > 1:
            mid = (failing + passing) // 2
            if self.trial(mid).succeeded:
                passing = mid
            else:
                failing = mid
        return self._trials[passing]


def find_minimal_boost(
    grid: GridMap,
    units: UnitRegistry,
    config: CombatConfig | None = None,
) -> BoostResult:
    return BoostSearch(grid, units, config).search()
