"""Engine layer: pathfinding, turns, combat rounds, boost search."""

from gridcombat.engine.pathfinding import Pathfinder, Route
from gridcombat.engine.turn import TurnEngine
from gridcombat.engine.simulator import CombatResult, CombatSimulator, simulate
from gridcombat.engine.outcome import compute_outcome
from gridcombat.engine.boost import BoostResult, BoostSearch, find_minimal_boost

__all__ = [
    "BoostResult",
    "BoostSearch",
    "CombatResult",
    "CombatSimulator",
    "Pathfinder",
    "Route",
    "TurnEngine",
    "compute_outcome",
    "find_minimal_boost",
    "simulate",
]
