"""Core data models and map representation."""

from gridcombat.core.enums import CombatState, Faction, Tile
from gridcombat.core.models import Position, Unit
from gridcombat.core.grid import GridMap
from gridcombat.core.registry import UnitRegistry
from gridcombat.core.board import Scenario, format_board, load_scenario, parse_scenario

__all__ = [
    "CombatState",
    "Faction",
    "GridMap",
    "Position",
    "Scenario",
    "Tile",
    "Unit",
    "UnitRegistry",
    "format_board",
    "load_scenario",
    "parse_scenario",
]
