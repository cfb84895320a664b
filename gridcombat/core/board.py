"""Scenario text <-> grid and units.

Parsing happens before the engine runs; rendering is a diagnostic aid for the
CLI, the API and the replay log. Neither is used inside the combat loop.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from gridcombat.core.enums import Faction, Tile
from gridcombat.core.errors import InvalidTileError, MapParseError
from gridcombat.core.grid import GridMap
from gridcombat.core.models import DEFAULT_ATTACK_POWER, DEFAULT_HIT_POINTS, Position
from gridcombat.core.registry import UnitRegistry

_TILE_CHARS: dict[str, tuple[Tile, Faction | None]] = {
    "#": (Tile.WALL, None),
    ".": (Tile.OPEN, None),
    "G": (Tile.OPEN, Faction.GOBLIN),
    "E": (Tile.OPEN, Faction.ELF),
}


@dataclass(frozen=True, slots=True)
class Scenario:
    """A parsed combat scenario: the map and its initial units."""

    grid: GridMap
    units: UnitRegistry

    def fresh_units(self) -> UnitRegistry:
        return self.units.copy()


def parse_scenario(
    text: str,
    hit_points: int = DEFAULT_HIT_POINTS,
    attack_power: int = DEFAULT_ATTACK_POWER,
) -> Scenario:
    """Parse a scenario block such as::

        #######
        #.G.E.#
        #######

    Trailing whitespace on each line and surrounding blank lines are ignored.
    """
    lines = [line.rstrip() for line in text.splitlines()]
    while lines and not lines[0]:
        lines.pop(0)
    while lines and not lines[-1]:
        lines.pop()
    if not lines:
        raise MapParseError("scenario text is empty")

    rows: list[list[Tile]] = []
    units = UnitRegistry()
    for r, line in enumerate(lines):
        row: list[Tile] = []
        for c, ch in enumerate(line):
            try:
                tile, faction = _TILE_CHARS[ch]
            except KeyError:
                raise InvalidTileError(ch, r, c) from None
            row.append(tile)
            if faction is not None:
                units.add(faction, Position(r, c), hp=hit_points, attack=attack_power)
        rows.append(row)
    return Scenario(grid=GridMap(rows), units=units)


def load_scenario(
    path: str | Path,
    hit_points: int = DEFAULT_HIT_POINTS,
    attack_power: int = DEFAULT_ATTACK_POWER,
) -> Scenario:
    text = Path(path).read_text(encoding="utf-8")
    return parse_scenario(text, hit_points=hit_points, attack_power=attack_power)


def format_board(grid: GridMap, units: UnitRegistry, show_hp: bool = True) -> str:
    """Draw the map with living units; optionally list hit points per row."""
    lines: list[str] = []
    for r, row in enumerate(grid.rows()):
        chars: list[str] = []
        row_units: list[str] = []
        for c, tile in enumerate(row):
            idx = units.at(Position(r, c))
            if idx is not None:
                unit = units[idx]
                chars.append(unit.faction.symbol)
                row_units.append(f"{unit.faction.symbol}({unit.hp})")
            else:
                chars.append("#" if tile == Tile.WALL else ".")
        line = "".join(chars)
        if show_hp and row_units:
            line += "   " + ", ".join(row_units)
        lines.append(line)
    return "\n".join(lines)
