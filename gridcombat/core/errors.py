"""Exception hierarchy for the combat engine."""

from __future__ import annotations


class CombatError(Exception):
    """Base class for every error raised by gridcombat."""


class MapParseError(CombatError):
    """The scenario text or tile rows do not describe a valid map."""


class InvalidTileError(MapParseError):
    """A character outside ``#.GE`` was found in the scenario text."""

    def __init__(self, char: str, row: int, col: int) -> None:
        super().__init__(f"invalid tile character {char!r} at row {row}, column {col}")
        self.char = char
        self.row = row
        self.col = col


class OutOfBoundsError(CombatError):
    """A position lies outside the grid's declared extents."""


class InternalConsistencyError(CombatError):
    """Engine state broke an invariant; the run cannot be trusted."""


class CombatStalledError(CombatError):
    """Combat did not end within the configured round limit."""


class NoQualifyingBoostError(CombatError):
    """No elf attack boost lets the elves win without losses."""
