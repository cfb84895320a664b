"""Combat outcome: completed rounds times remaining hit points."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gridcombat.core.registry import UnitRegistry


def compute_outcome(completed_rounds: int, units: UnitRegistry) -> int:
    """Dead units contribute nothing to the hit-point sum."""
    return completed_rounds * units.total_hit_points()
