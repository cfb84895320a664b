"""Breadth-first pathfinding with reading-order tie-breaks.

Provides a `Pathfinder` that picks, for a moving unit, the nearest reachable
destination square and the first step towards it.

Usage:
    pf = Pathfinder(grid)
    route = pf.find_route(start, destinations, occupied)   # Route or None
    step = pf.next_step(start, destinations, occupied)     # Position or None

Tie-breaks are applied in two stages and the order matters:
  1. among destinations at minimum distance, the first in reading order;
  2. among first steps lying on a shortest path to *that* destination,
     the first in reading order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, AbstractSet, Iterable

from gridcombat.core.models import Position

if TYPE_CHECKING:
    from gridcombat.core.grid import GridMap


@dataclass(frozen=True, slots=True)
class Route:
    """Chosen destination, its BFS distance, and the first step towards it."""

    destination: Position
    distance: int
    first_step: Position


class Pathfinder:
    """Single-BFS pathfinder over open, unoccupied squares.

    Each discovered square carries the smallest (reading-order) first step
    over all of its shortest paths from the start. Because every predecessor
    of a square lies on the previous BFS layer, processing the search one
    full layer at a time makes that value final before it is propagated.
    """

    __slots__ = ("_grid",)

    def __init__(self, grid: GridMap) -> None:
        self._grid = grid

    def find_route(
        self,
        start: Position,
        destinations: Iterable[Position],
        occupied: AbstractSet[Position] = frozenset(),
    ) -> Route | None:
        """Return the canonical route to the nearest destination, or None.

        *occupied* squares (other living units) are not traversable; the
        start square is the search root and is always traversable.
        """
        targets = set(destinations)
        if not targets:
            return None
        if start in targets:
            return Route(destination=start, distance=0, first_step=start)

        grid = self._grid
        distance: dict[Position, int] = {start: 0}
        first_step: dict[Position, Position] = {}
        frontier = [start]
        depth = 0

        while frontier:
            depth += 1
            next_frontier: list[Position] = []
            for current in frontier:
                via = first_step.get(current)
                for n in grid.neighbors(current):
                    if not grid.is_open(n) or n in occupied:
                        continue
                    step = n if via is None else via
                    seen = distance.get(n)
                    if seen is None:
                        distance[n] = depth
                        first_step[n] = step
                        next_frontier.append(n)
                    elif seen == depth and step < first_step[n]:
                        first_step[n] = step

            reached = [p for p in next_frontier if p in targets]
            if reached:
                dest = min(reached)
                return Route(destination=dest, distance=depth, first_step=first_step[dest])
            frontier = next_frontier

        return None

    def next_step(
        self,
        start: Position,
        destinations: Iterable[Position],
        occupied: AbstractSet[Position] = frozenset(),
    ) -> Position | None:
        """Return the first step of the canonical route, or None if unreachable."""
        route = self.find_route(start, destinations, occupied)
        if route is None or route.distance == 0:
            return None
        return route.first_step
