"""Grid / map system."""

from __future__ import annotations

from typing import Iterable, Iterator, Sequence

from gridcombat.core.enums import Tile
from gridcombat.core.errors import MapParseError, OutOfBoundsError
from gridcombat.core.models import NEIGHBOR_OFFSETS, Position


class GridMap:
    """Immutable 2D tile grid backed by a flat tuple for cache-friendly access."""

    __slots__ = ("width", "height", "_tiles")

    def __init__(self, rows: Sequence[Sequence[Tile]]) -> None:
        if not rows or not rows[0]:
            raise MapParseError("grid must have at least one row and one column")
        width = len(rows[0])
        for r, row in enumerate(rows):
            if len(row) != width:
                raise MapParseError(
                    f"grid is not rectangular: row {r} has {len(row)} tiles, expected {width}"
                )
        self.width = width
        self.height = len(rows)
        self._tiles: tuple[Tile, ...] = tuple(Tile(t) for row in rows for t in row)

    @classmethod
    def open_area(cls, width: int, height: int, walls: Iterable[Position] = ()) -> GridMap:
        """Build a *width* x *height* open grid with optional wall squares."""
        rows = [[Tile.OPEN] * width for _ in range(height)]
        for pos in walls:
            rows[pos.row][pos.col] = Tile.WALL
        return cls(rows)

    # -- access --

    def _idx(self, row: int, col: int) -> int:
        return row * self.width + col

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.row < self.height and 0 <= pos.col < self.width

    def tile_at(self, pos: Position) -> Tile:
        if not self.in_bounds(pos):
            raise OutOfBoundsError(f"{pos} outside {self.height}x{self.width} grid")
        return self._tiles[self._idx(pos.row, pos.col)]

    def is_open(self, pos: Position) -> bool:
        """Out-of-bounds squares count as Wall."""
        if not self.in_bounds(pos):
            return False
        return self._tiles[self._idx(pos.row, pos.col)] == Tile.OPEN

    def neighbors(self, pos: Position) -> list[Position]:
        """In-bounds neighbors in the fixed order up, left, right, down."""
        result: list[Position] = []
        for offset in NEIGHBOR_OFFSETS:
            n = pos + offset
            if self.in_bounds(n):
                result.append(n)
        return result

    def rows(self) -> Iterator[tuple[Tile, ...]]:
        for r in range(self.height):
            start = r * self.width
            yield self._tiles[start:start + self.width]

    def __repr__(self) -> str:
        return f"GridMap({self.height}x{self.width})"
