"""Grid / tile model."""

from __future__ import annotations

from dataclasses import dataclass

from neuromaze.core.enums import TileKind
from neuromaze.core.models import Vector2


class OutOfBoundsError(IndexError):
    """Coordinate access outside the grid. Always a caller bug."""

    def __init__(self, x: int, y: int, size: int) -> None:
        super().__init__(f"({x}, {y}) is outside the {size}x{size} grid")
        self.x = x
        self.y = y


@dataclass(frozen=True, slots=True)
class Tile:
    """Read-only view of one grid cell."""

    kind: TileKind
    adaptability: float

    @property
    def is_wall(self) -> bool:
        return self.kind == TileKind.WALL


class Grid:
    """Square tile grid backed by flat lists for cache-friendly access.

    Border tiles are permanently WALL with adaptability 0.0; both
    ``set_kind`` and ``set_adaptability`` reject them with ``ValueError``.
    Adaptability is fixed per tile once assigned by the generator.

    ``bordered=False`` builds an open board with no wall ring, used for
    exercising the pathfinder in isolation.
    """

    __slots__ = ("size", "bordered", "_kinds", "_adaptability")

    def __init__(self, size: int, default: TileKind = TileKind.FLOOR, bordered: bool = True) -> None:
        if size < 3:
            raise ValueError(f"grid size must be at least 3, got {size}")
        self.size = size
        self.bordered = bordered
        self._kinds: list[TileKind] = [default] * (size * size)
        self._adaptability: list[float] = [0.0] * (size * size)
        if bordered:
            for i in range(size):
                for x, y in ((i, 0), (i, size - 1), (0, i), (size - 1, i)):
                    self._kinds[y * size + x] = TileKind.WALL

    @classmethod
    def from_rows(cls, rows: list[str]) -> Grid:
        """Build a grid from ASCII rows: ``#`` is wall, anything else floor.

        The outer ring is forced to wall regardless of what the rows say.
        """
        grid = cls(len(rows))
        for y, row in enumerate(rows):
            if len(row) != grid.size:
                raise ValueError(f"row {y} has length {len(row)}, expected {grid.size}")
            for x, ch in enumerate(row):
                if not grid.is_border(x, y):
                    grid._kinds[y * grid.size + x] = TileKind.WALL if ch == "#" else TileKind.FLOOR
        return grid

    # -- access --

    def _idx(self, x: int, y: int) -> int:
        return y * self.size + x

    def in_bounds(self, pos: Vector2) -> bool:
        return 0 <= pos.x < self.size and 0 <= pos.y < self.size

    def in_bounds_xy(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def is_border(self, x: int, y: int) -> bool:
        return x == 0 or y == 0 or x == self.size - 1 or y == self.size - 1

    def tile_at(self, x: int, y: int) -> Tile:
        if not self.in_bounds_xy(x, y):
            raise OutOfBoundsError(x, y, self.size)
        i = self._idx(x, y)
        return Tile(self._kinds[i], self._adaptability[i])

    def kind_xy(self, x: int, y: int) -> TileKind:
        """Fast kind lookup for hot loops; out-of-bounds reads as WALL."""
        if 0 <= x < self.size and 0 <= y < self.size:
            return self._kinds[y * self.size + x]
        return TileKind.WALL

    def adaptability_xy(self, x: int, y: int) -> float:
        if not self.in_bounds_xy(x, y):
            raise OutOfBoundsError(x, y, self.size)
        return self._adaptability[self._idx(x, y)]

    def is_walkable(self, pos: Vector2) -> bool:
        return self.kind_xy(pos.x, pos.y) == TileKind.FLOOR

    def is_walkable_xy(self, x: int, y: int) -> bool:
        return self.kind_xy(x, y) == TileKind.FLOOR

    # -- mutation --

    def set_kind(self, x: int, y: int, kind: TileKind) -> None:
        if not self.in_bounds_xy(x, y):
            raise OutOfBoundsError(x, y, self.size)
        if self.bordered and self.is_border(x, y):
            raise ValueError(f"border tile ({x}, {y}) is permanently WALL")
        self._kinds[self._idx(x, y)] = kind

    def set_adaptability(self, x: int, y: int, value: float) -> None:
        if not self.in_bounds_xy(x, y):
            raise OutOfBoundsError(x, y, self.size)
        if not 0.0 <= value < 1.0:
            raise ValueError(f"adaptability must be in [0, 1), got {value}")
        if self.bordered and self.is_border(x, y):
            raise ValueError(f"border tile ({x}, {y}) is never mutated")
        self._adaptability[self._idx(x, y)] = value

    # -- iteration --

    def interior(self):
        """Yield every non-border (x, y) in row-major order."""
        for y in range(1, self.size - 1):
            for x in range(1, self.size - 1):
                yield x, y

    def rows(self) -> list[list[int]]:
        """Tile kinds as a list of rows of ints (for rendering/API)."""
        n = self.size
        return [[int(k) for k in self._kinds[y * n:(y + 1) * n]] for y in range(n)]

    def adaptability_rows(self) -> list[list[float]]:
        n = self.size
        return [list(self._adaptability[y * n:(y + 1) * n]) for y in range(n)]

    # -- copy --

    def copy(self) -> Grid:
        new = Grid.__new__(Grid)
        new.size = self.size
        new.bordered = self.bordered
        new._kinds = list(self._kinds)
        new._adaptability = list(self._adaptability)
        return new
