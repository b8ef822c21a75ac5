"""
Shared world grid: tile types, ore kinds and the protection mask.

All three arrays are column-major (``tiles[x][y]``) over
``[0, width) x [0, height)``; y grows upward like the game's tile layer.
"""

from typing import Iterator, List, Optional, Tuple

from minegen.tiles.tile_types import OreKind, TileType


Cell = Tuple[TileType, Optional[OreKind]]


class Grid:
    """Tile grid plus a parallel "protected" mask.

    A protected cell was set deliberately (template stamp, boundary, corner)
    and is never rewritten by noise fill, smoothing or ore growth.
    """

    def __init__(self, width: int, height: int, fill: TileType = TileType.AIR):
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.tiles: List[List[TileType]] = [[fill] * height for _ in range(width)]
        self.ores: List[List[Optional[OreKind]]] = [[None] * height for _ in range(width)]
        self.protected: List[List[bool]] = [[False] * height for _ in range(width)]

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> TileType:
        return self.tiles[x][y]

    def set_tile(self, x: int, y: int, tile: TileType, protect: bool = False) -> None:
        """Set a non-ore tile, clearing any ore kind stored for the cell."""
        self.tiles[x][y] = tile
        self.ores[x][y] = None
        if protect:
            self.protected[x][y] = True

    def set_ore(self, x: int, y: int, kind: OreKind) -> None:
        self.tiles[x][y] = TileType.ORE
        self.ores[x][y] = kind

    def ore_at(self, x: int, y: int) -> Optional[OreKind]:
        return self.ores[x][y]

    def is_protected(self, x: int, y: int) -> bool:
        return self.protected[x][y]

    def protect(self, x: int, y: int) -> None:
        self.protected[x][y] = True

    def cells(self) -> Iterator[Tuple[int, int]]:
        """Iterate coordinates column by column."""
        for x in range(self.width):
            for y in range(self.height):
                yield x, y

    def count(self, tile: TileType, kind: Optional[OreKind] = None) -> int:
        """Count cells of a tile type (optionally of one ore kind)."""
        total = 0
        for x in range(self.width):
            column = self.tiles[x]
            ores = self.ores[x]
            for y in range(self.height):
                if column[y] == tile and (kind is None or ores[y] == kind):
                    total += 1
        return total

    def protected_cells(self) -> List[Tuple[int, int]]:
        return [(x, y) for x, y in self.cells() if self.protected[x][y]]

    def snapshot(self) -> Tuple[Tuple[Cell, ...], ...]:
        """Immutable view of tiles and ore kinds, comparable with ``==``."""
        return tuple(
            tuple(zip(self.tiles[x], self.ores[x]))
            for x in range(self.width)
        )

    def copy(self) -> "Grid":
        other = Grid(self.width, self.height)
        other.tiles = [list(column) for column in self.tiles]
        other.ores = [list(column) for column in self.ores]
        other.protected = [list(column) for column in self.protected]
        return other

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height})"
