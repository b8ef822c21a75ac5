"""
Ore vein generation.

Runs after smoothing, so ore only replaces rock that survived. For each ore
kind (in configuration order) seeds are scattered first, then every seed is
grown into a vein:

- a neighbour joins only if it lies within the growth radius of the vein's
  own seed, is an unprotected WALL, is not already in the vein and touches
  an ore cell of the same kind
- growth stops as soon as the vein reaches its drawn target size
"""

import logging
import random
from collections import deque
from dataclasses import dataclass, field
from typing import List, Sequence, Set, Tuple

from pygame.math import Vector2

from minegen.level.grid import Grid
from minegen.level.world_config import OreClusterConfig
from minegen.tiles.tile_types import OreKind, TileType

logger = logging.getLogger(__name__)

MAX_SEED_ATTEMPTS = 100

# dx outer, dy inner; order matters for reproducibility
NEIGHBOUR_OFFSETS: Tuple[Tuple[int, int], ...] = tuple(
    (dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0)
)

Coord = Tuple[int, int]


@dataclass
class OreVein:
    """One grown vein: its seed, drawn target size and claimed cells (seed first)."""
    kind: OreKind
    origin: Coord
    target_size: int
    cells: List[Coord] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.cells)


class OreVeinGenerator:
    """Grows ore veins into the wall cells of a grid."""

    def __init__(self, grid: Grid, rng: random.Random):
        self.grid = grid
        self.rng = rng

    def generate(self, clusters: Sequence[OreClusterConfig]) -> List[OreVein]:
        """
        Seed and grow veins for every ore cluster config, in order.

        Returns:
            All grown veins, grouped by cluster in configuration order
        """
        veins: List[OreVein] = []
        for cluster in clusters:
            seeds = self.place_seeds(cluster)
            if len(seeds) < cluster.vein_count:
                logger.debug(
                    "%s: placed %d of %d seeds", cluster.kind.value, len(seeds), cluster.vein_count
                )
            for seed in seeds:
                veins.append(self.grow_vein(cluster, seed))
        return veins

    def place_seeds(self, cluster: OreClusterConfig) -> List[Coord]:
        """Scatter up to vein_count seeds, each vein_distance from the others."""
        seeds: List[Coord] = []
        attempts = 0
        while len(seeds) < cluster.vein_count and attempts < MAX_SEED_ATTEMPTS:
            x = self.rng.randrange(self.grid.width)
            y = self.rng.randrange(self.grid.height)
            attempts += 1

            if not self.is_valid_ore_position(x, y):
                continue
            if self._too_close_to_seeds((x, y), seeds, cluster.vein_distance):
                continue

            self.grid.set_ore(x, y, cluster.kind)
            seeds.append((x, y))
        return seeds

    def grow_vein(self, cluster: OreClusterConfig, seed: Coord) -> OreVein:
        """
        Grow one vein outward from an already placed seed.

        The target size is drawn from [min_vein_size, max_vein_size]. A vein
        may end smaller when it runs out of eligible neighbours.
        """
        target = self.rng.randint(cluster.min_vein_size, cluster.max_vein_size)
        radius = cluster.growth_radius
        origin = Vector2(seed)
        vein = OreVein(kind=cluster.kind, origin=seed, target_size=target, cells=[seed])
        claimed: Set[Coord] = {seed}
        frontier = deque([seed])

        while len(claimed) < target and frontier:
            cx, cy = frontier.popleft()
            for dx, dy in NEIGHBOUR_OFFSETS:
                nx, ny = cx + dx, cy + dy
                if origin.distance_to((nx, ny)) > radius:
                    continue
                if not self.is_valid_ore_position(nx, ny) or (nx, ny) in claimed:
                    continue
                if self.count_ore_neighbours(nx, ny, cluster.kind) == 0:
                    continue

                self.grid.set_ore(nx, ny, cluster.kind)
                claimed.add((nx, ny))
                vein.cells.append((nx, ny))
                frontier.append((nx, ny))
                if len(claimed) >= target:
                    break

        return vein

    def count_ore_neighbours(self, x: int, y: int, kind: OreKind) -> int:
        grid = self.grid
        count = 0
        for dx, dy in NEIGHBOUR_OFFSETS:
            nx, ny = x + dx, y + dy
            if not grid.in_bounds(nx, ny):
                continue
            if grid.tiles[nx][ny] == TileType.ORE and grid.ores[nx][ny] == kind:
                count += 1
        return count

    def is_valid_ore_position(self, x: int, y: int) -> bool:
        grid = self.grid
        if not grid.in_bounds(x, y):
            return False
        if grid.protected[x][y]:
            return False
        return grid.tiles[x][y] == TileType.WALL

    @staticmethod
    def _too_close_to_seeds(pos: Coord, seeds: List[Coord], min_distance: float) -> bool:
        point = Vector2(pos)
        for seed in seeds:
            if point.distance_to(seed) < min_distance:
                return True
        return False
