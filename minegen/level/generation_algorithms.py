"""
Generation Algorithms - Perlin noise fill and cellular automata smoothing for cave terrain
"""

import logging
import math
import random
from typing import List, Optional, Tuple

from minegen.level.grid import Grid
from minegen.level.world_config import WorldConfig
from minegen.tiles.tile_types import TileType

logger = logging.getLogger(__name__)

NOISE_OFFSET_RANGE = 1000.0

_GRADIENTS = (
    (1.0, 1.0), (-1.0, 1.0), (1.0, -1.0), (-1.0, -1.0),
    (1.0, 0.0), (-1.0, 0.0), (0.0, 1.0), (0.0, -1.0),
)


class PerlinNoise:
    """2D gradient noise normalised to [0, 1].

    The permutation table comes from a fixed seed, so the noise function is
    the same for every world; worlds differ only by where they sample it.
    """

    def __init__(self, permutation_seed: int = 0, octaves: int = 1, persistence: float = 0.5):
        self.octaves = max(1, octaves)
        self.persistence = persistence
        self.rng = random.Random(permutation_seed)
        self._permutation = self._generate_permutation()

    def _generate_permutation(self) -> List[int]:
        """Generate permutation table for Perlin noise"""
        permutation = list(range(256))
        self.rng.shuffle(permutation)

        # Duplicate for overflow
        return permutation + permutation

    def noise(self, x: float, y: float) -> float:
        """Sample the noise at (x, y); continuous, in [0, 1]."""
        total = 0.0
        amplitude = 1.0
        frequency = 1.0
        max_value = 0.0

        for _ in range(self.octaves):
            total += self._gradient_noise(x * frequency, y * frequency) * amplitude
            max_value += amplitude
            amplitude *= self.persistence
            frequency *= 2

        value = (total / max_value + 1.0) / 2.0
        return min(1.0, max(0.0, value))

    def _gradient_noise(self, x: float, y: float) -> float:
        p = self._permutation
        x_floor = math.floor(x)
        y_floor = math.floor(y)
        xi = int(x_floor) & 255
        yi = int(y_floor) & 255
        xf = x - x_floor
        yf = y - y_floor

        u = _fade(xf)
        v = _fade(yf)

        aa = p[p[xi] + yi]
        ab = p[p[xi] + yi + 1]
        ba = p[p[xi + 1] + yi]
        bb = p[p[xi + 1] + yi + 1]

        x1 = _lerp(_grad(aa, xf, yf), _grad(ba, xf - 1, yf), u)
        x2 = _lerp(_grad(ab, xf, yf - 1), _grad(bb, xf - 1, yf - 1), u)
        return _lerp(x1, x2, v)


def _fade(t: float) -> float:
    return t * t * t * (t * (t * 6 - 15) + 10)


def _lerp(a: float, b: float, t: float) -> float:
    return a + t * (b - a)


def _grad(hash_value: int, x: float, y: float) -> float:
    gx, gy = _GRADIENTS[hash_value & 7]
    return gx * x + gy * y


def fill_base_noise(
    grid: Grid,
    config: WorldConfig,
    rng: random.Random,
    noise: Optional[PerlinNoise] = None,
) -> Tuple[float, float]:
    """
    Fill every unprotected cell with wall or air from coherent noise.

    Args:
        grid: Grid to fill in place
        config: Supplies noise_scale and fill_percentage
        rng: Run RNG; exactly two draws (x offset, then y offset)
        noise: Noise function, defaults to PerlinNoise()

    Returns:
        The (offset_x, offset_y) sampling offsets that were drawn
    """
    noise = noise or PerlinNoise()
    offset_x = rng.random() * NOISE_OFFSET_RANGE
    offset_y = rng.random() * NOISE_OFFSET_RANGE
    scale = config.noise_scale
    threshold = config.fill_percentage

    walls = 0
    for x in range(grid.width):
        for y in range(grid.height):
            if grid.protected[x][y]:
                continue
            value = noise.noise((x + offset_x) * scale, (y + offset_y) * scale)
            if value < threshold:
                grid.set_tile(x, y, TileType.WALL)
                walls += 1
            else:
                grid.set_tile(x, y, TileType.AIR)

    logger.debug("Noise fill: %d walls, offsets=(%.3f, %.3f)", walls, offset_x, offset_y)
    return offset_x, offset_y


def count_surrounding_walls(tiles: List[List[TileType]], x: int, y: int, width: int, height: int) -> int:
    """Count solid cells in the 8-neighbourhood; out of bounds counts as wall."""
    count = 0
    for nx in range(x - 1, x + 2):
        for ny in range(y - 1, y + 2):
            if nx == x and ny == y:
                continue
            if nx < 0 or nx >= width or ny < 0 or ny >= height:
                count += 1
            elif tiles[nx][ny].is_solid:
                count += 1
    return count


def smooth_terrain(grid: Grid, iterations: int) -> None:
    """
    Relax noisy fill into cave shapes with a cellular automaton.

    Each pass reads the previous pass's grid and writes a fresh buffer.
    More than 4 solid neighbours makes a wall, fewer than 4 makes air,
    exactly 4 keeps the cell. Protected cells are copied through.
    """
    width, height = grid.width, grid.height
    for iteration in range(iterations):
        tiles = grid.tiles
        new_tiles = [list(column) for column in tiles]
        changed = 0

        for x in range(width):
            for y in range(height):
                if grid.protected[x][y]:
                    continue

                wall_count = count_surrounding_walls(tiles, x, y, width, height)
                if wall_count > 4:
                    new_tile = TileType.WALL
                elif wall_count < 4:
                    new_tile = TileType.AIR
                else:
                    continue

                if new_tile != tiles[x][y]:
                    new_tiles[x][y] = new_tile
                    grid.ores[x][y] = None
                    changed += 1

        grid.tiles = new_tiles
        logger.debug("Smoothing pass %d: %d cells changed", iteration + 1, changed)
