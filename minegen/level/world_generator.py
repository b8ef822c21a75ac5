"""
World Generator - runs the full cave world pipeline for one seed.

Stage order is fixed:

1. boundary ring or corner blocks (protected)
2. base noise fill of unprotected cells
3. fixed then random area placement (spawn first, then outposts)
4. cellular automata smoothing of unprotected cells
5. ore veins in the remaining unprotected walls

All stages share one Grid and draw from one RNG stream in that order.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from minegen.level.area_placement import (
    AreaPlacer,
    AreaRequest,
    PlacementEvent,
    PlacementKind,
    PlacementRecord,
    min_outpost_distance,
)
from minegen.level.area_template import AreaTemplate, load_builtin_template
from minegen.level.boundary import BoundaryCarver
from minegen.level.generation_algorithms import PerlinNoise, fill_base_noise, smooth_terrain
from minegen.level.grid import Grid
from minegen.level.ore_generator import OreVein, OreVeinGenerator
from minegen.level.seed_manager import SeedManager
from minegen.level.world_config import BoundaryMode, SpawnPlacement, WorldConfig, validate_config
from minegen.tiles.tile_types import TileType

logger = logging.getLogger(__name__)


@dataclass
class WorldResult:
    """
    Output of one generation run.

    Attributes:
        seed: Resolved world seed (never 0), reusable to reproduce the world
        config: Configuration the world was generated from
        grid: Final grid; consumers should treat it as read-only
        placements: Accepted spawn/outpost placements in placement order
        events: Marker events (spawn and outpost positions) in stamping order
        veins: Grown ore veins in generation order
    """
    seed: int
    config: WorldConfig
    grid: Grid
    placements: List[PlacementRecord] = field(default_factory=list)
    events: List[PlacementEvent] = field(default_factory=list)
    veins: List[OreVein] = field(default_factory=list)

    @property
    def spawn_position(self) -> Optional[Tuple[int, int]]:
        for event in self.events:
            if event.kind == PlacementKind.SPAWN:
                return event.position
        return None

    @property
    def outpost_positions(self) -> List[Tuple[int, int]]:
        return [e.position for e in self.events if e.kind == PlacementKind.OUTPOST]

    def snapshot(self):
        return self.grid.snapshot()


class WorldGenerator:
    """Generates cave worlds from a WorldConfig and two area templates."""

    def __init__(
        self,
        config: Optional[WorldConfig] = None,
        spawn_template: Optional[AreaTemplate] = None,
        outpost_template: Optional[AreaTemplate] = None,
        noise: Optional[PerlinNoise] = None,
    ):
        self.config = config or WorldConfig()
        self.spawn_template = spawn_template or load_builtin_template("spawn_area")
        self.outpost_template = outpost_template or load_builtin_template("outpost")
        self.noise = noise or PerlinNoise()

    def validate(self) -> None:
        """Raise ConfigurationError listing every problem with the config and templates."""
        validate_config(self.config, (self.spawn_template, self.outpost_template))

    def generate(self) -> WorldResult:
        """
        Run every stage once on a fresh grid.

        Raises:
            ConfigurationError: if the configuration or templates are invalid;
                raised before any generation work
        """
        config = self.config
        self.validate()

        seed_manager = SeedManager(config.seed)
        seed = seed_manager.get_world_seed()
        rng = seed_manager.create_random()
        grid = Grid(config.world_width, config.world_height, fill=TileType.WALL)

        logger.info(
            "Generating %dx%d world with seed %d", config.world_width, config.world_height, seed
        )

        carver = BoundaryCarver(grid)
        if config.boundary_mode == BoundaryMode.CORNERS:
            reservations = carver.carve_corners(config.corner_size)
        else:
            reservations = carver.carve(config.boundary_width)

        fill_base_noise(grid, config, rng, self.noise)

        placer = AreaPlacer(
            grid,
            rng,
            min_distance=min_outpost_distance(grid.width, grid.height, config.outpost_count),
        )
        placer.reserve(reservations)
        placer.place_fixed_areas(config, self.spawn_template)
        requests = []
        if config.spawn_placement == SpawnPlacement.RANDOM:
            requests.append(AreaRequest(self.spawn_template, 1, PlacementKind.SPAWN))
        requests.append(AreaRequest(self.outpost_template, config.outpost_count, PlacementKind.OUTPOST))
        placer.place_random_areas(requests)

        smooth_terrain(grid, config.smooth_iterations)

        veins = OreVeinGenerator(grid, rng).generate(config.ore_clusters)

        outposts = sum(1 for r in placer.records if r.kind == PlacementKind.OUTPOST)
        logger.info(
            "World %d done: %d/%d outposts, %d veins, %d ore cells",
            seed, outposts, config.outpost_count, len(veins), grid.count(TileType.ORE),
        )
        return WorldResult(
            seed=seed,
            config=config,
            grid=grid,
            placements=list(placer.records),
            events=list(placer.events),
            veins=veins,
        )


def generate_world(
    config: Optional[WorldConfig] = None,
    spawn_template: Optional[AreaTemplate] = None,
    outpost_template: Optional[AreaTemplate] = None,
) -> WorldResult:
    """Convenience wrapper: build a WorldGenerator and run it once."""
    return WorldGenerator(config, spawn_template, outpost_template).generate()
