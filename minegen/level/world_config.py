"""
World generation configuration.

Configuration is plain dataclasses. Structural problems are collected by
``validate_config`` and reported together as one ``ConfigurationError``
before any generation work starts.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List

from minegen.tiles.tile_types import OreKind


class ConfigurationError(ValueError):
    """Structurally invalid configuration; carries every problem found."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "invalid configuration")


class BoundaryMode(str, Enum):
    BORDER = "border"  # outermost rows/columns
    CORNERS = "corners"  # four corner blocks


class SpawnPlacement(str, Enum):
    RANDOM = "random"
    FIXED = "fixed"  # centred horizontally, 70% of the way up


@dataclass
class OreClusterConfig:
    """
    Per ore kind vein settings.

    Attributes:
        kind: Ore kind grown by this cluster
        vein_count: Number of veins (seed points) to attempt
        vein_distance: Minimum distance between seeds of this kind
        vein_size: Base number of ore cells per vein
    """
    kind: OreKind
    vein_count: int = 2
    vein_distance: float = 10.0
    vein_size: int = 10

    @property
    def min_vein_size(self) -> int:
        return round(self.vein_size * 0.7)

    @property
    def max_vein_size(self) -> int:
        return round(self.vein_size * 1.3)

    @property
    def growth_radius(self) -> float:
        """Max distance from the vein's seed, scaled with vein size."""
        return math.sqrt(self.vein_size) * 1.5


def default_ore_clusters() -> List[OreClusterConfig]:
    return [
        OreClusterConfig(OreKind.COAL, vein_count=6, vein_distance=12.0, vein_size=14),
        OreClusterConfig(OreKind.COPPER, vein_count=4, vein_distance=15.0, vein_size=10),
        OreClusterConfig(OreKind.IRON, vein_count=3, vein_distance=18.0, vein_size=8),
        OreClusterConfig(OreKind.GOLD, vein_count=2, vein_distance=25.0, vein_size=5),
    ]


@dataclass
class WorldConfig:
    """Configuration for one world generation run."""
    world_width: int = 100
    world_height: int = 100

    # 0 picks a random seed once; the chosen seed is reported on the result
    seed: int = 0
    noise_scale: float = 0.05
    fill_percentage: float = 0.45
    smooth_iterations: int = 5

    boundary_mode: BoundaryMode = BoundaryMode.BORDER
    boundary_width: int = 1
    corner_size: int = 5

    outpost_count: int = 3
    spawn_placement: SpawnPlacement = SpawnPlacement.RANDOM

    ore_clusters: List[OreClusterConfig] = field(default_factory=default_ore_clusters)


def validate_config(config: WorldConfig, templates: Iterable = ()) -> None:
    """
    Check a configuration (and the templates it will stamp) before generation.

    Args:
        config: Configuration to check
        templates: AreaTemplate instances that will be placed

    Raises:
        ConfigurationError: listing every problem found
    """
    errors: List[str] = []

    if config.world_width <= 0:
        errors.append(f"world_width must be positive, got {config.world_width}")
    if config.world_height <= 0:
        errors.append(f"world_height must be positive, got {config.world_height}")
    if config.noise_scale <= 0:
        errors.append(f"noise_scale must be positive, got {config.noise_scale}")
    if not 0.0 <= config.fill_percentage <= 1.0:
        errors.append(f"fill_percentage must be within [0, 1], got {config.fill_percentage}")
    if config.smooth_iterations < 0:
        errors.append(f"smooth_iterations must not be negative, got {config.smooth_iterations}")
    if config.boundary_width < 0:
        errors.append(f"boundary_width must not be negative, got {config.boundary_width}")
    if config.corner_size < 0:
        errors.append(f"corner_size must not be negative, got {config.corner_size}")
    if config.outpost_count < 0:
        errors.append(f"outpost_count must not be negative, got {config.outpost_count}")

    for template in templates:
        if template is None:
            continue
        if template.width > config.world_width or template.height > config.world_height:
            errors.append(
                f"template {template.name!r} ({template.width}x{template.height}) "
                f"does not fit the {config.world_width}x{config.world_height} world"
            )

    for index, cluster in enumerate(config.ore_clusters):
        label = f"ore_clusters[{index}] ({getattr(cluster.kind, 'value', cluster.kind)})"
        if cluster.vein_count <= 0:
            errors.append(f"{label}: vein_count must be positive, got {cluster.vein_count}")
        if cluster.vein_size <= 0:
            errors.append(f"{label}: vein_size must be positive, got {cluster.vein_size}")
        if cluster.vein_distance < 0:
            errors.append(f"{label}: vein_distance must not be negative, got {cluster.vein_distance}")

    if errors:
        raise ConfigurationError(errors)
