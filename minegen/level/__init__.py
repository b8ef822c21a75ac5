from .grid import Grid
from .area_template import AreaTemplate, load_template, load_builtin_template
from .world_config import (
    BoundaryMode,
    ConfigurationError,
    OreClusterConfig,
    SpawnPlacement,
    WorldConfig,
    validate_config,
)
from .config_loader import load_world_config, world_config_from_dict
from .area_placement import AreaPlacer, AreaRequest, PlacementEvent, PlacementKind, PlacementRecord
from .ore_generator import OreVein, OreVeinGenerator
from .world_generator import WorldGenerator, WorldResult, generate_world

__all__ = [
    'Grid',
    'AreaTemplate',
    'load_template',
    'load_builtin_template',
    'BoundaryMode',
    'ConfigurationError',
    'OreClusterConfig',
    'SpawnPlacement',
    'WorldConfig',
    'validate_config',
    'load_world_config',
    'world_config_from_dict',
    'AreaPlacer',
    'AreaRequest',
    'PlacementEvent',
    'PlacementKind',
    'PlacementRecord',
    'OreVein',
    'OreVeinGenerator',
    'WorldGenerator',
    'WorldResult',
    'generate_world',
]
