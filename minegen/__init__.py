"""Procedural cave/mine world generation: terrain, spawn and outpost rooms, ore veins."""

import os

# pygame prints a banner on import otherwise; only its geometry types are used
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

from minegen.level import (  # noqa: E402
    AreaTemplate,
    ConfigurationError,
    OreClusterConfig,
    WorldConfig,
    WorldGenerator,
    WorldResult,
    generate_world,
)
from minegen.tiles import OreKind, TileType  # noqa: E402

__version__ = "0.1.0"

__all__ = [
    'AreaTemplate',
    'ConfigurationError',
    'OreClusterConfig',
    'OreKind',
    'TileType',
    'WorldConfig',
    'WorldGenerator',
    'WorldResult',
    'generate_world',
]
