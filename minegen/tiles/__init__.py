from .tile_types import TileType, OreKind

__all__ = [
    'TileType',
    'OreKind',
]
