"""
Tile System Utilities
Helpers for turning generated worlds into text maps and JSON-friendly data.
"""

from typing import Any, Dict, List, Optional, Tuple

from minegen.level.config_loader import world_config_to_dict
from minegen.level.grid import Grid
from minegen.level.world_generator import WorldResult
from minegen.tiles.tile_types import TileType

SPAWN_SYMBOL = "P"
OUTPOST_SYMBOL = "O"


def tile_symbol(grid: Grid, x: int, y: int) -> str:
    """Character for one cell; ore cells use their kind's symbol."""
    tile = grid.tiles[x][y]
    if tile == TileType.ORE:
        kind = grid.ores[x][y]
        return kind.symbol if kind is not None else tile.symbol
    return tile.symbol


def grid_to_rows(grid: Grid, result: Optional[WorldResult] = None) -> List[str]:
    """
    Render the grid as text rows, top row first.

    Args:
        grid: Grid to render
        result: Optional result whose spawn/outpost markers are overlaid

    Returns:
        One string per world row, highest y first
    """
    markers: Dict[Tuple[int, int], str] = {}
    if result is not None:
        for position in result.outpost_positions:
            markers[position] = OUTPOST_SYMBOL
        spawn = result.spawn_position
        if spawn is not None:
            markers[spawn] = SPAWN_SYMBOL

    rows = []
    for y in range(grid.height - 1, -1, -1):
        rows.append("".join(
            markers.get((x, y)) or tile_symbol(grid, x, y)
            for x in range(grid.width)
        ))
    return rows


def result_to_dict(result: WorldResult) -> Dict[str, Any]:
    """Convert a WorldResult into a JSON-serializable dictionary."""
    grid = result.grid
    return {
        "seed": result.seed,
        "width": grid.width,
        "height": grid.height,
        "config": world_config_to_dict(result.config),
        "rows": grid_to_rows(grid),
        "tiles": [[int(tile) for tile in column] for column in grid.tiles],
        "ores": [
            [kind.value if kind is not None else None for kind in column]
            for column in grid.ores
        ],
        "events": [
            {"kind": event.kind.value, "position": list(event.position)}
            for event in result.events
        ],
        "placements": [
            {
                "kind": record.kind.value,
                "template": record.template.name,
                "anchor": list(record.anchor),
                "center": list(record.center),
            }
            for record in result.placements
        ],
        "veins": [
            {
                "kind": vein.kind.value,
                "origin": list(vein.origin),
                "target_size": vein.target_size,
                "size": vein.size,
            }
            for vein in result.veins
        ],
    }
