"""
Area templates: fixed rectangular stamps for spawn and outpost rooms.

Templates are plain data. Loading them from JSON lives here too so callers
can keep room layouts next to their other game data.
"""

import json
import os
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from minegen.level.world_config import ConfigurationError


PLAIN_WALL = "#"
PROTECTED_WALL = "="
PROTECTED_AIR = "."
SPAWN_MARKER = "P"
OUTPOST_MARKER = "O"

SYMBOLS = frozenset({PLAIN_WALL, PROTECTED_WALL, PROTECTED_AIR, SPAWN_MARKER, OUTPOST_MARKER})

TEMPLATE_DIR = os.path.join(os.path.dirname(__file__), "..", "data", "templates")


@dataclass(frozen=True)
class AreaTemplate:
    """
    Immutable room layout.

    Attributes:
        name: Template identifier (e.g. "spawn_area")
        layout: Rows of equal length, written top-down. When stamped the last
            row lands on the lowest world row of the stamp.
    """
    name: str
    layout: Tuple[str, ...]

    def __post_init__(self):
        rows = tuple(self.layout)
        object.__setattr__(self, "layout", rows)
        if not rows or not rows[0]:
            raise ValueError(f"Template {self.name!r} has an empty layout")
        width = len(rows[0])
        for index, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(
                    f"Template {self.name!r} row {index} has length {len(row)}, expected {width}"
                )
            unknown = set(row) - SYMBOLS
            if unknown:
                raise ValueError(
                    f"Template {self.name!r} row {index} has unknown symbols {sorted(unknown)}"
                )

    @property
    def width(self) -> int:
        return len(self.layout[0])

    @property
    def height(self) -> int:
        return len(self.layout)

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def symbol_at(self, dx: int, dy: int) -> str:
        """Symbol at stamp offset (dx, dy), dy counted upward from the bottom row."""
        return self.layout[self.height - 1 - dy][dx]

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "layout": list(self.layout)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any], default_name: str = "template") -> "AreaTemplate":
        layout = data.get("layout")
        if not isinstance(layout, list) or not all(isinstance(r, str) for r in layout):
            raise ConfigurationError(["template 'layout' must be a list of strings"])
        try:
            return cls(name=str(data.get("name", default_name)), layout=tuple(layout))
        except ValueError as exc:
            raise ConfigurationError([str(exc)]) from exc


def load_template(filepath: str) -> AreaTemplate:
    """Load a template from a JSON file of the form {"name": ..., "layout": [...]}."""
    with open(filepath, 'r') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise ConfigurationError([f"{filepath}: invalid JSON ({exc})"]) from exc
    if not isinstance(data, dict):
        raise ConfigurationError([f"{filepath}: template must be a JSON object"])
    default_name = os.path.splitext(os.path.basename(filepath))[0]
    return AreaTemplate.from_dict(data, default_name=default_name)


def load_builtin_template(name: str) -> AreaTemplate:
    """Load one of the templates bundled with the package ("spawn_area", "outpost")."""
    return load_template(os.path.join(TEMPLATE_DIR, f"{name}.json"))
