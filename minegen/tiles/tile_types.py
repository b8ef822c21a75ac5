from enum import Enum, IntEnum


class TileType(IntEnum):
    """Enumeration of all tile types in a generated world."""

    AIR = 0
    WALL = 1
    ORE = 2  # kind stored alongside in Grid.ores
    BOUNDARY = 3  # indestructible

    @property
    def is_solid(self) -> bool:
        """Return True if tile blocks movement completely."""
        return self in (TileType.WALL, TileType.ORE, TileType.BOUNDARY)

    @property
    def is_breakable(self) -> bool:
        """Return True if tile can be mined out."""
        return self in (TileType.WALL, TileType.ORE)

    @property
    def symbol(self) -> str:
        return {
            TileType.AIR: ".",
            TileType.WALL: "#",
            TileType.ORE: "*",
            TileType.BOUNDARY: "@",
        }[self]


class OreKind(Enum):
    """Ore kinds that can be grown into veins."""

    COAL = "coal"
    COPPER = "copper"
    IRON = "iron"
    GOLD = "gold"
    CRYSTAL = "crystal"

    @property
    def symbol(self) -> str:
        """Single character used by text maps."""
        return {
            OreKind.COAL: "c",
            OreKind.COPPER: "u",
            OreKind.IRON: "i",
            OreKind.GOLD: "g",
            OreKind.CRYSTAL: "x",
        }[self]

    @classmethod
    def from_name(cls, name: str) -> "OreKind":
        """Look up an ore kind by (case-insensitive) name.

        Raises:
            ValueError: if no ore kind has that name
        """
        key = str(name).strip().lower()
        for kind in cls:
            if kind.value == key:
                return kind
        raise ValueError(f"Unknown ore kind: {name!r}")
