"""
Area placement: stamps spawn and outpost templates onto the grid.

Spawn is placed first, then outposts in request order, all against one
accumulating list of accepted centres. Failing to find a spot inside the
retry budget is a normal outcome; the instance is skipped.
"""

import logging
import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

import pygame
from pygame.math import Vector2

from minegen.level.area_template import (
    AreaTemplate,
    OUTPOST_MARKER,
    PLAIN_WALL,
    PROTECTED_AIR,
    PROTECTED_WALL,
    SPAWN_MARKER,
)
from minegen.level.grid import Grid
from minegen.level.world_config import SpawnPlacement, WorldConfig
from minegen.tiles.tile_types import TileType

logger = logging.getLogger(__name__)

MAX_PLACEMENT_ATTEMPTS = 100


class PlacementKind(str, Enum):
    SPAWN = "spawn"
    OUTPOST = "outpost"


@dataclass(frozen=True)
class PlacementEvent:
    """A marker cell stamped by a template, for the game layer to act on."""
    kind: PlacementKind
    position: Tuple[int, int]

    def world_position(self, width: int, height: int) -> Tuple[int, int]:
        """Position in the tile layer's centred coordinates."""
        x, y = self.position
        return (x - width // 2, y - height // 2)


@dataclass(frozen=True)
class PlacementRecord:
    """An accepted template placement."""
    kind: PlacementKind
    template: AreaTemplate
    anchor: Tuple[int, int]
    center: Tuple[float, float]

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(self.anchor[0], self.anchor[1], self.template.width, self.template.height)


@dataclass(frozen=True)
class AreaRequest:
    """Place `count` instances of `template` at random positions."""
    template: AreaTemplate
    count: int
    kind: PlacementKind


def min_outpost_distance(width: int, height: int, outpost_count: int) -> float:
    """Spacing between area centres; tightens as more outposts are requested."""
    return 0.5 * math.sqrt(width * width + height * height) / math.sqrt(outpost_count + 1)


def template_center(template: AreaTemplate, start_x: int, start_y: int) -> Vector2:
    return Vector2(start_x + template.width / 2, start_y + template.height / 2)


class AreaPlacer:
    """
    Places area templates on a grid and records what was placed.

    Attributes:
        reservations: Fixed rectangles random areas may not overlap
        records: Accepted placements in placement order
        events: Spawn/outpost marker events in stamping order
    """

    def __init__(self, grid: Grid, rng: random.Random, min_distance: float = 0.0):
        self.grid = grid
        self.rng = rng
        self.min_distance = min_distance
        self.reservations: List[pygame.Rect] = []
        self.centers: List[Vector2] = []
        self.records: List[PlacementRecord] = []
        self.events: List[PlacementEvent] = []

    def reserve(self, rects: Iterable[pygame.Rect]) -> None:
        """Register fixed reservations (boundary strips, corner blocks)."""
        self.reservations.extend(pygame.Rect(r) for r in rects)

    def place_fixed_areas(self, config: WorldConfig, spawn_template: Optional[AreaTemplate]) -> List[PlacementRecord]:
        """
        Stamp areas whose position derives from the world size alone.

        With SpawnPlacement.FIXED the spawn room goes centred horizontally at
        70% of the world height; its rectangle becomes a reservation and its
        centre counts for outpost spacing.
        """
        placed: List[PlacementRecord] = []
        if spawn_template is None or config.spawn_placement != SpawnPlacement.FIXED:
            return placed

        start_x = self.grid.width // 2 - spawn_template.width // 2
        start_y = int(self.grid.height * 0.7)
        record = self._accept(spawn_template, start_x, start_y, PlacementKind.SPAWN)
        self.reservations.append(record.rect)
        placed.append(record)
        return placed

    def place_random_areas(self, requests: Sequence[AreaRequest]) -> List[PlacementRecord]:
        """
        Place each requested instance at a random spot, in request order.

        Args:
            requests: Templates with instance counts; spawn should come first

        Returns:
            Records of the instances that were placed (may be fewer than requested)
        """
        placed: List[PlacementRecord] = []
        for request in requests:
            for index in range(request.count):
                record = self._place_one(request.template, request.kind)
                if record is None:
                    logger.debug(
                        "Skipped %s #%d (%s): no valid spot in %d attempts",
                        request.kind.value, index + 1, request.template.name, MAX_PLACEMENT_ATTEMPTS,
                    )
                    continue
                placed.append(record)
        return placed

    def _place_one(self, template: AreaTemplate, kind: PlacementKind) -> Optional[PlacementRecord]:
        tw, th = template.width, template.height
        max_x = self.grid.width - tw
        max_y = self.grid.height - th
        if tw >= max_x or th >= max_y:
            # Sampling range [size, world - size) is empty
            return None

        for _ in range(MAX_PLACEMENT_ATTEMPTS):
            start_x = self.rng.randrange(tw, max_x)
            start_y = self.rng.randrange(th, max_y)

            center = template_center(template, start_x, start_y)
            if self._too_close(center):
                continue
            if pygame.Rect(start_x, start_y, tw, th).collidelist(self.reservations) != -1:
                continue

            return self._accept(template, start_x, start_y, kind)
        return None

    def _too_close(self, center: Vector2) -> bool:
        for other in self.centers:
            if center.distance_to(other) < self.min_distance:
                return True
        return False

    def _accept(self, template: AreaTemplate, start_x: int, start_y: int, kind: PlacementKind) -> PlacementRecord:
        center = template_center(template, start_x, start_y)
        self.stamp(template, start_x, start_y)
        self.centers.append(center)
        record = PlacementRecord(
            kind=kind,
            template=template,
            anchor=(start_x, start_y),
            center=(center.x, center.y),
        )
        self.records.append(record)
        logger.debug("Placed %s %s at (%d, %d)", kind.value, template.name, start_x, start_y)
        return record

    def stamp(self, template: AreaTemplate, start_x: int, start_y: int) -> List[PlacementEvent]:
        """
        Apply a template with its bottom-left cell at (start_x, start_y).

        Cells outside the world and cells that are already protected are
        skipped. Marker symbols emit events at their world position.
        """
        emitted: List[PlacementEvent] = []
        grid = self.grid
        for dy in range(template.height):
            for dx in range(template.width):
                x = start_x + dx
                y = start_y + dy
                if not grid.in_bounds(x, y) or grid.is_protected(x, y):
                    continue

                symbol = template.symbol_at(dx, dy)
                if symbol == PLAIN_WALL:
                    grid.set_tile(x, y, TileType.WALL)
                elif symbol == PROTECTED_WALL:
                    grid.set_tile(x, y, TileType.WALL, protect=True)
                elif symbol == PROTECTED_AIR:
                    grid.set_tile(x, y, TileType.AIR, protect=True)
                elif symbol == SPAWN_MARKER:
                    grid.set_tile(x, y, TileType.AIR, protect=True)
                    emitted.append(PlacementEvent(PlacementKind.SPAWN, (x, y)))
                elif symbol == OUTPOST_MARKER:
                    grid.set_tile(x, y, TileType.AIR, protect=True)
                    emitted.append(PlacementEvent(PlacementKind.OUTPOST, (x, y)))

        self.events.extend(emitted)
        return emitted
