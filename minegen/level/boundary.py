"""
Indestructible world boundary: a border ring or four corner blocks.
"""

import logging
from typing import List

import pygame

from minegen.level.grid import Grid
from minegen.tiles.tile_types import TileType

logger = logging.getLogger(__name__)


class BoundaryCarver:
    """Marks boundary cells as BOUNDARY and protected.

    Both variants return the rectangles they reserve so area placement can
    keep templates off them.
    """

    def __init__(self, grid: Grid):
        self.grid = grid

    def carve(self, boundary_width: int) -> List[pygame.Rect]:
        """
        Mark the outermost boundary_width rows and columns.

        Args:
            boundary_width: Ring thickness in tiles; 0 carves nothing

        Returns:
            Reserved strips (bottom, top, left, right), clipped to the grid
        """
        if boundary_width <= 0:
            return []

        w, h = self.grid.width, self.grid.height
        bw = min(boundary_width, w, h)
        rects = [
            pygame.Rect(0, 0, w, bw),
            pygame.Rect(0, h - bw, w, bw),
            pygame.Rect(0, 0, bw, h),
            pygame.Rect(w - bw, 0, bw, h),
        ]
        carved = sum(self._fill_rect(rect) for rect in rects)
        logger.debug("Boundary ring width %d: %d cells", bw, carved)
        return rects

    def carve_corners(self, corner_size: int) -> List[pygame.Rect]:
        """
        Mark corner_size x corner_size blocks at each grid corner.

        Returns:
            The four corner rectangles, clipped to the grid
        """
        if corner_size <= 0:
            return []

        w, h = self.grid.width, self.grid.height
        cw = min(corner_size, w)
        ch = min(corner_size, h)
        rects = [
            pygame.Rect(0, 0, cw, ch),
            pygame.Rect(w - cw, 0, cw, ch),
            pygame.Rect(0, h - ch, cw, ch),
            pygame.Rect(w - cw, h - ch, cw, ch),
        ]
        carved = sum(self._fill_rect(rect) for rect in rects)
        logger.debug("Corner blocks size %d: %d cells", corner_size, carved)
        return rects

    def _fill_rect(self, rect: pygame.Rect) -> int:
        carved = 0
        for x in range(rect.left, rect.right):
            for y in range(rect.top, rect.bottom):
                if not self.grid.in_bounds(x, y) or self.grid.is_protected(x, y):
                    continue
                self.grid.set_tile(x, y, TileType.BOUNDARY, protect=True)
                carved += 1
        return carved
