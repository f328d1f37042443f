"""
Split detection - would filling a cell cut its free region into pieces?

Two stages:
1. Local probe on the 3x3 window around the cell. If filling the centre
   does not raise the window's region count, nothing can split.
2. Only when the window says "maybe", check the full grid: flood fill
   from one representative of each local piece on a copy with the cell
   filled, and see whether pieces that used to share the cell's region
   are still connected.
"""

from __future__ import annotations
import logging

from .availability import AvailabilityGrid
from .positions import GridPosition
from .regions import all_regions, edged_region, first_free, region_contains

logger = logging.getLogger(__name__)


class SplitDetector:
    def __init__(self, grid: AvailabilityGrid):
        self.grid = grid

    def would_split(self, position: GridPosition) -> bool:
        """
        Predict whether marking `position` occupied splits the free region.

        Args:
            position: cell about to be filled (must be free to ever split)

        Returns:
            True if the region containing `position` falls into 2+ pieces
        """
        if not self.grid.is_viable(position):
            return False

        local, offset = self.grid.window(position)
        center = GridPosition(position.x - offset.x, position.y - offset.y)

        before = len(all_regions(local))
        local.occupy(center)
        pieces = all_regions(local)

        # Filling a cell removes it from its region; the count only grows
        # when the rest of that region falls apart locally.
        if len(pieces) <= before:
            return False

        return self._splits_globally(position, pieces, offset)

    def _splits_globally(self, position, pieces, offset) -> bool:
        original = edged_region(position, self.grid)

        filled = self.grid.copy()
        filled.occupy(position)

        representatives = []
        for piece in pieces:
            local = first_free(piece)
            rep = GridPosition(local.x + offset.x, local.y + offset.y)
            if region_contains(original, rep):
                representatives.append(rep)

        if len(representatives) < 2:
            return False

        reached = edged_region(representatives[0], filled)
        for rep in representatives[1:]:
            if not region_contains(reached, rep):
                logger.debug("Filling %s separates %s from %s", position, representatives[0], rep)
                return True
        return False
