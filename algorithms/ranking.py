"""
Direction ranking heuristic

Orders candidate moves from a position, best first:
  1. landing on the apple
  2. not splitting the free region
  3. the region left can hold the whole body
  4. bigger region
  5. region still containing the apple
  6. more blocked neighbours (hug edges, keep open space open)
Everything is recomputed per call since the grid changes between calls.
"""

from __future__ import annotations
from typing import List, Optional, Sequence, Tuple

from .availability import AvailabilityGrid
from .positions import Direction, GridPosition, neighbours, step
from .regions import count_free, edged_region, region_contains
from .splits import SplitDetector


class DirectionRanker:
    def __init__(self, grid: AvailabilityGrid, apple: Optional[GridPosition], body_length: int,
                 splits: SplitDetector = None):
        self.grid = grid
        self.apple = apple
        self.body_length = body_length
        self.splits = splits if splits is not None else SplitDetector(grid)

    def rank(self, directions: Sequence[Direction], source: GridPosition) -> List[Direction]:
        """
        Sort directions from `source`. The sort is stable, so the incoming
        order breaks any remaining ties.
        """
        keys = {direction: self._score(step(source, direction)) for direction in directions}
        return sorted(directions, key=lambda direction: keys[direction])

    def _score(self, target: GridPosition) -> Tuple:
        if not self.grid.is_viable(target):
            return (1,)

        on_apple = self.apple is not None and target == self.apple
        splits = self.splits.would_split(target)
        region = edged_region(target, self.grid)
        size = count_free(region)
        fits = size >= self.body_length
        has_apple = region_contains(region, self.apple)

        return (0, not on_apple, splits, not fits, -size, not has_apple, -self.blocked_neighbours(target))

    def blocked_neighbours(self, position: GridPosition) -> int:
        """Neighbours that are occupied or off the grid."""
        return sum(1 for neighbour in neighbours(position) if not self.grid.is_viable(neighbour))
