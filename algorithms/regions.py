"""
Region analysis on an availability grid
- edged_region: flood fill from a seed, free cells map to True and the
  occupied cells bordering them map to False (the region's "edges")
- all_regions: partition every free cell into disjoint regions
- region_signature: structural key of what is left reachable from a path tip
"""

from __future__ import annotations
from typing import Dict, FrozenSet, List, Mapping, Optional, Tuple, Union

from .availability import AvailabilityGrid
from .positions import GridPosition, neighbours

EdgedRegion = Dict[GridPosition, bool]
RegionSignature = Tuple[GridPosition, FrozenSet[GridPosition]]


def edged_region(seed: GridPosition, grid: AvailabilityGrid, region: EdgedRegion = None) -> EdgedRegion:
    """
    Flood fill the free region containing `seed`.

    Every cell is visited at most once. Positions outside the grid are not
    cells and are never recorded.

    Args:
        seed: Start position
        grid: Grid to fill over (read only)
        region: Optional region to keep filling into; already checked cells are skipped

    Returns:
        dict mapping position -> True (free, in region) / False (edge)
    """
    if region is None:
        region = {}

    stack = [seed]
    while stack:
        position = stack.pop()
        if position in region or not grid.is_position_valid(position):
            continue
        if not grid.is_viable(position):
            region[position] = False
            continue
        region[position] = True
        stack.extend(neighbours(position))

    return region


def count_free(region: Mapping[GridPosition, bool]) -> int:
    """Number of free cells in a region."""
    return sum(1 for viable in region.values() if viable)


def free_cells(region: Mapping[GridPosition, bool]) -> FrozenSet[GridPosition]:
    return frozenset(position for position, viable in region.items() if viable)


def first_free(area: Union[AvailabilityGrid, Mapping[GridPosition, bool]]) -> Optional[GridPosition]:
    """
    First free cell of a grid (row by row) or of a region (in fill order).
    Returns None when there is none.
    """
    if isinstance(area, AvailabilityGrid):
        for position in area.positions():
            if area.is_viable(position):
                return position
        return None

    for position, viable in area.items():
        if viable:
            return position
    return None


def all_regions(grid: AvailabilityGrid) -> List[EdgedRegion]:
    """Split every free cell of the grid into disjoint connected regions."""
    regions = []
    claimed = set()
    for position in grid.free_positions():
        if position in claimed:
            continue
        region = edged_region(position, grid)
        claimed.update(free_cells(region))
        regions.append(region)
    return regions


def region_contains(region: Mapping[GridPosition, bool], position: Optional[GridPosition]) -> bool:
    return position is not None and region.get(position) is True


def reachable_from(tip: GridPosition, grid: AvailabilityGrid) -> EdgedRegion:
    """
    Region reachable by stepping off `tip` (which itself may be occupied).
    The fills from each free neighbour are merged into one region.
    """
    region: EdgedRegion = {}
    for position in neighbours(tip):
        edged_region(position, grid, region)
    return region


def region_signature(tip: GridPosition, grid: AvailabilityGrid) -> RegionSignature:
    return tip, free_cells(reachable_from(tip, grid))

