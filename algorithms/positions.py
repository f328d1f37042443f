"""
Coordinate arithmetic for the snake grid
- Positions are immutable (x, y) pairs, y grows downward
- Directions: 0=UP, 1=DOWN, 2=LEFT, 3=RIGHT
- No wraparound and no diagonal moves
"""

from __future__ import annotations
from enum import IntEnum
from typing import List, NamedTuple


class GridPosition(NamedTuple):
    x: int
    y: int


class Direction(IntEnum):
    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3

    @property
    def reverse(self) -> Direction:
        return REVERSE[self]


DIRS = {
    Direction.UP: GridPosition(0, -1),
    Direction.DOWN: GridPosition(0, 1),
    Direction.LEFT: GridPosition(-1, 0),
    Direction.RIGHT: GridPosition(1, 0),
}

REVERSE = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

ALL_DIRECTIONS = [Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT]


def step(position: GridPosition, direction: Direction) -> GridPosition:
    """Return the position one cell away from `position` in `direction`."""
    dx, dy = DIRS[direction]
    return GridPosition(position[0] + dx, position[1] + dy)


def neighbours(position: GridPosition) -> List[GridPosition]:
    return [step(position, direction) for direction in ALL_DIRECTIONS]


def is_adjacent(a: GridPosition, b: GridPosition) -> bool:
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1


def is_identical(a: GridPosition, b: GridPosition) -> bool:
    return a[0] == b[0] and a[1] == b[1]


def direction_between(a: GridPosition, b: GridPosition) -> Direction:
    """Convert a move from position a to position b into a direction."""
    dx, dy = b[0] - a[0], b[1] - a[1]
    if (dx, dy) == (0, -1): return Direction.UP
    if (dx, dy) == (0,  1): return Direction.DOWN
    if (dx, dy) == (-1, 0): return Direction.LEFT
    if (dx, dy) == (1,  0): return Direction.RIGHT
    raise RuntimeError(f"Non-adjacent step {a}->{b}")


def weighted_directions(source: GridPosition, target: GridPosition) -> List[Direction]:
    """
    Order all four directions by how directly they lead from source to target.

    The axis with the larger distance is the primary axis (horizontal when the
    rows already match). The result is: primary toward, secondary toward,
    secondary away, primary away. A zero distance on an axis counts as
    "toward" the positive direction, which keeps the ordering total.

    Args:
        source: position moving
        target: position to move toward

    Returns:
        list of the 4 directions, most direct first
    """
    dx = target[0] - source[0]
    dy = target[1] - source[1]

    horizontal = (Direction.RIGHT, Direction.LEFT) if dx >= 0 else (Direction.LEFT, Direction.RIGHT)
    vertical = (Direction.DOWN, Direction.UP) if dy >= 0 else (Direction.UP, Direction.DOWN)

    if abs(dx) > abs(dy) or dy == 0:
        primary, secondary = horizontal, vertical
    else:
        primary, secondary = vertical, horizontal

    return [primary[0], secondary[0], secondary[1], primary[1]]


def direct_direction(source: GridPosition, target: GridPosition) -> Direction:
    """The naive direction: straight toward the target, ignoring obstacles."""
    return weighted_directions(source, target)[0]
