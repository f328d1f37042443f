"""
The snake itself - an ordered list of body parts, head first.
body_length is how long the snake is allowed to be; it grows one step at a
time after eating, so it may be ahead of the number of body parts.
"""

from dataclasses import dataclass
from typing import List, Optional

from algorithms.positions import Direction, GridPosition, step


@dataclass
class MoveResult:
    new_head: GridPosition
    removed: Optional[GridPosition] = None


class Snake:
    def __init__(self, body_parts: List[GridPosition] = None, body_length: int = None):
        if not body_parts:
            body_parts = [GridPosition(2, 2)]
        self.body_parts = [GridPosition(*part) for part in body_parts]
        self.body_length = len(self.body_parts) if body_length is None else body_length
        if self.body_length < len(self.body_parts):
            raise ValueError("body_length cannot be shorter than the body")

    @property
    def head(self) -> GridPosition:
        return self.body_parts[0]

    def grow(self):
        """Allow one more body part; the tail stays put on the next move."""
        self.body_length += 1

    def move(self, direction: Direction) -> MoveResult:
        """
        Push a new head in the given direction.
        Only one part is ever added, so at most one is removed from the tail.
        """
        new_head = step(self.head, direction)
        self.body_parts.insert(0, new_head)
        result = MoveResult(new_head)
        if len(self.body_parts) > self.body_length:
            result.removed = self.body_parts.pop()
        return result

    def __len__(self):
        return len(self.body_parts)
