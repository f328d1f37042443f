"""
Board - authoritative game state for one snake and one apple.
Exposes the read-only view the move decider consumes each tick.
"""

import random
from enum import IntEnum
from typing import List, Optional

import numpy as np

from algorithms.positions import Direction, GridPosition, step
from .snake import MoveResult, Snake


class CellState(IntEnum):
    EMPTY = 0
    SNAKE = 1
    APPLE = 2


class Board:
    def __init__(self, size: int = 20, snake: Snake = None, seed: Optional[int] = None):
        """
        Args:
            size: Number of cells on both axes
            snake: Initial snake, defaults to a single part at (2, 2)
            seed: Seed for apple placement. If None, placement differs every run
        """
        if size < 2:
            raise ValueError("Board size must be at least 2")
        self.size = size
        self.snake = snake if snake is not None else Snake()
        self.apple: Optional[GridPosition] = None
        self._rng = random.Random(seed)

        # Indexed [y, x]
        self.cells = np.zeros((size, size), dtype=np.int8)
        for part in self.snake.body_parts:
            if not self.is_position_valid(part):
                raise ValueError(f"Snake part {part} is outside the {size}x{size} board")
            self.cells[part.y, part.x] = CellState.SNAKE

    # ------------ view consumed by the decider ------------
    @property
    def board_size(self) -> int:
        return self.size

    @property
    def agent_body(self) -> List[GridPosition]:
        return self.snake.body_parts

    @property
    def agent_target_length(self) -> int:
        return self.snake.body_length

    @property
    def apple_position(self) -> Optional[GridPosition]:
        return self.apple

    def is_cell_occupied_by_body(self, position: GridPosition) -> bool:
        return self.is_position_valid(position) and self.cells[position[1], position[0]] == CellState.SNAKE

    # ------------ state ------------
    def is_position_valid(self, position: GridPosition) -> bool:
        return 0 <= position[0] < self.size and 0 <= position[1] < self.size

    def get_state(self, position: GridPosition) -> CellState:
        return CellState(self.cells[position[1], position[0]])

    def set_state(self, position: GridPosition, state: CellState):
        self.cells[position[1], position[0]] = state

    def may_move(self, direction: Direction) -> bool:
        """True if the head can move in the direction without hitting a wall or the body."""
        target = step(self.snake.head, direction)
        return self.is_position_valid(target) and not self.is_cell_occupied_by_body(target)

    def empty_positions(self) -> List[GridPosition]:
        ys, xs = np.nonzero(self.cells == CellState.EMPTY)
        return [GridPosition(int(x), int(y)) for y, x in zip(ys, xs)]

    def spawn_apple(self) -> Optional[GridPosition]:
        """Place the apple on a random empty cell. None when the board is full."""
        if self.apple is not None and self.get_state(self.apple) == CellState.APPLE:
            self.set_state(self.apple, CellState.EMPTY)

        empties = self.empty_positions()
        self.apple = self._rng.choice(empties) if empties else None
        if self.apple is not None:
            self.set_state(self.apple, CellState.APPLE)
        return self.apple

    def apply_move(self, move: MoveResult):
        # A grown snake keeps its tail, so removed is None on the move after eating
        if move.removed is not None:
            self.set_state(move.removed, CellState.EMPTY)
        self.set_state(move.new_head, CellState.SNAKE)
