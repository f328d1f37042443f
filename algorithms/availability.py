"""
Availability grid - a dense 0/1 snapshot of the board
- 1 = free, 0 = occupied (snake body, or tentatively by the search path)
- Rebuilt once per decision, then mutated in place while searching
- Every lookup is bounds-checked, positions outside the grid are never indexed
"""

from __future__ import annotations
from typing import Iterator, List, Optional, Protocol, Sequence, Tuple

import numpy as np

from .positions import GridPosition

FREE = 1
OCCUPIED = 0


class BoardView(Protocol):
    """What the engine reads from the board/agent owner each tick."""

    @property
    def board_size(self) -> int: ...

    @property
    def agent_body(self) -> Sequence[GridPosition]: ...

    @property
    def agent_target_length(self) -> int: ...

    @property
    def apple_position(self) -> Optional[GridPosition]: ...

    def is_cell_occupied_by_body(self, position: GridPosition) -> bool: ...


class AvailabilityGrid:
    def __init__(self, width: int, height: int = None, cells: np.ndarray = None):
        """
        Args:
            width: Width of the grid (x dimension)
            height: Height of the grid (y dimension). If None, uses width (square grid)
            cells: Optional initial values indexed [y, x]. Defaults to all free.
        """
        if height is None:
            height = width
        self.width = width
        self.height = height
        if cells is None:
            self.cells = np.full((height, width), FREE, dtype=np.int8)
        else:
            if cells.shape != (height, width):
                raise ValueError(f"cells shape {cells.shape} does not match {width}x{height}")
            self.cells = cells.astype(np.int8, copy=True)

    @classmethod
    def from_board(cls, board: BoardView) -> AvailabilityGrid:
        """Snapshot the board: every cell occupied by the agent's body is 0."""
        grid = cls(board.board_size)
        for y in range(grid.height):
            for x in range(grid.width):
                if board.is_cell_occupied_by_body(GridPosition(x, y)):
                    grid.cells[y, x] = OCCUPIED
        return grid

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> AvailabilityGrid:
        """Build from nested rows, rows[y][x]. Handy for fixtures and debugging."""
        cells = np.array(rows, dtype=np.int8)
        height, width = cells.shape
        return cls(width, height, cells)

    @property
    def size(self) -> int:
        return self.width

    def is_position_valid(self, position: GridPosition) -> bool:
        return 0 <= position[0] < self.width and 0 <= position[1] < self.height

    def is_viable(self, position: GridPosition) -> bool:
        """True if the position is on the grid and free."""
        if not self.is_position_valid(position):
            return False
        return self.cells[position[1], position[0]] == FREE

    def occupy(self, position: GridPosition) -> None:
        self.cells[position[1], position[0]] = OCCUPIED

    def release(self, position: GridPosition) -> None:
        self.cells[position[1], position[0]] = FREE

    def copy(self) -> AvailabilityGrid:
        return AvailabilityGrid(self.width, self.height, self.cells)

    def window(self, center: GridPosition, radius: int = 1) -> Tuple[AvailabilityGrid, GridPosition]:
        """
        Cut a (2r+1)x(2r+1) sub-grid centred on `center`.
        Cells that fall outside the board are occupied in the window.

        Returns:
            (sub-grid, offset) where global = local + offset
        """
        span = 2 * radius + 1
        offset = GridPosition(center[0] - radius, center[1] - radius)
        sub = np.full((span, span), OCCUPIED, dtype=np.int8)

        x0, y0 = max(offset.x, 0), max(offset.y, 0)
        x1, y1 = min(offset.x + span, self.width), min(offset.y + span, self.height)
        if x0 < x1 and y0 < y1:
            sub[y0 - offset.y:y1 - offset.y, x0 - offset.x:x1 - offset.x] = self.cells[y0:y1, x0:x1]
        return AvailabilityGrid(span, span, sub), offset

    def positions(self) -> Iterator[GridPosition]:
        """All positions, row by row."""
        for y in range(self.height):
            for x in range(self.width):
                yield GridPosition(x, y)

    def free_positions(self) -> List[GridPosition]:
        ys, xs = np.nonzero(self.cells == FREE)
        return [GridPosition(int(x), int(y)) for y, x in zip(ys, xs)]

    def free_count(self) -> int:
        return int(np.count_nonzero(self.cells == FREE))

    def fingerprint(self) -> bytes:
        return self.cells.tobytes()

    def __repr__(self) -> str:
        rows = ["".join("." if v == FREE else "#" for v in row) for row in self.cells]
        return f"AvailabilityGrid({self.width}x{self.height})\n" + "\n".join(rows)
