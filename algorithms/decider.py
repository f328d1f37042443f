"""
Move decider - picks one direction per tick

1. Snapshot the board into an availability grid
2. Naive direction toward the apple, corrected if that cell is blocked
3. Search only if the snake is long enough to trap itself AND the naive
   cell would either cut the head off from the apple or split the free region
4. Search result: a direction, a ResumeToken to call back with, or a fallback
   (first step of the longest path seen, else the naive direction)

decide() never raises. When nothing is safe it still returns the naive
direction and the caller sees the collision.
"""

from __future__ import annotations
import hashlib
import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from .availability import AvailabilityGrid, BoardView
from .config import DeciderConfig
from .cycle_search import CycleSearch, SearchCursor, SearchOutcome, SearchStatus
from .positions import (Direction, GridPosition, direct_direction, direction_between, is_adjacent,
                        neighbours, step, weighted_directions)
from .regions import edged_region, region_contains
from .splits import SplitDetector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResumeToken:
    """A paused search, only valid for the board snapshot it was made from."""
    cursor: SearchCursor
    fingerprint: str


class MoveDecider:
    def __init__(self, board: BoardView, config: DeciderConfig = None):
        """
        Args:
            board: The board/agent owner, read once per decide() call
            config: Search thresholds. Defaults to DeciderConfig()
        """
        self.board = board
        self.config = config if config is not None else DeciderConfig()
        self.search = CycleSearch(self.config)
        self.target: Optional[GridPosition] = board.apple_position
        self.last_outcome: Optional[SearchOutcome] = None

    def set_target(self, apple: Optional[GridPosition]) -> None:
        """Called by the owner whenever the apple moves."""
        self.target = apple

    def current_search_path(self) -> List[GridPosition]:
        """Snapshot of the path being searched, for overlays only."""
        return list(self.search.path)

    def decide(self, resume: ResumeToken = None) -> Union[Direction, ResumeToken]:
        """
        Decide the next move.

        Args:
            resume: Token returned by the previous call, to continue its search

        Returns:
            Direction to move in, or a ResumeToken if the search paused
        """
        body = self.board.agent_body
        head = GridPosition(*body[0])
        grid = AvailabilityGrid.from_board(self.board)
        target = self._resolve_target(body)
        fingerprint = self._fingerprint(grid, head, target)

        naive = direct_direction(head, target)
        if not grid.is_viable(step(head, naive)):
            naive = self.attempt_naive_collision_correct(grid, head, target, naive)

        if not grid.is_viable(step(head, naive)):
            logger.debug("No free cell around %s, keeping %s", head, naive.name)
            self.search.reset()
            return naive

        cursor = None
        if resume is not None:
            if resume.fingerprint == fingerprint:
                cursor = resume.cursor
            else:
                logger.debug("Discarding resume token from a different board state")

        if cursor is None:
            if not self.should_search(grid, head, target, naive):
                self.search.reset()
                return naive

        outcome = self.search.search(grid, head, target, self.board.agent_target_length, cursor)
        self.last_outcome = outcome

        if outcome.status == SearchStatus.SEARCHING:
            return ResumeToken(outcome.cursor, fingerprint)
        if outcome.direction is not None:
            return outcome.direction

        logger.warning("Search exhausted from %s, falling back to %s", head, naive.name)
        return naive

    def decide_until_move(self, max_resumes: int = None) -> Direction:
        """
        Keep resuming a paused search until it produces a direction.
        Gives up after max_resumes calls and takes the best fallback.
        """
        if max_resumes is None:
            max_resumes = self.config.max_resumes_per_tick

        result = self.decide()
        resumes = 0
        while isinstance(result, ResumeToken):
            if resumes >= max_resumes:
                logger.warning("Search still running after %d resumes", resumes)
                return self._fallback_direction()
            result = self.decide(result)
            resumes += 1
        return result

    def should_search(self, grid: AvailabilityGrid, head: GridPosition, target: GridPosition,
                      naive: Direction) -> bool:
        """
        The search is expensive, only run it when the naive move looks risky.
        """
        # The snake cannot run into itself before it has 4 body parts
        if self.board.agent_target_length < self.config.min_search_body_length:
            return False

        next_cell = step(head, naive)
        if next_cell == target:
            return SplitDetector(grid).would_split(next_cell)

        filled = grid.copy()
        filled.occupy(next_cell)
        region = {}
        for neighbour in neighbours(next_cell):
            edged_region(neighbour, filled, region)
        if not region_contains(region, target):
            return True

        return SplitDetector(grid).would_split(next_cell)

    def attempt_naive_collision_correct(self, grid: AvailabilityGrid, head: GridPosition,
                                        target: GridPosition, direction: Direction) -> Direction:
        """Move out of a collision if possible, in order of directness."""
        for candidate in weighted_directions(head, target):
            if candidate != direction and grid.is_viable(step(head, candidate)):
                return candidate
        return direction

    def _resolve_target(self, body) -> GridPosition:
        # Board full, no apple to chase: chase the tail instead
        if self.target is not None:
            return self.target
        if self.board.apple_position is not None:
            return self.board.apple_position
        return body[-1]

    def _fallback_direction(self) -> Direction:
        longest = self.search.longest_path
        head = GridPosition(*self.board.agent_body[0])
        if longest and is_adjacent(head, longest[0]):
            return direction_between(head, longest[0])
        target = self._resolve_target(self.board.agent_body)
        grid = AvailabilityGrid.from_board(self.board)
        naive = direct_direction(head, target)
        if grid.is_viable(step(head, naive)):
            return naive
        return self.attempt_naive_collision_correct(grid, head, target, naive)

    @staticmethod
    def _fingerprint(grid: AvailabilityGrid, head: GridPosition, target: GridPosition) -> str:
        digest = hashlib.sha1(grid.fingerprint())
        digest.update(f"{head[0]},{head[1]}|{target[0]},{target[1]}".encode())
        return digest.hexdigest()
