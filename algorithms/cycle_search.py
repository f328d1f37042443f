"""
Resumable long-path search for the snake
- Depth first, extending a self-avoiding path from the cell next to the head
- Succeeds when the path fills the region it started in, or is already
  longer than the body (the snake can then always follow its own tail)
- Prunes a branch when the (tip, reachable region) pair was seen before
  in the same top-level attempt
- Can pause after entering every new branch and continue on a later call
  from a SearchCursor. The instance that paused keeps its frames and picks
  up where it stopped; a cursor from elsewhere replays the recorded
  choices deterministically

The search runs on an explicit stack of frames. Every cell placed on the
path is occupied in the grid and released again when the branch is
abandoned, so the grid is back to its snapshot state after every call.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Set, Tuple

from .availability import AvailabilityGrid
from .config import DeciderConfig
from .positions import Direction, GridPosition, direction_between, is_adjacent, step, weighted_directions
from .ranking import DirectionRanker
from .regions import RegionSignature, count_free, edged_region, region_signature

logger = logging.getLogger(__name__)


class SearchStatus(Enum):
    IDLE = "idle"
    SEARCHING = "searching"
    FOUND = "found"
    FOUND_PARTIAL = "found_partial"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class SearchCursor:
    """
    Where a paused search continues: choices[0] is the index of the first
    step among the ranked head directions, choices[d] the branch index
    picked at depth d.
    """
    choices: Tuple[int, ...] = ()

    def to_list(self) -> List[int]:
        return list(self.choices)

    @classmethod
    def from_list(cls, data: Sequence[int]) -> SearchCursor:
        return cls(tuple(int(index) for index in data))

    def __len__(self) -> int:
        return len(self.choices)


@dataclass
class SearchOutcome:
    status: SearchStatus
    direction: Optional[Direction] = None
    cursor: Optional[SearchCursor] = None
    path: List[GridPosition] = field(default_factory=list)


@dataclass
class _Frame:
    tip: GridPosition
    options: List[Direction]
    index: int = 0
    placed: Optional[GridPosition] = None


# Results of a single attempt / frame entry
_FOUND = "found"
_FAILED = "failed"
_SUSPENDED = "suspended"
_ABORTED = "aborted"
_OPEN = "open"
_PRUNED = "pruned"


class CycleSearch:
    def __init__(self, config: DeciderConfig = None):
        self.config = config if config is not None else DeciderConfig()
        self.status = SearchStatus.IDLE
        self.path: List[GridPosition] = []
        self.added: Set[GridPosition] = set()
        self.longest_path: List[GridPosition] = []
        self.desired_length = 0
        self.body_length = 0
        self.grid: Optional[AvailabilityGrid] = None
        self.ranker: Optional[DirectionRanker] = None
        # Totals over the whole search, across paused calls
        self.placements = 0
        self.prunes = 0
        self._expansions = 0
        # Live state of the current top-level attempt
        self._frames: List[_Frame] = []
        self._seen: Set[RegionSignature] = set()
        self._attempt_key: Optional[tuple] = None
        self._paused_at: Optional[Tuple[int, ...]] = None

    def reset(self) -> None:
        self.status = SearchStatus.IDLE
        self.path = []
        self.added = set()
        self.longest_path = []
        self._frames = []
        self._seen = set()
        self._attempt_key = None
        self._paused_at = None

    def search(self, grid: AvailabilityGrid, head: GridPosition, target: GridPosition,
               body_length: int, cursor: SearchCursor = None) -> SearchOutcome:
        """
        Look for a long, safe route starting next to the head.

        A cursor this instance handed out itself continues the paused attempt
        from its live frames. Any other cursor is replayed from the start.

        Args:
            grid: Availability snapshot, the head must already be occupied in it
            head: Current head position
            target: The apple (ranking prefers moves toward it)
            body_length: Length the snake will have
            cursor: Continuation of a paused search, None to start fresh

        Returns:
            SearchOutcome - FOUND with a direction, SEARCHING with a cursor,
            FOUND_PARTIAL with the first step of the longest path seen,
            or EXHAUSTED
        """
        self.grid = grid
        self.body_length = body_length
        self.ranker = DirectionRanker(grid, target, body_length)
        self._expansions = 0

        choices = cursor.to_list() if cursor else []
        key = (head, target, body_length, grid.fingerprint())
        live = bool(choices) and self._can_continue(key, choices)
        if not choices or self._attempt_key != key:
            self.longest_path = []
            self.placements = 0
            self.prunes = 0
        self._paused_at = None
        self.status = SearchStatus.SEARCHING

        candidates = self.ranker.rank(weighted_directions(head, target), head)
        start = choices[0] if choices else 0

        for index in range(start, len(candidates)):
            direction = candidates[index]
            first = step(head, direction)
            if not grid.is_viable(first):
                continue
            if not choices or choices[0] != index:
                choices = [index]
                live = False

            self.desired_length = count_free(edged_region(first, grid))
            if live:
                result = self._continue(choices)
                live = False
            else:
                self._attempt_key = key
                result = self._attempt(direction, first, choices)

            if result == _SUSPENDED:
                self._paused_at = tuple(choices)
                return SearchOutcome(SearchStatus.SEARCHING, cursor=SearchCursor(tuple(choices)),
                                     path=list(self.path))
            if result == _FOUND:
                self.status = SearchStatus.FOUND
                logger.debug("Path of %d cells found going %s", len(self.path), direction.name)
                return SearchOutcome(SearchStatus.FOUND, direction=direction, path=list(self.path))
            if result == _ABORTED:
                logger.warning("Search stopped after %d placements", self._expansions)
                break

        self._frames = []
        if self.longest_path:
            self.status = SearchStatus.FOUND_PARTIAL
            direction = direction_between(head, self.longest_path[0])
            logger.debug("No full path, following longest (%d cells) %s", len(self.longest_path), direction.name)
            return SearchOutcome(SearchStatus.FOUND_PARTIAL, direction=direction, path=list(self.longest_path))

        self.status = SearchStatus.EXHAUSTED
        return SearchOutcome(SearchStatus.EXHAUSTED)

    def _can_continue(self, key: tuple, choices: List[int]) -> bool:
        return (self.status == SearchStatus.SEARCHING and bool(self._frames)
                and self._attempt_key == key and self._paused_at == tuple(choices))

    def _attempt(self, direction: Direction, first: GridPosition, choices: List[int]) -> str:
        self.path = []
        self.added = set()
        self._frames = []
        self._seen = set()
        self._place(first)
        try:
            entered = self._enter(choices, direction)
            if entered != _OPEN:
                return _FOUND if entered == _FOUND else _FAILED
            return self._explore(choices)
        finally:
            self._release_path()

    def _continue(self, choices: List[int]) -> str:
        # The new snapshot is free everywhere the path ran, put it back
        for position in self.path:
            self.grid.occupy(position)
        try:
            return self._explore(choices)
        finally:
            self._release_path()

    def _explore(self, choices: List[int]) -> str:
        frames = self._frames
        while frames:
            frame = frames[-1]
            depth = len(frames)

            # Coming back from a failed child
            if frame.placed is not None:
                self._retract()
                frame.placed = None
                del choices[depth:]
                frame.index += 1

            descended = False
            while frame.index < len(frame.options):
                direction = frame.options[frame.index]
                position = step(frame.tip, direction)
                if position in self.added or not self.grid.is_viable(position):
                    frame.index += 1
                    continue

                if self._over_budget():
                    return _ABORTED

                self._place(position)
                frame.placed = position

                replaying = depth < len(choices)
                if replaying and choices[depth] != frame.index:
                    del choices[depth:]
                    replaying = False
                if not replaying and self.config.suspend_search:
                    choices.append(frame.index)

                entered = self._enter(choices, direction)
                if entered == _FOUND:
                    return _FOUND
                if entered == _OPEN:
                    if self.config.suspend_search and not replaying:
                        return _SUSPENDED
                    descended = True
                    break

                self._retract()
                frame.placed = None
                del choices[depth:]
                frame.index += 1

            if not descended:
                frames.pop()

        return _FAILED

    def _enter(self, choices: List[int], origin: Direction) -> str:
        tip = self.path[-1]
        if len(self.path) > len(self.longest_path):
            self.longest_path = list(self.path)

        if self._complete():
            return _FOUND

        signature = region_signature(tip, self.grid)
        if signature in self._seen:
            self.prunes += 1
            return _PRUNED
        self._seen.add(signature)

        depth = len(self._frames) + 1
        start = choices[depth] if depth < len(choices) else 0
        self._frames.append(_Frame(tip, self._options(tip, origin), start))
        return _OPEN

    def _options(self, tip: GridPosition, origin: Direction) -> List[Direction]:
        # Lean back toward where the path started so it tends to close up
        directions = [d for d in weighted_directions(tip, self.path[0]) if d != origin.reverse]
        return self.ranker.rank(directions, tip)

    def _complete(self) -> bool:
        length = len(self.path)
        done = length >= self.desired_length or length > self.body_length + self.config.early_exit_margin
        if done and self.config.close_cycle:
            return length > 1 and is_adjacent(self.path[-1], self.path[0])
        return done

    def _over_budget(self) -> bool:
        limit = self.config.max_expansions
        return limit is not None and self._expansions >= limit

    def _place(self, position: GridPosition) -> None:
        self.path.append(position)
        self.added.add(position)
        self.grid.occupy(position)
        self._expansions += 1
        self.placements += 1

    def _retract(self) -> None:
        position = self.path.pop()
        self.added.discard(position)
        self.grid.release(position)

    def _release_path(self) -> None:
        for position in self.path:
            self.grid.release(position)
