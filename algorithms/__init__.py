"""Algorithms module - the move decision engine for the snake"""
from .availability import AvailabilityGrid, BoardView
from .config import DeciderConfig
from .cycle_search import CycleSearch, SearchCursor, SearchOutcome, SearchStatus
from .decider import MoveDecider, ResumeToken
from .positions import Direction, GridPosition
from .ranking import DirectionRanker
from .splits import SplitDetector

__all__ = [
    'AvailabilityGrid', 'BoardView', 'DeciderConfig', 'CycleSearch', 'SearchCursor', 'SearchOutcome',
    'SearchStatus', 'MoveDecider', 'ResumeToken', 'Direction', 'GridPosition', 'DirectionRanker',
    'SplitDetector',
]
