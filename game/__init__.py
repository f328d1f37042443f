"""Game module - Contains the board, the snake and the game driver"""
from .board import Board, CellState
from .environment import SnakeGame
from .snake import MoveResult, Snake

__all__ = ['Board', 'CellState', 'SnakeGame', 'MoveResult', 'Snake']
