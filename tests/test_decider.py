"""
Tests for the move decider and its configuration.
"""
import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from algorithms.config import DeciderConfig
from algorithms.cycle_search import SearchStatus
from algorithms.decider import MoveDecider, ResumeToken
from algorithms.positions import Direction, GridPosition
from game.board import Board, CellState
from game.environment import SnakeGame
from game.snake import Snake

# Head at (0, 0); the only free neighbour leads into a three cell dead end
CORRIDOR_BODY = [(0, 0), (0, 1), (1, 1), (2, 1), (3, 1), (4, 1), (4, 0)]


def make_board(size, body, apple=None):
    board = Board(size, Snake([GridPosition(*part) for part in body]))
    if apple is not None:
        board.apple = GridPosition(*apple)
        board.set_state(board.apple, CellState.APPLE)
    return board


class TestNaiveMoves:
    """Tests where no search is needed."""

    def test_open_board_heads_for_apple(self):
        """Test that a short snake moves straight toward the apple."""
        decider = MoveDecider(make_board(4, [(0, 0)], apple=(3, 3)))
        assert decider.decide() == Direction.DOWN
        assert decider.search.status == SearchStatus.IDLE

    def test_short_snake_never_searches(self):
        """Test that a snake shorter than four parts skips the search."""
        decider = MoveDecider(make_board(5, [(0, 0), (1, 0), (2, 0)], apple=(4, 4)))
        decider.decide()
        assert decider.last_outcome is None

    def test_long_snake_with_safe_move(self):
        """Test that a long snake keeps the naive move when it is harmless."""
        decider = MoveDecider(make_board(6, [(0, 5), (0, 4), (0, 3), (0, 2)], apple=(5, 5)))
        assert decider.decide() == Direction.RIGHT
        assert decider.last_outcome is None

    def test_collision_correction(self):
        """Test that a blocked naive move is swapped for the next free one."""
        decider = MoveDecider(make_board(5, [(0, 0), (0, 1)], apple=(0, 4)))
        assert decider.decide() == Direction.RIGHT

    def test_enclosed_head_returns_naive(self):
        """Test that with nowhere to go the naive direction is still returned."""
        decider = MoveDecider(make_board(3, [(0, 0), (1, 0), (1, 1), (0, 1)], apple=(2, 2)))
        assert decider.decide() == Direction.DOWN
        assert decider.decide_until_move() == Direction.DOWN

    def test_set_target(self):
        """Test that moving the apple changes the decision."""
        decider = MoveDecider(make_board(4, [(1, 1)], apple=(3, 1)))
        assert decider.decide() == Direction.RIGHT
        decider.set_target(GridPosition(1, 3))
        assert decider.decide() == Direction.DOWN

    def test_no_apple_chases_tail(self):
        """Test that without an apple the tail becomes the target."""
        board = make_board(4, [(0, 0), (1, 0), (1, 1)])
        decider = MoveDecider(board)
        decider.set_target(None)
        assert decider.decide() == Direction.DOWN


class TestSearchDriven:
    """Tests where the naive move would trap the snake."""

    def test_first_call_returns_token(self):
        """Test that a paused search hands back a resume token."""
        decider = MoveDecider(make_board(5, CORRIDOR_BODY, apple=(4, 4)))
        result = decider.decide()
        assert isinstance(result, ResumeToken)
        assert len(result.cursor) == 2

    def test_resuming_reaches_a_direction(self):
        """Test that feeding tokens back eventually yields the only safe move."""
        decider = MoveDecider(make_board(5, CORRIDOR_BODY, apple=(4, 4)))
        result = decider.decide()
        calls = 1
        while isinstance(result, ResumeToken):
            result = decider.decide(result)
            calls += 1
            assert calls < 100
        assert result == Direction.RIGHT

    def test_decide_until_move(self):
        """Test the convenience loop."""
        decider = MoveDecider(make_board(5, CORRIDOR_BODY, apple=(4, 4)))
        assert decider.decide_until_move() == Direction.RIGHT

    def test_resume_limit_uses_longest_path(self):
        """Test that running out of resumes falls back to the longest path."""
        decider = MoveDecider(make_board(5, CORRIDOR_BODY, apple=(4, 4)))
        assert decider.decide_until_move(max_resumes=0) == Direction.RIGHT

    def test_without_suspension(self):
        """Test that a non-suspending decider answers in one call."""
        config = DeciderConfig(suspend_search=False)
        decider = MoveDecider(make_board(5, CORRIDOR_BODY, apple=(4, 4)), config)
        assert decider.decide() == Direction.RIGHT

    def test_resumes_do_not_repeat_work(self):
        """Test that a paused search places no more cells than an uninterrupted one."""
        paused = MoveDecider(make_board(5, CORRIDOR_BODY, apple=(4, 4)))
        straight = MoveDecider(make_board(5, CORRIDOR_BODY, apple=(4, 4)), DeciderConfig(suspend_search=False))
        assert paused.decide_until_move() == straight.decide_until_move() == Direction.RIGHT
        assert paused.search.placements == straight.search.placements == 3

    def test_stale_token_is_discarded(self):
        """Test that a token from another board state acts like a fresh call."""
        token = MoveDecider(make_board(5, CORRIDOR_BODY, apple=(4, 4))).decide()
        other = MoveDecider(make_board(5, CORRIDOR_BODY, apple=(4, 3)))
        resumed = other.decide(token)
        fresh = other.decide()
        assert isinstance(fresh, ResumeToken)
        assert resumed == fresh
        assert fresh.fingerprint != token.fingerprint

    def test_search_path_is_a_copy(self):
        """Test that the overlay path cannot change the search state."""
        decider = MoveDecider(make_board(5, CORRIDOR_BODY, apple=(4, 4)))
        decider.decide()
        path = decider.current_search_path()
        assert path == [GridPosition(1, 0), GridPosition(2, 0)]
        path.append(GridPosition(3, 0))
        assert decider.current_search_path() == [GridPosition(1, 0), GridPosition(2, 0)]

    def test_board_is_not_mutated(self):
        """Test that deciding never touches the board cells."""
        board = make_board(5, CORRIDOR_BODY, apple=(4, 4))
        before = board.cells.copy()
        MoveDecider(board).decide_until_move()
        assert (board.cells == before).all()


class TestDeterminism:
    """Tests that equal inputs give equal decisions."""

    def test_fresh_deciders_agree_during_a_game(self):
        """Test two fresh deciders on every board of a seeded game."""
        game = SnakeGame(render=False, grid_size=7, seed=5)
        for _ in range(80):
            first = MoveDecider(game.board).decide_until_move()
            second = MoveDecider(game.board).decide_until_move()
            assert first == second
            _, _, done = game.play_tick()
            if done:
                break


class TestDeciderConfig:
    """Tests for the dataclass configuration."""

    def test_defaults(self):
        """Test the default thresholds."""
        config = DeciderConfig()
        assert config.min_search_body_length == 4
        assert config.early_exit_margin == 1
        assert config.suspend_search is True
        assert config.close_cycle is False

    @pytest.mark.parametrize("field,value", [
        ("min_search_body_length", 0),
        ("early_exit_margin", -1),
        ("max_expansions", 0),
        ("max_resumes_per_tick", 0),
    ])
    def test_invalid_values(self, field, value):
        """Test that out-of-range values are rejected."""
        with pytest.raises(ValueError):
            DeciderConfig(**{field: value})

    def test_from_dict_ignores_unknown_keys(self):
        """Test loading from a loose dictionary."""
        config = DeciderConfig.from_dict({'close_cycle': True, 'colour': 'green'})
        assert config.close_cycle is True

    def test_dict_round_trip(self):
        """Test that to_dict feeds back into from_dict."""
        config = DeciderConfig(early_exit_margin=3, max_expansions=None)
        assert DeciderConfig.from_dict(config.to_dict()) == config
