"""
Snake game driven by the move decider
Supports both headless (fast benchmarking) and visual (watch the engine play) modes
"""

import logging
import random
import sys
import time
from collections import deque

import pygame

from algorithms.config import DeciderConfig
from algorithms.decider import MoveDecider
from algorithms.positions import GridPosition, step
from .board import Board
from .snake import Snake

logger = logging.getLogger(__name__)


def cell_rect(position, cell_size):
    """Pixel rectangle of a grid cell"""
    return pygame.Rect(position[0] * cell_size, position[1] * cell_size, cell_size, cell_size)


def cell_center(position, cell_size):
    """Pixel center of a grid cell"""
    return (position[0] * cell_size + cell_size // 2, position[1] * cell_size + cell_size // 2)


class SnakeGame:
    def __init__(self, render=False, grid_size=20, cell_size=None, fps=60, speed_cells=6,
                 seed=None, config=None, initial_body=None):
        """
        Initialize the game

        Args:
            render: If True, show pygame window (for watching the engine play)
            grid_size: Number of cells on both axes
            cell_size: Size of each cell in pixels (None = auto-calculate to fit screen, only matters if render=True)
            fps: Frames per second (only matters if render=True)
            speed_cells: Movement speed in cells per second (only matters if render=True)
            seed: Seed for apple placement
            config: DeciderConfig for the move decider
            initial_body: Optional starting body, head first
        """
        self.render_mode = render
        self.grid_size = grid_size
        self.fps = fps
        self.speed_cells = speed_cells
        self.config = config if config is not None else DeciderConfig()
        self.initial_body = initial_body
        self.show_search_path = True  # Can be set externally or toggled with P
        self._seed_rng = random.Random(seed)

        if render and cell_size is None:
            pygame.init()
            display_info = pygame.display.Info()
            # Leave some margin (90% of screen size), cap at 60px for small grids
            fit = int(min(display_info.current_w, display_info.current_h) * 0.9) // grid_size
            cell_size = min(fit, 60)
            print(f"Auto-calculated cell size: {cell_size}px (Window: {cell_size * grid_size}x{cell_size * grid_size})")
        elif cell_size is None:
            cell_size = 30

        self.cell_size = cell_size

        if self.render_mode:
            pygame.init()
            frame = grid_size * cell_size
            self.game_window = pygame.display.set_mode((frame, frame), pygame.RESIZABLE)
            pygame.display.set_caption('Snake Engine')
            self.fps_controller = pygame.time.Clock()
            self.score_font = pygame.font.SysFont('consolas', 20)

            self.background = pygame.Color(51, 51, 51)
            self.body_col = pygame.Color(255, 255, 255)
            self.head_col = pygame.Color(127, 255, 0)
            self.apple_col = pygame.Color(220, 20, 60)
            self.path_col = pygame.Color(135, 206, 250)
            self.grid_col = pygame.Color(40, 40, 40)

        self.reset()

    def reset(self):
        """Reset the game to its initial state"""
        body = list(self.initial_body) if self.initial_body else [GridPosition(2, 2)]
        self.board = Board(self.grid_size, Snake(body), seed=self._seed_rng.randrange(2 ** 32))
        self.decider = MoveDecider(self.board, self.config)
        self.decider.set_target(self.board.spawn_apple())

        self.score = 0
        self.steps = 0
        self.game_over = False
        self.death_reason = None
        self.decision_times = deque(maxlen=100)
        return self.board

    def step(self, direction):
        """
        Move the snake one cell

        Args:
            direction: Direction to move in

        Returns:
            ate: whether the apple was eaten
            done: whether the game is over
        """
        if self.game_over:
            return False, True

        self.steps += 1
        target = step(self.board.snake.head, direction)
        if not self.board.may_move(direction):
            self.game_over = True
            self.death_reason = 'wall' if not self.board.is_position_valid(target) else 'self'
            logger.info("Game over after %d steps: hit %s", self.steps, self.death_reason)
            return False, True

        move = self.board.snake.move(direction)
        self.board.apply_move(move)

        ate = self.board.apple is not None and move.new_head == self.board.apple
        if ate:
            self.score += 1
            self.board.snake.grow()
            self.decider.set_target(self.board.spawn_apple())
            if self.board.apple is None:
                # Nowhere left to put an apple - the board is filled
                self.game_over = True
                self.death_reason = None
                return True, True

        return ate, False

    def play_tick(self):
        """
        Ask the decider for a direction and apply it

        Returns:
            (direction, ate, done)
        """
        start = time.perf_counter()
        direction = self.decider.decide_until_move()
        self.decision_times.append(time.perf_counter() - start)

        if self.steps % 10 == 0 and self.decision_times:
            average = sum(self.decision_times) / len(self.decision_times)
            logger.debug("Average decision time over last %d ticks: %.2fms",
                         len(self.decision_times), average * 1000)

        ate, done = self.step(direction)
        return direction, ate, done

    @property
    def frames_per_move(self):
        """Rendered frames between two moves, from fps and speed_cells"""
        return max(1, int(self.fps / self.speed_cells))

    @property
    def average_decision_time(self):
        if not self.decision_times:
            return 0.0
        return sum(self.decision_times) / len(self.decision_times)

    def _recalculate_display(self, new_width, new_height):
        """Recalculate cell size based on new window size"""
        self.cell_size = max(1, min(new_width, new_height) // self.grid_size)

    def render_frame(self):
        """Render the current game state (only if render_mode=True)"""
        if not self.render_mode:
            return

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit()
                sys.exit()

            if event.type == pygame.VIDEORESIZE:
                self._recalculate_display(event.w, event.h)
                frame = self.grid_size * self.cell_size
                self.game_window = pygame.display.set_mode((frame, frame), pygame.RESIZABLE)

            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    pygame.quit()
                    sys.exit()
                elif event.key == pygame.K_p:
                    self.show_search_path = not self.show_search_path

        self.fps_controller.tick(self.fps)
        self.game_window.fill(self.background)

        frame = self.grid_size * self.cell_size
        for i in range(self.grid_size + 1):
            pygame.draw.line(self.game_window, self.grid_col, (i * self.cell_size, 0), (i * self.cell_size, frame))
            pygame.draw.line(self.game_window, self.grid_col, (0, i * self.cell_size), (frame, i * self.cell_size))

        snake = self.board.snake
        for part in snake.body_parts[1:]:
            pygame.draw.rect(self.game_window, self.body_col, cell_rect(part, self.cell_size))
        pygame.draw.rect(self.game_window, self.head_col, cell_rect(snake.head, self.cell_size))

        if self.board.apple is not None:
            pygame.draw.rect(self.game_window, self.apple_col, cell_rect(self.board.apple, self.cell_size))

        # Path the search last worked on, drawn from the head outward
        if self.show_search_path:
            path = self.decider.current_search_path()
            if path:
                points = [cell_center(p, self.cell_size) for p in [snake.head] + path]
                pygame.draw.lines(self.game_window, self.path_col, False, points, 2)

        score_text = self.score_font.render(f'Score: {self.score}', True, self.apple_col)
        self.game_window.blit(score_text, (10, 10))

        pygame.display.update()

    def close(self):
        """Clean up pygame resources"""
        if self.render_mode:
            pygame.quit()
