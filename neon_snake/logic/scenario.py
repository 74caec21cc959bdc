# neon_snake/logic/scenario.py
import logging
import random

from neon_snake.config import GRID_SIZE, MAX_RANDOM_ATTEMPTS
from neon_snake.errors import GridFullError
from neon_snake.logic.board import Position, all_cells

logger = logging.getLogger(__name__)


class PositionGenerator:
    """Coloca comida y obstáculos en celdas libres del tablero."""

    def __init__(self, rng=None, size=GRID_SIZE, max_attempts=MAX_RANDOM_ATTEMPTS):
        self.rng = rng if rng is not None else random.Random()
        self.size = size
        self.max_attempts = max_attempts

    def random_position(self, exclude):
        """
        Returns a random position not included in exclude.

        Tries a bounded number of uniform draws first; when the board is
        crowded it falls back to choosing among the free cells directly.
        Raises GridFullError when every cell is excluded.
        """
        for _ in range(self.max_attempts):
            pos = Position(self.rng.randrange(self.size), self.rng.randrange(self.size))
            if pos not in exclude:
                return pos

        free = [cell for cell in all_cells(self.size) if cell not in exclude]
        if not free:
            raise GridFullError(requested=1, free=0)
        logger.debug("random draws exhausted, picking among %d free cells", len(free))
        return self.rng.choice(free)

    def free_cells(self, exclude):
        return sum(1 for cell in all_cells(self.size) if cell not in exclude)

    def sample_food(self, snake, obstacles):
        return self.random_position(set(snake) | set(obstacles))

    def sample_obstacles(self, count, snake):
        """
        Returns exactly `count` distinct cells off the snake's body.
        The set is always built from scratch.
        """
        exclude = set(snake)
        free = self.free_cells(exclude)
        if count > free:
            raise GridFullError(requested=count, free=free)

        obstacles = set()
        for _ in range(count):
            pos = self.random_position(exclude)
            obstacles.add(pos)
            exclude.add(pos)
        return frozenset(obstacles)
