# neon_snake/logic/levels.py
import logging

from neon_snake.config import INITIAL_SPEED, LEVEL_UP_SCORE, MIN_SPEED, SPEED_STEP
from neon_snake.logic.events import LevelUp

logger = logging.getLogger(__name__)


def speed_for(level):
    """Intervalo de tick (ms) para un nivel dado."""
    return max(MIN_SPEED, INITIAL_SPEED - SPEED_STEP * (level - 1))


def obstacle_count(level):
    return level // 2


def crosses_threshold(score):
    return score > 0 and score % LEVEL_UP_SCORE == 0


class LevelManager:
    def __init__(self, generator):
        self.generator = generator

    def advance(self, state):
        """
        Levels up: speeds up the tick, replaces the obstacles and starts
        the transition. Returns the LevelUp event.

        Only the snake is excluded when placing obstacles; the current
        food cell may be covered.
        """
        state.level += 1
        state.speed = max(MIN_SPEED, state.speed - SPEED_STEP)

        count = min(obstacle_count(state.level), self.generator.free_cells(set(state.snake)))
        state.obstacles = self.generator.sample_obstacles(count, state.snake)
        state.level_transition_active = True

        logger.info("⬆️ Level %d: speed %d ms, %d obstacle(s)", state.level, state.speed, count)
        return LevelUp(level=state.level, obstacle_count=count, speed=state.speed)
