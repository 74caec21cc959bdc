# neon_snake/logic/game_state.py
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from neon_snake.config import FOOD_POINTS, START_POSITION
from neon_snake.errors import GridFullError
from neon_snake.logic.achievements import AchievementTracker
from neon_snake.logic.board import Direction, Position
from neon_snake.logic.collision import collision_cause
from neon_snake.logic.events import GameOver
from neon_snake.logic.levels import LevelManager, crosses_threshold, speed_for
from neon_snake.logic.scenario import PositionGenerator

logger = logging.getLogger(__name__)


class Status(Enum):
    RUNNING = "running"
    PAUSED = "paused"
    LEVEL_TRANSITION = "level_transition"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of one frame, handed to the renderers."""

    snake: tuple
    food: Optional[Position]
    obstacles: frozenset
    score: int
    high_score: int
    level: int
    speed: int
    paused: bool
    game_over: bool
    level_transition_active: bool
    status: Status
    direction: Direction
    achievements: tuple = ()
    new_high_score: bool = False

    def to_dict(self):
        return {
            "snake": [p.to_list() for p in self.snake],
            "food": self.food.to_list() if self.food is not None else None,
            "obstacles": sorted(p.to_list() for p in self.obstacles),
            "score": self.score,
            "high_score": self.high_score,
            "level": self.level,
            "speed": self.speed,
            "paused": self.paused,
            "game_over": self.game_over,
            "new_high_score": self.new_high_score,
            "level_transition_active": self.level_transition_active,
            "status": self.status.value,
            "direction": self.direction.name.lower(),
            "achievements": [a.to_dict() for a in self.achievements],
        }


class GameState:
    """
    Full state of one game.

    Created by a reset and mutated in place by `tick()` until the game is
    over. High score and achievements outlive the instance: they are
    passed in and handed on to the next one.
    """

    def __init__(self, generator=None, tracker=None, high_score=0, on_high_score=None):
        self.generator = generator if generator is not None else PositionGenerator()
        self.tracker = tracker if tracker is not None else AchievementTracker()
        self.levels = LevelManager(self.generator)
        self.high_score = high_score
        self.on_high_score = on_high_score
        self._listeners = []

        self.snake = [Position(*START_POSITION)]
        self.direction = Direction.RIGHT
        self.pending_direction = Direction.RIGHT
        self.obstacles = frozenset()
        self.food = self.generator.sample_food(self.snake, self.obstacles)
        self.score = 0
        self.level = 1
        self.speed = speed_for(self.level)
        self.paused = False
        self.game_over = False
        self.new_high_score = False
        self.level_transition_active = False

    @property
    def status(self):
        if self.game_over:
            return Status.GAME_OVER
        if self.level_transition_active:
            return Status.LEVEL_TRANSITION
        if self.paused:
            return Status.PAUSED
        return Status.RUNNING

    @property
    def head(self):
        return self.snake[0]

    def subscribe(self, listener):
        self._listeners.append(listener)

    def _emit(self, events):
        for event in events:
            for listener in self._listeners:
                listener(event)
        return events

    def request_direction(self, direction):
        """
        Accepts a direction change only when it leaves the axis of the
        active direction. The newest accepted request before a tick wins.
        """
        if self.game_over:
            return False
        direction = Direction.parse(direction)
        if direction.same_axis(self.direction):
            return False
        self.pending_direction = direction
        return True

    def toggle_pause(self):
        if self.game_over:
            return self.paused
        self.paused = not self.paused
        logger.info("⏸️ Paused" if self.paused else "▶️ Resumed")
        return self.paused

    def end_level_transition(self):
        self.level_transition_active = False

    def tick(self):
        if self.status is not Status.RUNNING:
            return []

        new_head = self.head.moved(self.pending_direction)
        cause = collision_cause(new_head, self.snake[1:], self.obstacles, self.generator.size)
        if cause is not None:
            return self._emit([self._finish(cause)])

        events = []
        new_snake = [new_head] + self.snake
        ate_food = new_head == self.food
        if ate_food:
            self.score += FOOD_POINTS
            try:
                self.food = self.generator.sample_food(new_snake, self.obstacles)
            except GridFullError:
                # La serpiente ocupa todo el tablero: no queda sitio para comida
                self.food = None
                self.snake = new_snake
                self.direction = self.pending_direction
                events.extend(self.tracker.check(self.score, self.level, len(new_snake)))
                events.append(self._finish("board_full"))
                return self._emit(events)
            events.extend(self.tracker.check(self.score, self.level, len(new_snake)))
        else:
            new_snake.pop()

        self.snake = new_snake
        self.direction = self.pending_direction

        if ate_food and crosses_threshold(self.score):
            events.append(self.levels.advance(self))

        return self._emit(events)

    def _finish(self, cause):
        self.game_over = True
        is_new_high_score = self.score > self.high_score
        self.new_high_score = is_new_high_score
        if is_new_high_score:
            self.high_score = self.score
            if self.on_high_score is not None:
                self.on_high_score(self.score)
        logger.info("💀 Game over (%s), final score %d", cause, self.score)
        return GameOver(final_score=self.score, is_new_high_score=is_new_high_score, cause=cause)

    def snapshot(self):
        return GameSnapshot(
            snake=tuple(self.snake),
            food=self.food,
            obstacles=frozenset(self.obstacles),
            score=self.score,
            high_score=self.high_score,
            level=self.level,
            speed=self.speed,
            paused=self.paused,
            game_over=self.game_over,
            new_high_score=self.new_high_score,
            level_transition_active=self.level_transition_active,
            status=self.status,
            direction=self.direction,
            achievements=tuple(self.tracker.achievements),
        )
