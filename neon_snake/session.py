# neon_snake/session.py
import asyncio
import logging

from neon_snake.config import LEVEL_TRANSITION_MS
from neon_snake.game_loop import GameLoop
from neon_snake.logic.achievements import AchievementTracker
from neon_snake.logic.events import LevelUp
from neon_snake.logic.game_state import GameState
from neon_snake.logic.scenario import PositionGenerator
from neon_snake.persistence import (
    MemoryStore,
    load_achievements,
    load_high_score,
    save_achievements,
    save_high_score,
)

logger = logging.getLogger(__name__)


class GameSession:
    """
    Owns the current GameState together with its tick loop and the
    level-transition timer. Both timers are released on stop() and on
    every reset().

    Listeners are called as `listener(snapshot, events)` after every tick
    and after every control action.
    """

    def __init__(self, store=None, generator=None, loop=None):
        self.store = store if store is not None else MemoryStore()
        self.generator = generator if generator is not None else PositionGenerator()
        self._loop = loop
        self._listeners = []
        self._transition_handle = None

        # Récords globales: se cargan una sola vez
        self.tracker = AchievementTracker(
            load_achievements(self.store),
            on_change=lambda achievements: save_achievements(self.store, achievements),
        )
        self.state = self._new_state(load_high_score(self.store))
        self.game_loop = None

    def _new_state(self, high_score):
        return GameState(
            generator=self.generator,
            tracker=self.tracker,
            high_score=high_score,
            on_high_score=lambda score: save_high_score(self.store, score),
        )

    def add_listener(self, listener):
        self._listeners.append(listener)

    def _notify(self, events=()):
        snapshot = self.state.snapshot()
        for listener in self._listeners:
            listener(snapshot, list(events))

    def start(self):
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        self.game_loop = GameLoop(self.tick, self.state.speed, loop=self._loop)
        self.game_loop.start()
        self._notify()

    def stop(self):
        if self.game_loop is not None:
            self.game_loop.stop()
            self.game_loop = None
        self._cancel_transition()

    def reset(self):
        running = self.game_loop is not None
        self.stop()
        self.state = self._new_state(self.state.high_score)
        logger.info("🔄 Game reset")
        if running:
            self.start()
        else:
            self._notify()

    def tick(self):
        events = self.state.tick()
        for event in events:
            if isinstance(event, LevelUp):
                self._on_level_up(event)
        self._notify(events)
        return events

    def _on_level_up(self, event):
        if self.game_loop is not None:
            self.game_loop.reschedule(event.speed)
        self._cancel_transition()
        if self._loop is not None:
            self._transition_handle = self._loop.call_later(
                LEVEL_TRANSITION_MS / 1000, self._end_transition
            )

    def _end_transition(self):
        self._transition_handle = None
        self.state.end_level_transition()
        self._notify()

    def _cancel_transition(self):
        if self._transition_handle is not None:
            self._transition_handle.cancel()
            self._transition_handle = None

    def request_direction(self, direction):
        return self.state.request_direction(direction)

    def toggle_pause(self):
        paused = self.state.toggle_pause()
        self._notify()
        return paused

    def snapshot(self):
        return self.state.snapshot()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()
        return False
