# neon_snake/game_loop.py
import asyncio
import logging

logger = logging.getLogger(__name__)


class GameLoop:
    """
    Periodic tick driver built on the event loop's `call_later`.

    `reschedule()` re-arms the timer from the moment it is called, so a
    speed change made inside a tick only affects the next invocation.
    `stop()` always releases the pending timer handle.
    """

    def __init__(self, callback, interval_ms, loop=None):
        self.callback = callback
        self.interval_ms = interval_ms
        self._loop = loop
        self._handle = None
        self._running = False

    @property
    def running(self):
        return self._running

    def start(self):
        if self._running:
            return
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        self._running = True
        self._schedule()
        logger.debug("game loop started at %d ms", self.interval_ms)

    def stop(self):
        self._running = False
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def reschedule(self, interval_ms):
        self.interval_ms = interval_ms
        if not self._running:
            return
        if self._handle is not None:
            self._handle.cancel()
        self._schedule()
        logger.debug("game loop rescheduled at %d ms", interval_ms)

    def _schedule(self):
        self._handle = self._loop.call_later(self.interval_ms / 1000, self._fire)

    def _fire(self):
        self._handle = None
        try:
            self.callback()
        finally:
            # El callback pudo haber parado o reprogramado el bucle
            if self._running and self._handle is None:
                self._schedule()

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()
        return False
