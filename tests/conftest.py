import random

import pytest

from neon_snake.logic.scenario import PositionGenerator


class FakeHandle:
    def __init__(self, loop, when, callback):
        self.loop = loop
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeLoop:
    """Reloj manual con la interfaz call_later de asyncio."""

    def __init__(self):
        self.now = 0.0
        self.handles = []

    def call_later(self, delay, callback):
        handle = FakeHandle(self, self.now + delay, callback)
        self.handles.append(handle)
        return handle

    @property
    def pending(self):
        return [h for h in self.handles if not h.cancelled]

    def advance(self, seconds):
        target = self.now + seconds
        while True:
            due = [h for h in self.pending if h.when <= target + 1e-9]
            if not due:
                break
            handle = min(due, key=lambda h: h.when)
            self.handles.remove(handle)
            self.now = handle.when
            handle.callback()
        self.now = target


class FakeRedis:
    def __init__(self):
        self.data = {}
        self.lists = {}

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value

    def lpush(self, key, value):
        self.lists.setdefault(key, []).insert(0, value)

    def rpush(self, key, *values):
        self.lists.setdefault(key, []).extend(values)

    def lrange(self, key, start, end):
        items = self.lists.get(key, [])
        return items[start:] if end == -1 else items[start:end + 1]

    def ltrim(self, key, start, end):
        self.lists[key] = self.lrange(key, start, end)

    def delete(self, key):
        self.data.pop(key, None)
        self.lists.pop(key, None)


@pytest.fixture
def fake_loop():
    return FakeLoop()


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def generator():
    return PositionGenerator(rng=random.Random(1234))
