# neon_snake/persistence.py
import json
import logging
from dataclasses import replace
from typing import Optional, Protocol

from redis.exceptions import RedisError

from neon_snake.config import ACHIEVEMENTS_KEY, HIGH_SCORE_KEY
from neon_snake.logic.achievements import default_achievements

logger = logging.getLogger(__name__)


class PersistenceGateway(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    """Almacén en memoria, para pruebas o partidas sin Redis."""

    def __init__(self, data=None):
        self.data = dict(data or {})

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value


class RedisStore:
    """Key/value gateway on top of a redis-py client."""

    def __init__(self, client):
        self.client = client

    def get(self, key):
        try:
            value = self.client.get(key)
            if isinstance(value, bytes):
                value = value.decode("utf-8")
        except RedisError as e:
            logger.warning("❌ Redis read of %s failed: %s", key, e)
            return None
        except UnicodeDecodeError:
            logger.warning("⚠️ Ignoring undecodable value under %s", key)
            return None
        return value

    def set(self, key, value):
        try:
            self.client.set(key, value)
        except RedisError as e:
            logger.warning("❌ Redis write of %s failed: %s", key, e)


def safe_set(store, key, value):
    """Las escrituras nunca interrumpen la partida."""
    try:
        store.set(key, value)
    except Exception as e:
        logger.warning("❌ Could not persist %s: %s", key, e)


def load_high_score(store):
    raw = store.get(HIGH_SCORE_KEY)
    if raw is None:
        return 0
    try:
        score = int(str(raw).strip())
    except ValueError:
        logger.warning("⚠️ Ignoring corrupt high score %r", raw)
        return 0
    return max(score, 0)


def save_high_score(store, score):
    safe_set(store, HIGH_SCORE_KEY, str(int(score)))


def load_achievements(store):
    """
    Loads the saved achievement records onto the canonical catalog.
    - unknown ids in the saved data are dropped
    - catalog entries missing from the saved data stay locked
    - anything unreadable gives the all-locked catalog
    """
    achievements = default_achievements()
    raw = store.get(ACHIEVEMENTS_KEY)
    if raw is None:
        return achievements
    try:
        records = json.loads(raw)
        unlocked = {r["id"] for r in records if r.get("unlocked") is True}
    except (ValueError, TypeError, KeyError, AttributeError):
        logger.warning("⚠️ Ignoring corrupt achievement data")
        return achievements
    return [replace(a, unlocked=a.id in unlocked) for a in achievements]


def save_achievements(store, achievements):
    safe_set(store, ACHIEVEMENTS_KEY, json.dumps([a.to_dict() for a in achievements]))
