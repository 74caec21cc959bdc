import json
from unittest import mock

from redis.exceptions import ConnectionError as RedisConnectionError

from neon_snake.config import ACHIEVEMENTS_KEY, HIGH_SCORE_KEY
from neon_snake.logic.achievements import AchievementTracker
from neon_snake.persistence import (
    MemoryStore,
    RedisStore,
    load_achievements,
    load_high_score,
    save_achievements,
    save_high_score,
)


def test_high_score_round_trip():
    store = MemoryStore()
    assert load_high_score(store) == 0
    save_high_score(store, 120)
    assert store.get(HIGH_SCORE_KEY) == "120"
    assert load_high_score(store) == 120


def test_corrupt_high_score_defaults_to_zero():
    assert load_high_score(MemoryStore({HIGH_SCORE_KEY: "lots"})) == 0
    assert load_high_score(MemoryStore({HIGH_SCORE_KEY: "-5"})) == 0


def test_missing_achievements_are_all_locked():
    achievements = load_achievements(MemoryStore())
    assert len(achievements) == 7
    assert not any(a.unlocked for a in achievements)


def test_corrupt_achievements_reset():
    for raw in ("{not json", "42", '[{"name": "x"}]', '["first_food"]'):
        achievements = load_achievements(MemoryStore({ACHIEVEMENTS_KEY: raw}))
        assert not any(a.unlocked for a in achievements)


def test_saved_achievements_merge_onto_catalog():
    raw = json.dumps([
        {"id": "score_50", "unlocked": True},
        {"id": "retired_badge", "unlocked": True},
        {"id": "first_food", "unlocked": False},
    ])
    achievements = load_achievements(MemoryStore({ACHIEVEMENTS_KEY: raw}))
    assert [a.id for a in achievements if a.unlocked] == ["score_50"]
    assert len(achievements) == 7


def test_tracker_state_survives_reload():
    store = MemoryStore()
    tracker = AchievementTracker(on_change=lambda a: save_achievements(store, a))
    tracker.check(100, 1, 11)
    reloaded = load_achievements(store)
    assert [a.id for a in reloaded if a.unlocked] == ["first_food", "score_50", "score_100"]
    records = json.loads(store.get(ACHIEVEMENTS_KEY))
    assert set(records[0]) == {"id", "name", "description", "icon", "unlocked"}


def test_redis_store_swallows_write_errors():
    client = mock.Mock()
    client.set.side_effect = RedisConnectionError("down")
    RedisStore(client).set(HIGH_SCORE_KEY, "10")
    client.set.assert_called_once_with(HIGH_SCORE_KEY, "10")


def test_redis_store_read_error_gives_defaults():
    client = mock.Mock()
    client.get.side_effect = RedisConnectionError("down")
    assert load_high_score(RedisStore(client)) == 0


def test_failing_custom_store_does_not_raise():
    store = mock.Mock()
    store.set.side_effect = OSError("disk full")
    save_high_score(store, 30)
    save_achievements(store, [])


def test_redis_store_decodes_bytes():
    client = mock.Mock()
    client.get.return_value = b"70"
    assert load_high_score(RedisStore(client)) == 70


def test_undecodable_bytes_give_defaults():
    client = mock.Mock()
    client.get.return_value = b"\xff\xfe"
    store = RedisStore(client)
    assert load_high_score(store) == 0
    assert not any(a.unlocked for a in load_achievements(store))


def test_decode_error_inside_client_gives_defaults():
    client = mock.Mock()
    client.get.side_effect = UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
    store = RedisStore(client)
    assert store.get(HIGH_SCORE_KEY) is None
    assert load_high_score(store) == 0
