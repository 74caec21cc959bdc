# neon_snake/player_node.py
import asyncio
import json
import logging
import random

from redis.exceptions import RedisError

from neon_snake import config
from neon_snake.logic.scenario import PositionGenerator
from neon_snake.persistence import RedisStore
from neon_snake.session import GameSession
from neon_snake.utils.redis_client import get_redis

logger = logging.getLogger(__name__)
node_id = "player_node"


class StatePublisher:
    """
    Publishes every frame to Redis for the API to stream over websocket.

    The latest snapshot overwrites `snake:state`; events are appended to
    the bounded `snake:events` list tagged with the frame's seq, so a
    reader that polls less often than frames arrive still sees all of them.
    """

    def __init__(self, client, key=config.SNAKE_STATE_KEY, events_key=config.SNAKE_EVENTS_KEY,
                 history=config.EVENTS_HISTORY):
        self.client = client
        self.key = key
        self.events_key = events_key
        self.history = history
        self.seq = 0
        # Los seq vuelven a empezar en 1: se descartan los eventos anteriores
        try:
            self.client.delete(self.events_key)
        except RedisError as e:
            logger.warning("❌ Could not clear %s: %s", self.events_key, e)

    def __call__(self, snapshot, events):
        self.seq += 1
        try:
            if events:
                self.client.rpush(
                    self.events_key,
                    *[json.dumps({"seq": self.seq, **e.to_dict()}) for e in events],
                )
                self.client.ltrim(self.events_key, -self.history, -1)
            self.client.set(self.key, json.dumps({"seq": self.seq, "state": snapshot.to_dict()}))
        except RedisError as e:
            logger.warning("❌ Could not publish state: %s", e)


def process_task(session, data):
    try:
        task = json.loads(data)
    except ValueError as e:
        logger.error("❌ Error al procesar tarea: %s", e)
        return

    task_type = task.get("type") if isinstance(task, dict) else None
    if task_type == "reset_game":
        session.reset()
    elif task_type == "pause_toggle":
        session.toggle_pause()
    elif task_type == "snake_move":
        try:
            accepted = session.request_direction(task.get("direction"))
        except ValueError as e:
            logger.warning("⚠️ %s", e)
            return
        logger.debug("🐍 %s move %s accepted=%s", node_id, task.get("direction"), accepted)
    else:
        logger.warning("⚠️ Tipo de tarea no soportado: %s", task_type)


async def consume_tasks(session, client):
    while True:
        # blpop bloquea: se ejecuta en un hilo y la tarea se aplica en el bucle
        task = await asyncio.to_thread(client.blpop, config.PLAYER_TASKS_QUEUE, timeout=1)
        if task:
            _, data = task
            process_task(session, data)


async def run(client=None):
    client = client if client is not None else get_redis()
    generator = PositionGenerator(rng=random.Random(config.get_seed()))
    session = GameSession(store=RedisStore(client), generator=generator)
    session.add_listener(StatePublisher(client))

    with session:
        session.start()
        logger.info("🎤 %s iniciado y esperando tareas...", node_id)
        await consume_tasks(session, client)


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        logger.info("⚠️ Señal de terminación recibida")


if __name__ == "__main__":
    main()
