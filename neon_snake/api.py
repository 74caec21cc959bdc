# neon_snake/api.py
import asyncio
import json
import logging

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware

from neon_snake import config
from neon_snake.logic.board import Direction
from neon_snake.persistence import RedisStore, load_achievements, load_high_score
from neon_snake.utils.redis_client import get_redis

logger = logging.getLogger(__name__)

app = FastAPI(title="Neon Snake")
r = get_redis()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def enqueue(task):
    r.lpush(config.PLAYER_TASKS_QUEUE, json.dumps(task))
    return {"status": "ok"}


def read_frame():
    frame = r.get(config.SNAKE_STATE_KEY)
    if frame is None:
        return None
    if isinstance(frame, bytes):
        frame = frame.decode("utf-8")
    return json.loads(frame)


def read_events(after=0):
    events = []
    for raw in r.lrange(config.SNAKE_EVENTS_KEY, 0, -1):
        event = json.loads(raw)
        if event.get("seq", 0) > after:
            events.append(event)
    return events


class FrameCursor:
    """
    Tracks what one websocket client has already been sent.
    poll() returns the latest state plus every event newer than the
    last one delivered, or None when nothing changed.
    """

    def __init__(self):
        self.state_seq = 0
        self.event_seq = 0

    def poll(self):
        frame = read_frame()
        if frame is None:
            return None
        seq = frame.get("seq", 0)
        if seq < self.state_seq:
            # El nodo se reinició
            self.state_seq = self.event_seq = 0
        events = read_events(self.event_seq)
        if seq == self.state_seq and not events:
            return None
        self.state_seq = seq
        if events:
            self.event_seq = events[-1]["seq"]
        return {"seq": seq, "state": frame["state"], "events": events}


@app.post("/snake/move")
async def snake_move(move: dict):
    """
    Encola una intención de movimiento para el nodo de juego.
    Espera un dict con {direction: "Up" | "Down" | "Left" | "Right"}
    """
    try:
        direction = Direction.parse(move.get("direction"))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return enqueue({"type": "snake_move", "direction": direction.name.lower()})


@app.post("/snake/pause")
async def snake_pause():
    return enqueue({"type": "pause_toggle"})


@app.post("/snake/reset")
async def snake_reset():
    return enqueue({"type": "reset_game"})


@app.get("/snake/state")
async def snake_state():
    frame = read_frame()
    if frame is None:
        raise HTTPException(status_code=404, detail="no game running")
    return frame


@app.get("/snake/events")
async def snake_events(after: int = 0):
    return {"events": read_events(after)}


@app.get("/snake/highscore")
async def snake_highscore():
    return {"high_score": load_high_score(RedisStore(r))}


@app.get("/snake/achievements")
async def snake_achievements():
    achievements = load_achievements(RedisStore(r))
    return {
        "unlocked": sum(1 for a in achievements if a.unlocked),
        "total": len(achievements),
        "achievements": [a.to_dict() for a in achievements],
    }


@app.websocket("/ws/snake")
async def ws_snake(websocket: WebSocket):
    await websocket.accept()
    cursor = FrameCursor()
    try:
        while True:
            message = cursor.poll()
            if message is not None:
                await websocket.send_json(message)
            await asyncio.sleep(0.05)
    except WebSocketDisconnect:
        logger.info("WebSocket Snake desconectado")
