# neon_snake/config.py
import os

GRID_SIZE = 20
CELL_SIZE = 20

INITIAL_SPEED = 150  # ms por tick
SPEED_STEP = 20
MIN_SPEED = 50

FOOD_POINTS = 10
LEVEL_UP_SCORE = 50
LEVEL_TRANSITION_MS = 2000

START_POSITION = (10, 10)

# Intentos aleatorios antes de enumerar las celdas libres
MAX_RANDOM_ATTEMPTS = 200

# Claves de persistencia
HIGH_SCORE_KEY = "snakeHighScore"
ACHIEVEMENTS_KEY = "snakeAchievements"

# Colas y claves del nodo de juego
PLAYER_TASKS_QUEUE = "player_tasks"
SNAKE_STATE_KEY = "snake:state"
SNAKE_EVENTS_KEY = "snake:events"
EVENTS_HISTORY = 200

REDIS_HOST = os.getenv("REDIS_HOST", "localhost")
REDIS_PORT = int(os.getenv("REDIS_PORT", 6379))
REDIS_DB = int(os.getenv("REDIS_DB", 0))


def get_seed():
    """Semilla opcional para un tablero reproducible (SNAKE_SEED)."""
    seed = os.getenv("SNAKE_SEED")
    if seed is None or not seed.strip():
        return None
    try:
        return int(seed)
    except ValueError:
        return None
