# neon_snake/logic/collision.py
from neon_snake.config import GRID_SIZE
from neon_snake.logic.board import in_bounds


def collision_cause(head, body, obstacles, size=GRID_SIZE):
    """
    Returns "wall", "self" or "obstacle" for the first rule that applies,
    or None when the head lands on a free cell.
    - body: the snake without its head
    """
    if not in_bounds(head, size):
        return "wall"
    if head in body:
        return "self"
    if head in obstacles:
        return "obstacle"
    return None


def is_collision(head, body, obstacles, size=GRID_SIZE):
    return collision_cause(head, body, obstacles, size) is not None
