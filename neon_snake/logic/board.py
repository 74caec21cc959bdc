# neon_snake/logic/board.py
from enum import Enum
from typing import NamedTuple

from neon_snake.config import GRID_SIZE


class Position(NamedTuple):
    x: int
    y: int

    def moved(self, direction):
        dx, dy = direction.vector
        return Position(self.x + dx, self.y + dy)

    def to_list(self):
        return [self.x, self.y]


class Direction(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def vector(self):
        return self.value

    @property
    def horizontal(self):
        return self.value[1] == 0

    def same_axis(self, other):
        return self.horizontal == other.horizontal

    @classmethod
    def parse(cls, name):
        """Maps "Up", "down", "LEFT"... to a Direction. Raises ValueError for unknown names."""
        if isinstance(name, cls):
            return name
        try:
            return cls[str(name).strip().upper()]
        except KeyError:
            raise ValueError(f"unknown direction: {name!r}") from None


def in_bounds(pos, size=GRID_SIZE):
    return 0 <= pos[0] < size and 0 <= pos[1] < size


def all_cells(size=GRID_SIZE):
    return [Position(x, y) for x in range(size) for y in range(size)]
