class SnakeError(Exception):
    """Base error for the snake core."""


class GridFullError(SnakeError):
    """No free cell is left on the board for the requested placement."""

    def __init__(self, requested=1, free=0):
        self.requested = requested
        self.free = free
        super().__init__(f"grid full: requested {requested} cell(s), {free} free")
