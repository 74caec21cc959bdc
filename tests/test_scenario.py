import random

import pytest

from neon_snake.errors import GridFullError
from neon_snake.logic.board import Position, all_cells
from neon_snake.logic.scenario import PositionGenerator


def test_food_not_on_snake_or_obstacles(generator):
    snake = [Position(x, 10) for x in range(15)]
    obstacles = {Position(3, 3), Position(4, 4)}
    for _ in range(200):
        food = generator.sample_food(snake, obstacles)
        assert food not in snake
        assert food not in obstacles
        assert 0 <= food.x < 20 and 0 <= food.y < 20


def test_food_finds_last_free_cell():
    generator = PositionGenerator(rng=random.Random(0), max_attempts=3)
    cells = all_cells()
    free = cells.pop(137)
    assert generator.sample_food(cells, set()) == free


def test_food_on_full_grid_raises():
    generator = PositionGenerator(rng=random.Random(0), max_attempts=5)
    with pytest.raises(GridFullError):
        generator.sample_food(all_cells(), set())


def test_obstacles_are_distinct_and_off_snake(generator):
    snake = [Position(10, 10), Position(9, 10)]
    obstacles = generator.sample_obstacles(12, snake)
    assert len(obstacles) == 12
    assert not obstacles & set(snake)


def test_obstacles_are_fresh_each_call(generator):
    snake = [Position(10, 10)]
    generator.sample_obstacles(5, snake)
    assert generator.sample_obstacles(0, snake) == frozenset()


def test_too_many_obstacles_raises():
    generator = PositionGenerator(rng=random.Random(0), size=2)
    with pytest.raises(GridFullError) as info:
        generator.sample_obstacles(4, [Position(0, 0)])
    assert info.value.free == 3
