# neon_snake/renderers.py
"""
Presentation adapters. Both front ends draw the same GameSnapshot; no game
rules live here, only the mapping from grid cells to drawing primitives.
"""
from neon_snake.config import CELL_SIZE, GRID_SIZE


def overlay_for(snapshot):
    """Banner to show on top of the board, by precedence."""
    if snapshot.game_over:
        return {"kind": "game_over", "score": snapshot.score, "new_record": snapshot.new_high_score}
    if snapshot.level_transition_active:
        return {"kind": "level_up", "level": snapshot.level}
    if snapshot.paused:
        return {"kind": "paused"}
    return None


def hud_for(snapshot):
    unlocked = sum(1 for a in snapshot.achievements if a.unlocked)
    return {
        "score": snapshot.score,
        "high_score": snapshot.high_score,
        "level": snapshot.level,
        "achievements": f"{unlocked}/{len(snapshot.achievements)}",
    }


class Renderer:
    def render(self, snapshot):
        return {
            "items": self.items(snapshot),
            "overlay": overlay_for(snapshot),
            "hud": hud_for(snapshot),
        }

    def items(self, snapshot):
        raise NotImplementedError


class CanvasRenderer(Renderer):
    """2D canvas: pixel rectangles with a small inset, food as a circle."""

    def __init__(self, cell_size=CELL_SIZE, inset=2):
        self.cell_size = cell_size
        self.inset = inset
        self.width = GRID_SIZE * cell_size
        self.height = GRID_SIZE * cell_size

    def _rect(self, kind, pos, **extra):
        size = self.cell_size
        return {
            "kind": kind,
            "shape": "rect",
            "x": pos.x * size + self.inset,
            "y": pos.y * size + self.inset,
            "w": size - 2 * self.inset,
            "h": size - 2 * self.inset,
            **extra,
        }

    def items(self, snapshot):
        size = self.cell_size
        items = [self._rect("obstacle", p) for p in sorted(snapshot.obstacles)]
        if snapshot.food is not None:
            items.append({
                "kind": "food",
                "shape": "circle",
                "cx": snapshot.food.x * size + size / 2,
                "cy": snapshot.food.y * size + size / 2,
                "r": size / 2 - self.inset,
            })
        items.extend(
            self._rect("snake", p, head=(i == 0)) for i, p in enumerate(snapshot.snake)
        )
        return items


class SceneRenderer(Renderer):
    """3D scene: one mesh per cell, board centred on the origin."""

    def __init__(self, height=0.5):
        self.height = height

    def _mesh(self, kind, pos, **extra):
        return {
            "kind": kind,
            "position": (pos.x - GRID_SIZE / 2, self.height, pos.y - GRID_SIZE / 2),
            **extra,
        }

    def items(self, snapshot):
        items = [self._mesh("snake", p, head=(i == 0)) for i, p in enumerate(snapshot.snake)]
        if snapshot.food is not None:
            items.append(self._mesh("food", snapshot.food, geometry="sphere"))
        items.extend(self._mesh("obstacle", p, geometry="box") for p in sorted(snapshot.obstacles))
        return items
