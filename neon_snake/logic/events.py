# neon_snake/logic/events.py
from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class AchievementUnlocked:
    id: str
    name: str = ""
    description: str = ""
    icon: str = ""

    type = "achievement_unlocked"

    def to_dict(self):
        return {"type": self.type, **asdict(self)}


@dataclass(frozen=True)
class LevelUp:
    level: int
    obstacle_count: int
    speed: int

    type = "level_up"

    def to_dict(self):
        return {"type": self.type, **asdict(self)}


@dataclass(frozen=True)
class GameOver:
    final_score: int
    is_new_high_score: bool
    cause: str = "collision"

    type = "game_over"

    def to_dict(self):
        return {"type": self.type, **asdict(self)}
