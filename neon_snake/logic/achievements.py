# neon_snake/logic/achievements.py
import logging
from dataclasses import dataclass, replace

from neon_snake.logic.events import AchievementUnlocked

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Achievement:
    id: str
    name: str
    description: str
    icon: str
    unlocked: bool = False

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "icon": self.icon,
            "unlocked": self.unlocked,
        }


ACHIEVEMENTS = (
    Achievement("first_food", "Primeira Refeição", "Coma sua primeira comida", "🍎"),
    Achievement("score_50", "Iniciante", "Alcance 50 pontos", "⭐"),
    Achievement("score_100", "Experiente", "Alcance 100 pontos", "🌟"),
    Achievement("score_200", "Mestre", "Alcance 200 pontos", "💫"),
    Achievement("level_5", "Sobrevivente", "Alcance a fase 5", "🏆"),
    Achievement("level_10", "Lendário", "Alcance a fase 10", "👑"),
    Achievement("long_snake", "Cobra Gigante", "Tenha 15 segmentos", "🐍"),
)

# Orden fijo de evaluación: (id, predicado(score, level, length))
UNLOCK_RULES = (
    ("first_food", lambda score, level, length: score >= 10),
    ("score_50", lambda score, level, length: score >= 50),
    ("score_100", lambda score, level, length: score >= 100),
    ("score_200", lambda score, level, length: score >= 200),
    ("level_5", lambda score, level, length: level >= 5),
    ("level_10", lambda score, level, length: level >= 10),
    ("long_snake", lambda score, level, length: length >= 15),
)


def default_achievements():
    return [replace(a) for a in ACHIEVEMENTS]


class AchievementTracker:
    """
    Keeps the process-wide achievement records and unlocks them as
    milestones are reached. `on_change` receives the full list after
    every batch of unlocks so it can be persisted.
    """

    def __init__(self, achievements=None, on_change=None):
        self.achievements = list(achievements) if achievements is not None else default_achievements()
        self.on_change = on_change

    def get(self, achievement_id):
        for achievement in self.achievements:
            if achievement.id == achievement_id:
                return achievement
        return None

    @property
    def unlocked_count(self):
        return sum(1 for a in self.achievements if a.unlocked)

    @property
    def total(self):
        return len(self.achievements)

    def check(self, score, level, snake_length):
        events = []
        for achievement_id, predicate in UNLOCK_RULES:
            if predicate(score, level, snake_length):
                event = self._unlock(achievement_id)
                if event is not None:
                    events.append(event)

        if events and self.on_change is not None:
            self.on_change(list(self.achievements))
        return events

    def _unlock(self, achievement_id):
        for i, achievement in enumerate(self.achievements):
            if achievement.id != achievement_id:
                continue
            if achievement.unlocked:
                return None
            self.achievements[i] = replace(achievement, unlocked=True)
            logger.info("🏅 Achievement unlocked: %s", achievement.name)
            return AchievementUnlocked(
                id=achievement.id,
                name=achievement.name,
                description=achievement.description,
                icon=achievement.icon,
            )
        return None
