"""
実績達成判定ロジック
"""
import logging
from typing import List, Tuple
from ..models import GameState, Achievement
from .effects import EffectQueue
from .pet_logic import clamp_stat

logger = logging.getLogger(__name__)


class AchievementSystem:
    """実績システム - 達成判定・獲得処理"""

    ACHIEVEMENTS = [
        Achievement("first_task", "First Steps", "Complete 1 task", "🌟", 1),
        Achievement("task_5", "Getting Started", "Complete 5 tasks", "💪", 5),
        Achievement("task_10", "On Fire", "Complete 10 tasks", "🔥", 10),
        Achievement("task_25", "Dedicated", "Complete 25 tasks", "🎯", 25),
        Achievement("task_50", "Unstoppable", "Complete 50 tasks", "⚡", 50),
        Achievement("task_100", "Legend", "Complete 100 tasks", "👑", 100),
        Achievement("streak_3", "Habit Former", "3 day streak", "📅", 3, "streak"),
        Achievement("streak_7", "Week Warrior", "7 day streak", "🗓️", 7, "streak"),
        Achievement("level_5", "Rising Star", "Reach level 5", "🌠", 5, "level"),
        Achievement("level_10", "Master", "Reach level 10", "🏅", 10, "level"),
        Achievement("level_15", "Champion", "Reach level 15", "🏆", 15, "level"),
        Achievement("level_20", "Legendary", "Reach level 20", "✨", 20, "level"),
        Achievement("pet_lover", "Pet Lover", "Pet your buddy 10 times", "💕", 10, "pet"),
    ]

    UNLOCK_HAPPINESS_BONUS = 15

    def __init__(self, effects: EffectQueue):
        self.effects = effects

    def check_all(self, state: GameState) -> List[Achievement]:
        """未解放の実績を全てチェックし、新たに解放されたものを返す"""
        newly_unlocked = []

        for achievement in self.ACHIEVEMENTS:
            if achievement.id in state.achievements:
                continue
            if self._current_value(achievement, state) >= achievement.requirement:
                self._unlock(achievement, state)
                newly_unlocked.append(achievement)

        return newly_unlocked

    def _current_value(self, achievement: Achievement, state: GameState) -> int:
        if achievement.kind == "streak":
            return state.streak
        elif achievement.kind == "level":
            return state.level
        return state.total_completed

    def _unlock(self, achievement: Achievement, state: GameState):
        state.achievements.add(achievement.id)
        state.pet_happiness = clamp_stat(state.pet_happiness + self.UNLOCK_HAPPINESS_BONUS)

        self.effects.celebrate("🏆 Achievement Unlocked!", achievement.name, achievement.icon)
        self.effects.confetti()
        self.effects.sound("achievement")
        logger.info("Achievement unlocked: %s", achievement.id)

    def get_progress(self, achievement: Achievement, state: GameState) -> Tuple[int, int]:
        """実績の進捗を取得 (current, target)"""
        target = achievement.requirement
        current = min(self._current_value(achievement, state), target)
        return (current, target)
