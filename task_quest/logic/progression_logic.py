"""
XP・レベル・連続達成ロジック
"""
import logging
from datetime import date, timedelta
from ..models import GameState
from .effects import EffectQueue
from .pet_logic import PetSystem, clamp_stat
from .achievement_logic import AchievementSystem

logger = logging.getLogger(__name__)


class ProgressionSystem:
    """プレイヤー進行システム"""

    PRIORITY_XP = {"low": 10, "medium": 25, "high": 50}
    DEFAULT_XP = 25

    LEVEL_TITLES = [
        "Newbie Achiever",
        "Task Apprentice",
        "Quest Seeker",
        "Goal Crusher",
        "Productivity Ninja",
        "Focus Master",
        "Achievement Hunter",
        "Legendary Doer",
        "Grand Champion",
        "Productivity God",
    ]

    MEGA_LEVEL_INTERVAL = 5

    def __init__(self, pet_system: PetSystem, achievement_system: AchievementSystem,
                 effects: EffectQueue):
        self.pet_system = pet_system
        self.achievement_system = achievement_system
        self.effects = effects

    def xp_for_priority(self, priority: str) -> int:
        return self.PRIORITY_XP.get(priority, self.DEFAULT_XP)

    def xp_required_for_level(self, level: int) -> int:
        """次のレベルに必要なXP（線形に増加）"""
        return 100 + (level - 1) * 50

    def level_title(self, level: int) -> str:
        return self.LEVEL_TITLES[min(level - 1, len(self.LEVEL_TITLES) - 1)]

    def award_xp(self, state: GameState, amount: float) -> bool:
        """
        XPを付与し、必要量に達していればレベルアップ

        1回の付与で上がるのは1レベルのみ。余剰XPは次の付与時に判定される。

        Returns:
            レベルアップした場合True
        """
        state.xp += amount
        state.total_xp += amount
        self.effects.sound("xp")

        if state.xp >= self.xp_required_for_level(state.level):
            self.level_up(state)
            return True
        return False

    def level_up(self, state: GameState):
        """レベルアップ処理"""
        state.xp -= self.xp_required_for_level(state.level)
        state.level += 1

        state.pet_happiness = clamp_stat(state.pet_happiness + 20)
        state.pet_energy = clamp_stat(state.pet_energy + 15)

        if state.level % self.MEGA_LEVEL_INTERVAL == 0:
            self.effects.celebrate(
                "🎉 MEGA LEVEL UP! 🎉",
                f"You reached level {state.level}! Your pet is getting stronger!",
                "⭐",
            )
            self.effects.confetti(bursts=3)
        else:
            self.effects.celebrate("🎉 Level Up!", f"You reached level {state.level}!", "🎉")
            self.effects.confetti()
        self.effects.sound("levelup")
        logger.info("Level up: %d", state.level)

        self.pet_system.check_evolution(state)
        self.achievement_system.check_all(state)

    def update_streak(self, state: GameState, today: date = None):
        """連続達成日数を更新"""
        if today is None:
            today = date.today()

        last_date = state.last_completed_date
        if last_date is None:
            state.streak = 1
        elif last_date == today - timedelta(days=1):
            state.streak += 1
        elif last_date != today:
            # 1日以上空いたらリセット
            state.streak = 1

        state.last_completed_date = today
        self.achievement_system.check_all(state)
