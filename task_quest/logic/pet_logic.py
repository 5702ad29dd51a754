"""
ペット育成ロジック（減衰・冬眠・進化）
"""
import logging
import random
from datetime import datetime, timedelta
from typing import Optional
from ..models import GameState, Evolution
from .effects import EffectQueue

logger = logging.getLogger(__name__)

STAT_MIN = 0
STAT_MAX = 100


def clamp_stat(value: float) -> float:
    """ステータスを0-100に収める"""
    return max(STAT_MIN, min(STAT_MAX, value))


class PetSystem:
    """ペット育成システム - 時間減衰と冬眠の状態機械"""

    # 進化段階の定義（min_levelは厳密に昇順）
    EVOLUTIONS = [
        Evolution(0, "🥚", "Mysterious Egg", "Waiting to hatch...", 1),
        Evolution(1, "🐣", "Baby Chick", "Chirp chirp!", 2),
        Evolution(2, "🐥", "Young Bird", "Feeling playful!", 5),
        Evolution(3, "🐦", "Teen Bird", "Getting stronger!", 10),
        Evolution(4, "🦅", "Mighty Eagle", "Soaring high!", 15),
        Evolution(5, "🦜", "Phoenix Master", "Maximum power!", 20),
        Evolution(6, "✨🦜✨", "Cosmic Phoenix", "Transcendent!", 25),
    ]

    # 1時間あたりの変化量
    HUNGER_PER_HOUR = 20
    ENERGY_DECAY_PER_HOUR = 10
    HAPPINESS_DECAY_PER_HOUR = 8
    HUNGRY_PENALTY_PER_HOUR = 5
    HUNGRY_THRESHOLD = 70
    HIBERNATION_ENERGY_DECAY_PER_HOUR = 5
    HIBERNATION_HAPPINESS_DECAY_PER_HOUR = 15

    # 冬眠のヒステリシス（0で入り、20で起きる）
    HIBERNATE_AT_ENERGY = 0
    WAKE_AT_ENERGY = 20
    HIBERNATE_HAPPINESS_PENALTY = 30
    WAKE_HAPPINESS_BONUS = 20

    PET_COOLDOWN = timedelta(seconds=10)
    MIN_DECAY_MINUTES = 1

    def __init__(self, effects: EffectQueue):
        self.effects = effects

    # ===== 時間減衰 =====

    def apply_decay(self, state: GameState, now: datetime = None) -> bool:
        """
        経過時間に比例してステータスを減衰させる

        最終更新から1分未満なら何もしない。長時間アプリを開いていなくても
        経過分をまとめて反映し、0-100に収める。

        Returns:
            減衰を適用した場合True
        """
        if now is None:
            now = datetime.now()

        last_update = state.pet_last_update or now
        minutes = (now - last_update).total_seconds() / 60
        if minutes < self.MIN_DECAY_MINUTES:
            return False

        hours = minutes / 60

        state.pet_hunger = clamp_stat(state.pet_hunger + self.HUNGER_PER_HOUR * hours)

        if state.pet_hibernating:
            state.pet_energy = clamp_stat(
                state.pet_energy - self.HIBERNATION_ENERGY_DECAY_PER_HOUR * hours)
            state.pet_happiness = clamp_stat(
                state.pet_happiness - self.HIBERNATION_HAPPINESS_DECAY_PER_HOUR * hours)
        else:
            state.pet_energy = clamp_stat(
                state.pet_energy - self.ENERGY_DECAY_PER_HOUR * hours)
            state.pet_happiness = clamp_stat(
                state.pet_happiness - self.HAPPINESS_DECAY_PER_HOUR * hours)
            # お腹が空きすぎていると更に機嫌が下がる
            if state.pet_hunger > self.HUNGRY_THRESHOLD:
                state.pet_happiness = clamp_stat(
                    state.pet_happiness - self.HUNGRY_PENALTY_PER_HOUR * hours)

        state.pet_last_update = now
        logger.debug("Decay applied for %.1f minutes", minutes)

        self.check_hibernation(state, now)
        return True

    # ===== 冬眠 =====

    def check_hibernation(self, state: GameState, now: datetime = None):
        """エネルギーに応じて冬眠の開始・終了を判定"""
        if state.pet_energy <= self.HIBERNATE_AT_ENERGY and not state.pet_hibernating:
            self._enter_hibernation(state, now or datetime.now())
        elif state.pet_energy >= self.WAKE_AT_ENERGY and state.pet_hibernating:
            self._wake_from_hibernation(state)

    def _enter_hibernation(self, state: GameState, now: datetime):
        state.pet_hibernating = True
        state.hibernation_start_time = now
        state.pet_happiness = clamp_stat(state.pet_happiness - self.HIBERNATE_HAPPINESS_PENALTY)

        self.effects.celebrate(
            "😴 Pet Hibernating!",
            "Your pet is completely exhausted and has fallen into deep sleep. "
            "Pet them to slowly restore energy, or wait for natural recovery!",
            "💤",
        )
        self.effects.sound("hibernate")
        logger.info("Pet entered hibernation")

    def _wake_from_hibernation(self, state: GameState):
        state.pet_hibernating = False
        state.hibernation_start_time = None
        state.pet_happiness = clamp_stat(state.pet_happiness + self.WAKE_HAPPINESS_BONUS)

        self.effects.celebrate(
            "🌟 Pet Awakened!",
            "Your pet has recovered and is ready to help with tasks again!",
            "✨",
        )
        self.effects.hearts()
        self.effects.confetti()
        self.effects.sound("levelup")
        logger.info("Pet woke from hibernation")

    # ===== 進化 =====

    def select_evolution(self, level: int) -> Evolution:
        """レベル以下で最大のmin_levelを持つ進化段階を返す"""
        for evolution in reversed(self.EVOLUTIONS):
            if level >= evolution.min_level:
                return evolution
        return self.EVOLUTIONS[0]

    def get_evolution(self, state: GameState) -> Evolution:
        """現在表示すべき進化段階"""
        return self.select_evolution(state.level)

    def check_evolution(self, state: GameState) -> Optional[Evolution]:
        """レベル変化後の進化判定（段階は下がらない）"""
        evolution = self.select_evolution(state.level)
        if evolution.stage <= state.pet_stage:
            return None

        state.pet_stage = evolution.stage
        self.effects.celebrate(
            "🎊 Evolution! 🎊",
            f"Your pet evolved into {evolution.name}!",
            evolution.emoji,
        )
        self.effects.confetti(bursts=2)
        self.effects.sound("evolution")
        logger.info("Pet evolved to stage %d (%s)", evolution.stage, evolution.name)
        return evolution

    # ===== ふれあい =====

    def pet(self, state: GameState, now: datetime = None) -> bool:
        """
        ペットをなでる（10秒のクールダウン付き）

        冬眠中はエネルギー+5/機嫌+5の回復モード、通常時は機嫌+10。

        Returns:
            なでた場合True（クールダウン中はFalse）
        """
        if now is None:
            now = datetime.now()

        if state.pet_last_pet and now - state.pet_last_pet < self.PET_COOLDOWN:
            return False

        state.pet_last_pet = now

        if state.pet_hibernating:
            state.pet_energy = clamp_stat(state.pet_energy + 5)
            state.pet_happiness = clamp_stat(state.pet_happiness + 5)
            self.effects.hearts(2)
        else:
            state.pet_happiness = clamp_stat(state.pet_happiness + 10)
            self.effects.hearts()
        self.effects.sound("pet")

        # なでたことで目覚める場合がある
        self.check_hibernation(state, now)
        return True

    def feed(self, state: GameState, now: datetime = None):
        """タスク完了時のごはん"""
        state.pet_hunger = clamp_stat(state.pet_hunger - 20)
        state.pet_energy = clamp_stat(state.pet_energy + 10)
        state.pet_happiness = clamp_stat(state.pet_happiness + 5)
        state.pet_last_fed = now or datetime.now()

    def boost_energy(self, state: GameState):
        """タスク完了時のエネルギー回復"""
        state.pet_energy = clamp_stat(state.pet_energy + 15)
        state.pet_happiness = clamp_stat(state.pet_happiness + 10)

    # ===== 表示用 =====

    def stat_level(self, stat: str, value: float) -> str:
        """ステータスバーの色分け（critical, warning, normal）"""
        if stat == "energy":
            if value <= 0:
                return "critical"
            if value < 30:
                return "warning"
        elif stat == "hunger":
            if value >= 100:
                return "critical"
            if value > 70:
                return "warning"
        elif stat == "happiness":
            if value < 20:
                return "critical"
            if value < 40:
                return "warning"
        return "normal"


class PetMoodSelector:
    """ペットの気分テキスト選択（表示専用・保存しない）"""

    MOODS = {
        "happy": ["So happy!", "Loving it!", "😊", "Best day ever!", "Feeling great!"],
        "neutral": ["Doing okay", "Chilling", "😐", "Alright", "Not bad"],
        "sad": ["A bit tired...", "Need attention...", "😢", "Feeling down", "Missing you"],
        "hungry": ["So hungry!", "Feed me!", "😋", "Tummy rumbling", "Need food!"],
        "energetic": ["Full of energy!", "Ready to play!", "⚡", "Let's go!", "Pumped up!"],
    }

    HIBERNATING_TEXT = "💤 ZZZ... Too tired to help. Pet me to recover!"
    SLEEPY_TEXT = "Getting sleepy... need tasks soon!"

    def __init__(self, pet_system: PetSystem, seed: Optional[int] = None):
        self.pet_system = pet_system
        self.rng = random.Random(seed)

    def get_mood_category(self, state: GameState) -> str:
        """
        気分カテゴリを判定（上から順に評価）

        hibernating, hungry, sleepy, happy, sad, energetic, default
        """
        if state.pet_hibernating:
            return "hibernating"

        avg_mood = (state.pet_happiness + state.pet_energy) / 2
        if state.pet_hunger > 80:
            return "hungry"
        elif state.pet_energy < 30:
            return "sleepy"
        elif avg_mood > 70:
            return "happy"
        elif avg_mood < 30:
            return "sad"
        elif state.pet_energy > 80:
            return "energetic"
        return "default"

    def get_mood_text(self, state: GameState) -> str:
        category = self.get_mood_category(state)
        if category == "hibernating":
            return self.HIBERNATING_TEXT
        if category == "sleepy":
            return self.SLEEPY_TEXT
        if category == "default":
            return self.pet_system.get_evolution(state).mood
        return self.rng.choice(self.MOODS[category])
