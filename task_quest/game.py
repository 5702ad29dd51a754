"""
ゲーム全体の制御（状態の所有者・コマンド処理）
"""
import logging
import threading
from datetime import datetime
from typing import Optional
from .database import Database
from .exceptions import PersistenceError, PetHibernatingError, TaskNotFoundError
from .logic.achievement_logic import AchievementSystem
from .logic.effects import EffectQueue
from .logic.pet_logic import PetMoodSelector, PetSystem
from .logic.progression_logic import ProgressionSystem
from .logic.task_logic import TaskSystem
from .models import Celebration, GameState, Particles, Sound, Task
from .sinks import GameSinks

logger = logging.getLogger(__name__)


class GameController:
    """
    ゲーム状態を唯一保持するコントローラ

    各コマンド（tick, add_task, complete_task, delete_task, pet, toggle_sound）は
    ロックを取って最後まで実行し、状態遷移が終わってから演出をシンクへ流し、
    描画・保存する。
    """

    def __init__(self, db: Database, sinks: GameSinks = None, mood_seed: Optional[int] = None):
        self.db = db
        self.sinks = sinks or GameSinks()
        self._lock = threading.RLock()

        self.effects = EffectQueue()
        self.pet_system = PetSystem(self.effects)
        self.achievement_system = AchievementSystem(self.effects)
        self.progression = ProgressionSystem(self.pet_system, self.achievement_system, self.effects)
        self.task_system = TaskSystem(self.pet_system, self.progression, self.achievement_system)
        self.mood_selector = PetMoodSelector(self.pet_system, seed=mood_seed)

        self.state, self.tasks = self._load()

    def _load(self):
        """起動時に一度だけ読み込み（なければ既定値）"""
        try:
            state = self.db.load_game_data()
        except PersistenceError as e:
            logger.warning("Falling back to default game data: %s", e)
            state = None
        try:
            tasks = self.db.load_tasks()
        except PersistenceError as e:
            logger.warning("Falling back to empty task list: %s", e)
            tasks = None
        return state or GameState(), tasks or []

    # ===== コマンド =====

    def start(self, now: datetime = None):
        """起動時処理（オフライン中の減衰を反映・進化チェック）"""
        with self._lock:
            self.pet_system.apply_decay(self.state, now)
            self.pet_system.check_evolution(self.state)
            self._commit()

    def tick(self, now: datetime = None) -> bool:
        """定期減衰（DecayTickerから呼ばれる）"""
        with self._lock:
            applied = self.pet_system.apply_decay(self.state, now)
            if applied:
                self._commit()
            return applied

    def add_task(self, text: str, priority: str = "medium", now: datetime = None) -> Task:
        """
        タスクを追加

        Raises:
            TaskValidationError: テキストが空
        """
        with self._lock:
            task = self.task_system.create_task(self.tasks, text, priority, now)
            self._commit()
            return task

    def complete_task(self, task_id: int, now: datetime = None) -> bool:
        """タスク完了（冬眠中は拒否）"""
        with self._lock:
            try:
                self.task_system.complete_task(self.state, self.tasks, task_id, now)
            except PetHibernatingError:
                self.effects.celebrate(
                    "😴 Pet is Sleeping!",
                    "Your pet is hibernating and too tired to help with tasks. "
                    "Pet them to help restore energy!",
                    "💤",
                )
                self.effects.sound("hibernate")
                logger.debug("Task %s rejected: pet is hibernating", task_id)
                self._flush_effects()
                return False
            except TaskNotFoundError:
                logger.debug("Task %s already gone", task_id)
                return False
            self._commit()
            return True

    def delete_task(self, task_id: int) -> bool:
        with self._lock:
            deleted = self.task_system.delete_task(self.tasks, task_id)
            if deleted:
                self._commit()
            return deleted

    def pet(self, now: datetime = None) -> bool:
        """ペットをなでる"""
        with self._lock:
            if not self.pet_system.pet(self.state, now):
                return False
            self._commit()
            return True

    def toggle_sound(self) -> bool:
        with self._lock:
            self.state.sound_enabled = not self.state.sound_enabled
            self._commit()
            return self.state.sound_enabled

    # ===== 表示用 =====

    def get_mood_text(self) -> str:
        return self.mood_selector.get_mood_text(self.state)

    def get_level_title(self) -> str:
        return self.progression.level_title(self.state.level)

    def get_xp_required(self) -> int:
        return self.progression.xp_required_for_level(self.state.level)

    # ===== 内部処理 =====

    def _flush_effects(self):
        """溜まった演出をシンクへ流す"""
        for effect in self.effects.drain():
            if isinstance(effect, Celebration):
                self.sinks.notify(effect.title, effect.text, effect.icon)
            elif isinstance(effect, Sound):
                if self.state.sound_enabled:
                    self.sinks.play_sound(effect.kind)
            elif isinstance(effect, Particles):
                self.sinks.spawn_particles(effect.kind, effect.count)

    def _commit(self):
        """演出 → 描画 → 保存"""
        self._flush_effects()
        self.sinks.render(self.state, self.tasks)
        self.db.save(self.state, self.tasks)
