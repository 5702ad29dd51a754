"""
タスク管理ロジック
"""
import logging
from datetime import datetime
from typing import List, Optional
from ..exceptions import PetHibernatingError, TaskNotFoundError, TaskValidationError
from ..models import GameState, Task
from .achievement_logic import AchievementSystem
from .pet_logic import PetSystem
from .progression_logic import ProgressionSystem

logger = logging.getLogger(__name__)


class TaskSystem:
    """タスクの追加・完了・削除"""

    def __init__(self, pet_system: PetSystem, progression: ProgressionSystem,
                 achievement_system: AchievementSystem):
        self.pet_system = pet_system
        self.progression = progression
        self.achievement_system = achievement_system

    def create_task(self, tasks: List[Task], text: str, priority: str = "medium",
                    now: datetime = None) -> Task:
        """新しいタスクを作成してリスト末尾に追加"""
        text = (text or "").strip()
        if not text:
            raise TaskValidationError("Please enter a task!")

        if now is None:
            now = datetime.now()

        # 作成時刻（ミリ秒）をIDにする。重複したら後ろにずらす
        task_id = int(now.timestamp() * 1000)
        existing_ids = {t.id for t in tasks}
        while task_id in existing_ids:
            task_id += 1

        task = Task(
            id=task_id,
            text=text,
            priority=priority,
            completed=False,
            xp=self.progression.xp_for_priority(priority),
        )
        tasks.append(task)
        return task

    def find_task(self, tasks: List[Task], task_id: int) -> Optional[Task]:
        for task in tasks:
            if task.id == task_id:
                return task
        return None

    def complete_task(self, state: GameState, tasks: List[Task], task_id: int,
                      now: datetime = None) -> Task:
        """
        タスク完了（報酬付与・ペットへのごはん）

        冬眠中は完了できない。

        Raises:
            PetHibernatingError: ペットが冬眠中
            TaskNotFoundError: タスクが存在しない
        """
        if state.pet_hibernating:
            raise PetHibernatingError("Pet is hibernating")

        task = self.find_task(tasks, task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        if task.completed:
            return task

        if now is None:
            now = datetime.now()

        task.completed = True
        state.total_completed += 1

        self.progression.award_xp(state, task.xp)
        self.progression.update_streak(state, now.date())
        self.achievement_system.check_all(state)

        self.pet_system.feed(state, now)
        self.pet_system.boost_energy(state)
        self.pet_system.check_hibernation(state, now)

        tasks.remove(task)
        logger.debug("Task %s completed (+%d XP)", task.id, task.xp)
        return task

    def delete_task(self, tasks: List[Task], task_id: int) -> bool:
        """タスク削除（報酬なし・冬眠中でも可能）"""
        task = self.find_task(tasks, task_id)
        if task is None:
            return False
        tasks.remove(task)
        return True
