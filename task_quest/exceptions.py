"""
Task Quest 例外階層
"""


class TaskQuestError(Exception):
    """Task Quest の全ドメイン例外の基底クラス"""


class TaskValidationError(TaskQuestError):
    """タスク入力が不正（空のテキストなど）"""


class TaskNotFoundError(TaskQuestError):
    """指定IDのタスクが存在しない"""

    def __init__(self, task_id: int):
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class BlockedByStateError(TaskQuestError):
    """ペットの状態により操作できない"""


class PetHibernatingError(BlockedByStateError):
    """ペットが冬眠中のためタスクを完了できない"""


class PersistenceError(TaskQuestError):
    """保存データの読み込み・書き込みの失敗"""
