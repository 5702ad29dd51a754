"""
データベース操作クラス（ローカルのキー・バリューストア）
"""
import json
import logging
import sqlite3
from dataclasses import asdict, fields
from datetime import date, datetime
from typing import List, Optional
from .exceptions import PersistenceError
from .models import GameState, Task

logger = logging.getLogger(__name__)

GAME_DATA_KEY = "game_data"
TASKS_KEY = "tasks"

_DATETIME_FIELDS = ("pet_last_fed", "pet_last_pet", "pet_last_update", "hibernation_start_time")


def state_to_dict(state: GameState) -> dict:
    """GameStateをJSON保存用のdictに変換"""
    data = asdict(state)
    data["achievements"] = sorted(state.achievements)
    if state.last_completed_date:
        data["last_completed_date"] = state.last_completed_date.isoformat()
    for name in _DATETIME_FIELDS:
        value = getattr(state, name)
        data[name] = value.isoformat() if value else None
    return data


def state_from_dict(data: dict) -> GameState:
    """保存データからGameStateを復元（未知のキーは無視）"""
    known = {f.name for f in fields(GameState)}
    values = {k: v for k, v in data.items() if k in known}

    try:
        if "achievements" in values:
            values["achievements"] = set(values["achievements"] or [])
        if values.get("last_completed_date"):
            values["last_completed_date"] = date.fromisoformat(values["last_completed_date"])
        for name in _DATETIME_FIELDS:
            if values.get(name):
                values[name] = datetime.fromisoformat(values[name])
            elif name in values and name != "hibernation_start_time":
                # 欠損時は既定値（現在時刻）
                del values[name]
    except (TypeError, ValueError) as e:
        raise PersistenceError(f"Corrupt game data: {e}") from e

    return GameState(**values)


def task_from_dict(data: dict) -> Task:
    known = {f.name for f in fields(Task)}
    return Task(**{k: v for k, v in data.items() if k in known})


class Database:
    """SQLiteによるゲームデータ保存クラス"""

    def __init__(self, db_path: str = "task_quest.db"):
        self.db_path = db_path
        self.init_database()

    def get_connection(self):
        """データベース接続を取得"""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_database(self):
        """テーブルの初期化"""
        conn = self.get_connection()
        cursor = conn.cursor()
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS kv_store (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)
        conn.commit()
        conn.close()

    # ===== 汎用キー・バリュー =====

    def get_value(self, key: str) -> Optional[str]:
        conn = self.get_connection()
        cursor = conn.cursor()
        cursor.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
        row = cursor.fetchone()
        conn.close()
        return row["value"] if row else None

    def set_values(self, items: dict):
        """複数キーを1トランザクションで上書き保存"""
        conn = self.get_connection()
        cursor = conn.cursor()
        now = datetime.now()
        for key, value in items.items():
            cursor.execute("""
                INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
            """, (key, value, now.isoformat()))
        conn.commit()
        conn.close()

    # ===== ゲームデータ =====

    def load_game_data(self) -> Optional[GameState]:
        """
        ゲームデータを読み込み

        Returns:
            保存データがなければNone

        Raises:
            PersistenceError: 保存データが壊れている
        """
        raw = self.get_value(GAME_DATA_KEY)
        if raw is None:
            return None
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise PersistenceError(f"Corrupt game data: {e}") from e
        return state_from_dict(data)

    def load_tasks(self) -> Optional[List[Task]]:
        raw = self.get_value(TASKS_KEY)
        if raw is None:
            return None
        try:
            return [task_from_dict(item) for item in json.loads(raw)]
        except (json.JSONDecodeError, TypeError) as e:
            raise PersistenceError(f"Corrupt task list: {e}") from e

    def save(self, state: GameState, tasks: List[Task]):
        """ゲームデータとタスクを丸ごと上書き保存"""
        self.set_values({
            GAME_DATA_KEY: json.dumps(state_to_dict(state), ensure_ascii=False),
            TASKS_KEY: json.dumps([asdict(t) for t in tasks], ensure_ascii=False),
        })
