"""
アプリケーション設定（.env / 環境変数から読み込み）
"""
import os
from dotenv import load_dotenv

# 環境変数を読み込み
load_dotenv()

DB_PATH = os.getenv("TASK_QUEST_DB_PATH", "task_quest.db")
TICK_SECONDS = float(os.getenv("TASK_QUEST_TICK_SECONDS", "60"))
LOG_LEVEL = os.getenv("TASK_QUEST_LOG_LEVEL", "INFO")
FLET_SERVER_PORT = int(os.getenv("FLET_SERVER_PORT", "8080"))
