"""
Task Quest - メインアプリケーション
"""
import logging
import flet as ft
from . import config
from .database import Database
from .game import GameController
from .logic.tick_logic import DecayTicker
from .views.quest_view import FletSinks, QuestView


def main(page: ft.Page):
    """アプリケーションエントリーポイント"""

    # ページ設定
    page.title = "Task Quest"
    page.theme_mode = ft.ThemeMode.DARK
    page.padding = 20
    page.bgcolor = "#0f0f1a"
    page.theme = ft.Theme(
        color_scheme=ft.ColorScheme(
            primary="#7c4dff",
            secondary="#00bcd4",
            surface="#1a1a2e",
        ),
    )

    view = QuestView(page)
    game = GameController(Database(config.DB_PATH), FletSinks(view))
    view.attach(game)
    page.add(view)

    # オフライン中の減衰を反映してから定期更新を開始
    game.start()

    ticker = DecayTicker(interval=config.TICK_SECONDS, on_tick=game.tick)
    page.on_disconnect = lambda e: ticker.stop()
    page.run_task(ticker.run)


if __name__ == "__main__":
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ft.app(target=main, port=config.FLET_SERVER_PORT)
