"""
表示・通知・効果音・パーティクルの出力先インターフェース
"""
from typing import List
from .models import GameState, Task


class GameSinks:
    """何もしない既定の出力先（UI層で継承して実装する）"""

    def render(self, state: GameState, tasks: List[Task]):
        pass

    def notify(self, title: str, body: str, icon: str):
        pass

    def play_sound(self, kind: str):
        pass

    def spawn_particles(self, kind: str, count: int):
        pass
