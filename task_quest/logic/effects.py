"""
演出キュー

状態遷移中に発生したお祝い・効果音・パーティクルを溜めておき、
コマンド完了後にまとめてシンクへ流す。
"""
from typing import List, Union
from ..models import Celebration, Sound, Particles

Effect = Union[Celebration, Sound, Particles]

CONFETTI_COUNT = 50
HEARTS_COUNT = 5


class EffectQueue:
    """演出の一時バッファ"""

    def __init__(self):
        self._effects: List[Effect] = []

    def celebrate(self, title: str, text: str, icon: str = "🎉"):
        self._effects.append(Celebration(title, text, icon))

    def sound(self, kind: str):
        self._effects.append(Sound(kind))

    def particles(self, kind: str, count: int):
        self._effects.append(Particles(kind, count))

    def confetti(self, bursts: int = 1):
        """紙吹雪（bursts回）"""
        for _ in range(bursts):
            self.particles("confetti", CONFETTI_COUNT)

    def hearts(self, count: int = HEARTS_COUNT):
        self.particles("hearts", count)

    def drain(self) -> List[Effect]:
        """溜まった演出を取り出してクリア"""
        effects = self._effects
        self._effects = []
        return effects

    def __len__(self):
        return len(self._effects)
