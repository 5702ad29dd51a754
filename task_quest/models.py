"""
データモデル定義
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Set


@dataclass
class GameState:
    """ゲーム全体の状態（プレイヤー進行 + ペット）"""
    # プレイヤー進行
    level: int = 1
    xp: float = 0
    total_xp: float = 0
    streak: int = 0
    last_completed_date: Optional[date] = None
    total_completed: int = 0
    achievements: Set[str] = field(default_factory=set)  # 解放済みID
    sound_enabled: bool = True

    # ペットのステータス（0-100）
    pet_happiness: float = 50
    pet_energy: float = 75
    pet_hunger: float = 30
    pet_stage: int = 0
    pet_last_fed: datetime = field(default_factory=datetime.now)
    pet_last_pet: datetime = field(default_factory=datetime.now)
    pet_last_update: Optional[datetime] = field(default_factory=datetime.now)

    # 冬眠
    pet_hibernating: bool = False
    hibernation_start_time: Optional[datetime] = None


@dataclass
class Task:
    """タスクモデル"""
    id: int = 0
    text: str = ""
    priority: str = "medium"  # low, medium, high
    completed: bool = False
    xp: int = 25


@dataclass(frozen=True)
class Evolution:
    """進化段階"""
    stage: int
    emoji: str
    name: str
    mood: str
    min_level: int


@dataclass(frozen=True)
class Achievement:
    """実績"""
    id: str
    name: str
    description: str
    icon: str
    requirement: int
    kind: str = "count"  # count, streak, level（それ以外は完了数で判定）


@dataclass(frozen=True)
class Celebration:
    """お祝いポップアップ"""
    title: str
    text: str
    icon: str = "🎉"


@dataclass(frozen=True)
class Sound:
    """効果音（xp, levelup, achievement, pet, evolution, hibernate）"""
    kind: str


@dataclass(frozen=True)
class Particles:
    """パーティクル演出（hearts, confetti）"""
    kind: str
    count: int
