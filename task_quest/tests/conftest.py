from datetime import datetime

import pytest

from task_quest.database import Database
from task_quest.game import GameController
from task_quest.logic.achievement_logic import AchievementSystem
from task_quest.logic.effects import EffectQueue
from task_quest.logic.pet_logic import PetSystem
from task_quest.logic.progression_logic import ProgressionSystem
from task_quest.models import GameState
from task_quest.sinks import GameSinks

T0 = datetime(2024, 3, 1, 12, 0, 0)


class RecordingSinks(GameSinks):
    """コントローラから出力された内容を記録する"""

    def __init__(self):
        self.renders = 0
        self.notifications = []
        self.sounds = []
        self.particles = []

    def render(self, state, tasks):
        self.renders += 1

    def notify(self, title, body, icon):
        self.notifications.append(title)

    def play_sound(self, kind):
        self.sounds.append(kind)

    def spawn_particles(self, kind, count):
        self.particles.append((kind, count))


def make_state(**overrides):
    values = dict(pet_last_update=T0, pet_last_pet=T0, pet_last_fed=T0)
    values.update(overrides)
    return GameState(**values)


@pytest.fixture
def effects():
    return EffectQueue()


@pytest.fixture
def pet_system(effects):
    return PetSystem(effects)


@pytest.fixture
def achievements(effects):
    return AchievementSystem(effects)


@pytest.fixture
def progression(pet_system, achievements, effects):
    return ProgressionSystem(pet_system, achievements, effects)


@pytest.fixture
def sinks():
    return RecordingSinks()


@pytest.fixture
def db(tmp_path):
    return Database(str(tmp_path / "task_quest.db"))


@pytest.fixture
def game(db, sinks):
    g = GameController(db, sinks, mood_seed=1)
    g.state = make_state()
    return g
