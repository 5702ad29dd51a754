from datetime import timedelta

from conftest import T0, make_state
from task_quest.logic.pet_logic import PetMoodSelector, clamp_stat
from task_quest.models import Celebration, Particles, Sound


def test_clamp_stat_saturates():
    assert clamp_stat(-12.5) == 0
    assert clamp_stat(140) == 100
    assert clamp_stat(42) == 42


def test_one_hour_of_awake_decay(pet_system):
    state = make_state(pet_hunger=30, pet_energy=75, pet_happiness=50)
    assert pet_system.apply_decay(state, T0 + timedelta(hours=1))
    assert state.pet_hunger == 50
    assert state.pet_energy == 65
    assert state.pet_happiness == 42
    assert state.pet_last_update == T0 + timedelta(hours=1)


def test_hungry_pet_loses_extra_happiness(pet_system):
    state = make_state(pet_hunger=60, pet_energy=75, pet_happiness=50)
    pet_system.apply_decay(state, T0 + timedelta(hours=1))
    assert state.pet_hunger == 80
    assert state.pet_happiness == 37


def test_hibernating_decay_rates(pet_system):
    state = make_state(pet_hibernating=True, hibernation_start_time=T0,
                       pet_hunger=30, pet_energy=10, pet_happiness=50)
    pet_system.apply_decay(state, T0 + timedelta(hours=1))
    assert state.pet_hunger == 50
    assert state.pet_energy == 5
    assert state.pet_happiness == 35
    assert state.pet_hibernating


def test_decay_under_one_minute_is_skipped(pet_system):
    state = make_state(pet_energy=75)
    assert not pet_system.apply_decay(state, T0 + timedelta(seconds=59))
    assert state.pet_energy == 75
    assert state.pet_last_update == T0


def test_decay_twice_with_same_now_applies_once(pet_system):
    state = make_state()
    now = T0 + timedelta(minutes=30)
    assert pet_system.apply_decay(state, now)
    snapshot = (state.pet_hunger, state.pet_energy, state.pet_happiness)
    assert not pet_system.apply_decay(state, now)
    assert (state.pet_hunger, state.pet_energy, state.pet_happiness) == snapshot


def test_decay_handles_clock_going_backwards(pet_system):
    state = make_state(pet_energy=75)
    assert not pet_system.apply_decay(state, T0 - timedelta(hours=3))
    assert state.pet_energy == 75


def test_long_absence_clamps_and_hibernates(pet_system, effects):
    state = make_state(pet_hunger=30, pet_energy=75, pet_happiness=50)
    pet_system.apply_decay(state, T0 + timedelta(days=30))
    assert state.pet_hunger == 100
    assert state.pet_energy == 0
    assert state.pet_happiness == 0
    assert state.pet_hibernating
    assert state.hibernation_start_time == T0 + timedelta(days=30)
    assert Sound("hibernate") in effects.drain()


def test_energy_reaching_zero_enters_hibernation(pet_system, effects):
    state = make_state(pet_energy=0, pet_happiness=50)
    pet_system.check_hibernation(state, T0)
    assert state.pet_hibernating
    assert state.hibernation_start_time == T0
    assert state.pet_happiness == 20
    drained = effects.drain()
    assert any(isinstance(e, Celebration) and "Hibernating" in e.title for e in drained)


def test_hibernation_penalty_clamps_at_zero(pet_system):
    state = make_state(pet_energy=0, pet_happiness=10)
    pet_system.check_hibernation(state, T0)
    assert state.pet_happiness == 0


def test_hysteresis_keeps_pet_asleep_below_twenty(pet_system):
    state = make_state(pet_hibernating=True, hibernation_start_time=T0, pet_happiness=10)
    for energy in (0.5, 5, 12, 19.9):
        state.pet_energy = energy
        pet_system.check_hibernation(state, T0)
        assert state.pet_hibernating
    assert state.pet_happiness == 10


def test_hysteresis_keeps_pet_awake_above_zero(pet_system):
    state = make_state(pet_happiness=50)
    for energy in (100, 20, 5, 0.1):
        state.pet_energy = energy
        pet_system.check_hibernation(state, T0)
        assert not state.pet_hibernating
    assert state.pet_happiness == 50


def test_reaching_twenty_energy_wakes_pet(pet_system, effects):
    state = make_state(pet_hibernating=True, hibernation_start_time=T0,
                       pet_energy=20, pet_happiness=90)
    pet_system.check_hibernation(state, T0)
    assert not state.pet_hibernating
    assert state.hibernation_start_time is None
    assert state.pet_happiness == 100
    drained = effects.drain()
    assert Particles("hearts", 5) in drained
    assert Particles("confetti", 50) in drained
    assert Sound("levelup") in drained


def test_select_evolution_picks_highest_reached_stage(pet_system):
    assert pet_system.select_evolution(1).stage == 0
    assert pet_system.select_evolution(2).stage == 1
    assert pet_system.select_evolution(4).stage == 1
    assert pet_system.select_evolution(5).stage == 2
    assert pet_system.select_evolution(24).stage == 5
    assert pet_system.select_evolution(99).name == "Cosmic Phoenix"
    assert pet_system.select_evolution(0).stage == 0


def test_check_evolution_advances_once(pet_system, effects):
    state = make_state(level=10, pet_stage=1)
    evolved = pet_system.check_evolution(state)
    assert evolved.stage == 3
    assert state.pet_stage == 3
    assert effects.drain().count(Particles("confetti", 50)) == 2
    assert pet_system.check_evolution(state) is None
    assert len(effects) == 0


def test_stage_never_goes_backwards(pet_system):
    state = make_state(level=1, pet_stage=4)
    pet_system.check_evolution(state)
    assert state.pet_stage == 4


def test_pet_cooldown(pet_system):
    state = make_state(pet_happiness=50)
    assert not pet_system.pet(state, T0 + timedelta(seconds=9))
    assert state.pet_happiness == 50
    assert pet_system.pet(state, T0 + timedelta(seconds=10))
    assert state.pet_happiness == 60
    assert not pet_system.pet(state, T0 + timedelta(seconds=15))
    assert state.pet_happiness == 60


def test_petting_a_hibernating_pet_restores_energy(pet_system, effects):
    state = make_state(pet_hibernating=True, hibernation_start_time=T0,
                       pet_energy=3, pet_happiness=10)
    assert pet_system.pet(state, T0 + timedelta(minutes=1))
    assert state.pet_energy == 8
    assert state.pet_happiness == 15
    assert state.pet_hibernating
    assert Particles("hearts", 2) in effects.drain()


def test_feed_and_boost_clamp(pet_system):
    state = make_state(pet_hunger=10, pet_energy=95, pet_happiness=98)
    pet_system.feed(state, T0)
    pet_system.boost_energy(state)
    assert state.pet_hunger == 0
    assert state.pet_energy == 100
    assert state.pet_happiness == 100


def test_stat_levels(pet_system):
    assert pet_system.stat_level("energy", 0) == "critical"
    assert pet_system.stat_level("energy", 29) == "warning"
    assert pet_system.stat_level("hunger", 100) == "critical"
    assert pet_system.stat_level("hunger", 71) == "warning"
    assert pet_system.stat_level("happiness", 19) == "critical"
    assert pet_system.stat_level("happiness", 39) == "warning"
    assert pet_system.stat_level("happiness", 80) == "normal"


def test_mood_categories_follow_priority(pet_system):
    selector = PetMoodSelector(pet_system, seed=7)
    cases = [
        (dict(pet_hunger=85, pet_energy=10, pet_happiness=10), "hungry"),
        (dict(pet_hunger=10, pet_energy=20, pet_happiness=100), "sleepy"),
        (dict(pet_hunger=10, pet_energy=90, pet_happiness=90), "happy"),
        (dict(pet_hunger=10, pet_energy=40, pet_happiness=10), "sad"),
        (dict(pet_hunger=10, pet_energy=90, pet_happiness=40), "energetic"),
        (dict(pet_hunger=10, pet_energy=50, pet_happiness=50), "default"),
        (dict(pet_hibernating=True, pet_energy=90, pet_happiness=90), "hibernating"),
    ]
    for overrides, expected in cases:
        assert selector.get_mood_category(make_state(**overrides)) == expected


def test_mood_text_comes_from_pool_and_does_not_touch_state(pet_system):
    selector = PetMoodSelector(pet_system, seed=3)
    state = make_state(pet_hunger=10, pet_energy=90, pet_happiness=90)
    before = (state.pet_hunger, state.pet_energy, state.pet_happiness)
    assert selector.get_mood_text(state) in PetMoodSelector.MOODS["happy"]
    assert (state.pet_hunger, state.pet_energy, state.pet_happiness) == before

    state = make_state(pet_hunger=10, pet_energy=50, pet_happiness=50, level=3)
    assert selector.get_mood_text(state) == "Chirp chirp!"
