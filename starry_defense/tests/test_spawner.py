"""
Tests for the rocket spawner and the difficulty curve.
"""
import random

import pytest

from starry_defense.gameplay.config import GameSettings
from starry_defense.gameplay.entities import StructureKind
from starry_defense.gameplay.levels import (
    spawn_interval, rocket_speed, level_up_threshold, should_level_up,
)
from starry_defense.gameplay.spawner import Spawner
from starry_defense.gameplay.store import EntityStore


@pytest.fixture
def store(settings: GameSettings) -> EntityStore:
    return EntityStore(settings)


@pytest.fixture
def spawner(settings: GameSettings) -> Spawner:
    return Spawner(settings, random.Random(42))


class TestLevels:
    """Tests for the level formulas."""

    def test_spawn_interval_shrinks_with_level(self, settings: GameSettings):
        """2000ms minus 200ms per level."""
        assert spawn_interval(1, settings) == 1800
        assert spawn_interval(5, settings) == 1000

    def test_spawn_interval_floor(self, settings: GameSettings):
        """Interval never drops under the minimum."""
        assert spawn_interval(8, settings) == 500
        assert spawn_interval(20, settings) == 500

    def test_rocket_speed_grows_with_level(self, settings: GameSettings):
        """0.0005 plus 0.0002 per level."""
        assert rocket_speed(1, settings) == pytest.approx(0.0007)
        assert rocket_speed(3, settings) == pytest.approx(0.0011)

    def test_level_up_threshold(self, settings: GameSettings):
        """Threshold is level * 200."""
        assert level_up_threshold(1, settings) == 200
        assert level_up_threshold(4, settings) == 800

    def test_should_level_up_is_strict(self, settings: GameSettings):
        """Score must exceed the threshold, not just meet it."""
        assert not should_level_up(1, 200, settings)
        assert should_level_up(1, 220, settings)

    def test_no_level_up_past_max(self, settings: GameSettings):
        """Max level is final."""
        assert not should_level_up(5, 5000, settings)


class TestSpawner:
    """Tests for Spawner gating and placement."""

    def test_not_due_before_interval(self, spawner: Spawner, store: EntityStore):
        """Nothing spawns until the interval has passed."""
        assert spawner.update(1000.0, store, level=1) is None
        assert spawner.update(1800.0, store, level=1) is None
        assert not store.rockets

    def test_spawns_after_interval(self, spawner: Spawner, store: EntityStore):
        """A rocket spawns once more than the interval has passed."""
        rocket = spawner.update(1801.0, store, level=1)
        assert rocket is not None
        assert store.rockets[rocket.id] is rocket
        assert spawner.last_spawn_time == 1801.0

    def test_gate_rearms_after_spawn(self, spawner: Spawner, store: EntityStore):
        """The next rocket waits a full interval after the last one."""
        spawner.update(1801.0, store, level=1)
        assert spawner.update(3000.0, store, level=1) is None
        assert spawner.update(3602.0, store, level=1) is not None
        assert len(store.rockets) == 2

    def test_higher_level_spawns_sooner(self, spawner: Spawner, store: EntityStore):
        """At level 5 the interval is 1000ms."""
        assert spawner.update(1001.0, store, level=5) is not None

    def test_rocket_placement(self, spawner: Spawner, store: EntityStore, settings: GameSettings):
        """Rockets start on the top edge and aim at their target's position."""
        rocket = spawner.update(1801.0, store, level=2)

        assert rocket.y == 0.0
        assert 0.0 <= rocket.x <= settings.playfield_width
        assert rocket.progress == 0.0
        assert rocket.speed == pytest.approx(rocket_speed(2, settings))

        target = store.get_structure(rocket.target)
        assert target is not None
        assert (rocket.target_x, rocket.target_y) == (target.x, target.y)

    def test_no_targets_is_noop(self, spawner: Spawner, store: EntityStore):
        """With nothing left to hit, no rocket appears and the gate stays open."""
        for city in store.cities.values():
            city.destroy()
        for turret in store.turrets.values():
            turret.destroy()

        assert spawner.update(5000.0, store, level=1) is None
        assert not store.rockets
        assert spawner.last_spawn_time == 0.0

    def test_only_active_targets(self, spawner: Spawner, store: EntityStore):
        """Destroyed structures are never targeted."""
        for city in store.cities.values():
            city.destroy()

        now = 0.0
        for _ in range(30):
            now += 2000.0
            rocket = spawner.update(now, store, level=1)
            assert rocket.target.kind == StructureKind.TURRET

    def test_every_live_target_gets_picked(self, store: EntityStore):
        """Targets are drawn from all cities and turrets combined."""
        settings = GameSettings(base_spawn_interval=0, min_spawn_interval=0)
        spawner = Spawner(settings, random.Random(3))

        picked = set()
        for now in range(1, 901):
            rocket = spawner.update(float(now), store, level=1)
            picked.add(rocket.target)

        assert len(picked) == len(store.cities) + len(store.turrets)

    def test_seeded_spawns_repeat(self, settings: GameSettings):
        """Same seed, same rockets."""
        runs = []
        for _ in range(2):
            store = EntityStore(settings)
            spawner = Spawner(settings, random.Random(7))
            rockets = [spawner.update(2000.0 * (i + 1), store, level=1) for i in range(10)]
            runs.append([(r.x, r.target) for r in rockets])

        assert runs[0] == runs[1]

    def test_reset_rearms_from_given_time(self, spawner: Spawner, store: EntityStore):
        """reset(now) pushes the next spawn a full interval past now."""
        spawner.reset(10_000.0)
        assert spawner.update(11_000.0, store, level=1) is None
        assert spawner.update(11_801.0, store, level=1) is not None
