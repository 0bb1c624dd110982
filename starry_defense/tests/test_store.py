"""
Tests for the entity store.
"""
import pytest

from starry_defense.gameplay.config import GameSettings
from starry_defense.gameplay.constants import CITY_LAYOUT, TURRET_LAYOUT
from starry_defense.gameplay.entities import StructureKind, TargetRef
from starry_defense.gameplay.store import EntityStore


CITY_1 = TargetRef(StructureKind.CITY, 1)


@pytest.fixture
def store(settings: GameSettings) -> EntityStore:
    return EntityStore(settings)


def add_rocket(store: EntityStore):
    return store.add_rocket(x=10.0, y=0.0, target=CITY_1, target_x=180.0, target_y=570.0, speed=0.01)


class TestReset:
    """Tests for the reset contract."""

    def test_initial_layout(self, store: EntityStore):
        """Store starts with the configured cities and turrets, all active."""
        assert len(store.cities) == len(CITY_LAYOUT)
        assert len(store.turrets) == len(TURRET_LAYOUT)
        assert all(c.active for c in store.cities.values())
        assert all(t.active for t in store.turrets.values())

    def test_layout_ids_and_positions(self, store: EntityStore):
        """Structures take ids 1..n in layout order."""
        assert list(store.cities) == [1, 2, 3, 4, 5, 6]
        assert (store.cities[1].x, store.cities[1].y) == (180.0, 570.0)

        turret = store.turrets[2]
        assert (turret.x, turret.y) == (400.0, 550.0)
        assert turret.ammo == turret.max_ammo == 40

    def test_empty_store_without_settings(self):
        """A store built without settings holds nothing."""
        store = EntityStore()
        assert not store.cities
        assert not store.turrets

    def test_reset_clears_moving_entities(self, store: EntityStore, settings: GameSettings):
        """Reset removes rockets, interceptors and explosions."""
        add_rocket(store)
        store.add_interceptor(80.0, 550.0, 100.0, 100.0, 0.02)
        store.add_explosion(100.0, 100.0)

        store.reset(settings)

        assert not store.rockets
        assert not store.interceptors
        assert not store.explosions

    def test_reset_restores_structures(self, store: EntityStore, settings: GameSettings):
        """Reset brings back destroyed structures with full ammo."""
        store.cities[3].destroy()
        store.turrets[1].destroy()
        store.turrets[2].ammo = 0

        store.reset(settings)

        assert store.cities[3].active
        assert store.turrets[1].active
        assert store.turrets[2].ammo == 40


class TestMovingEntities:
    """Tests for add/remove of rockets, interceptors and explosions."""

    def test_ids_are_unique_and_increasing(self, store: EntityStore):
        """Each new rocket gets a fresh id."""
        ids = [add_rocket(store).id for _ in range(5)]
        assert ids == [1, 2, 3, 4, 5]

    def test_ids_not_reused_after_removal(self, store: EntityStore):
        """Removing a rocket does not free its id."""
        first = add_rocket(store)
        store.remove_rocket(first.id)
        second = add_rocket(store)
        assert second.id != first.id

    def test_ids_not_reused_after_reset(self, store: EntityStore, settings: GameSettings):
        """Reset does not rewind id counters."""
        before = add_rocket(store)
        store.reset(settings)
        after = add_rocket(store)
        assert after.id > before.id

    def test_remove_returns_entity(self, store: EntityStore):
        """remove_* returns what it removed."""
        rocket = add_rocket(store)
        assert store.remove_rocket(rocket.id) is rocket
        assert rocket.id not in store.rockets

    def test_remove_missing_is_noop(self, store: EntityStore):
        """Removing an unknown id returns None."""
        assert store.remove_rocket(99) is None
        assert store.remove_interceptor(99) is None
        assert store.remove_explosion(99) is None

    def test_new_explosion_defaults(self, store: EntityStore):
        """Explosions start at radius 0, expanding, full life."""
        explosion = store.add_explosion(100.0, 200.0, max_radius=30.0)
        assert explosion.radius == 0.0
        assert explosion.max_radius == 30.0
        assert explosion.expanding
        assert explosion.life == 1.0

    def test_interceptor_starts_at_origin(self, store: EntityStore):
        """A new interceptor sits on its launch point."""
        interceptor = store.add_interceptor(80.0, 550.0, 100.0, 100.0, 0.02)
        assert (interceptor.x, interceptor.y) == (80.0, 550.0)
        assert interceptor.progress == 0.0

    def test_iteration_survives_removal(self, store: EntityStore):
        """Entities can be removed while iterating."""
        for _ in range(4):
            add_rocket(store)

        seen = []
        for rocket in store.iter_rockets():
            seen.append(rocket.id)
            store.remove_rocket(rocket.id)

        assert seen == [1, 2, 3, 4]
        assert not store.rockets

    def test_iteration_skips_entities_removed_ahead(self, store: EntityStore):
        """An entity removed before its turn is not yielded."""
        for _ in range(3):
            add_rocket(store)

        seen = []
        for rocket in store.iter_rockets():
            seen.append(rocket.id)
            store.remove_rocket(3)

        assert seen == [1, 2]


class TestStructures:
    """Tests for structure queries."""

    def test_get_structure(self, store: EntityStore):
        """TargetRef resolves to the right city or turret."""
        assert store.get_structure(CITY_1) is store.cities[1]
        turret_ref = TargetRef(StructureKind.TURRET, 3)
        assert store.get_structure(turret_ref) is store.turrets[3]
        assert store.get_structure(TargetRef(StructureKind.CITY, 42)) is None

    def test_live_targets_order(self, store: EntityStore):
        """Live targets list active cities first, then active turrets."""
        kinds = [ref.kind for ref, _ in store.live_targets()]
        assert kinds == [StructureKind.CITY] * 6 + [StructureKind.TURRET] * 3

    def test_live_targets_skip_destroyed(self, store: EntityStore):
        """Destroyed structures are not targets."""
        store.cities[1].destroy()
        store.turrets[2].destroy()

        refs = [ref for ref, _ in store.live_targets()]
        assert CITY_1 not in refs
        assert TargetRef(StructureKind.TURRET, 2) not in refs
        assert len(refs) == 7

    def test_all_turrets_inactive(self, store: EntityStore):
        """Only true once every turret is down."""
        store.turrets[1].destroy()
        store.turrets[2].destroy()
        assert not store.all_turrets_inactive()

        store.turrets[3].destroy()
        assert store.all_turrets_inactive()
