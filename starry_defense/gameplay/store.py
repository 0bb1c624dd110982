"""
Entity store - the single source of simulation state.
NO UI DEPENDENCIES.
"""
from itertools import count
from typing import Dict, Iterator, List, Optional, Tuple, Union, TYPE_CHECKING

from .entities import (
    City, Turret, Rocket, Interceptor, Explosion, StructureKind, TargetRef,
)

if TYPE_CHECKING:
    from .config import GameSettings


Structure = Union[City, Turret]


class EntityStore:
    """
    Holds the five entity collections the simulation works on.

    Each collection is an insertion-ordered dict keyed by integer id, so
    iteration follows creation order and removal is O(1).

    Identities:
    - rockets, interceptors and explosions draw ids from counters that are
      never rewound, not even by reset()
    - cities and turrets take ids 1..n in layout order and get the same ids
      back on reset(), since they are the same structures restored
    """

    def __init__(self, settings: Optional['GameSettings'] = None):
        self.rockets: Dict[int, Rocket] = {}
        self.interceptors: Dict[int, Interceptor] = {}
        self.explosions: Dict[int, Explosion] = {}
        self.cities: Dict[int, City] = {}
        self.turrets: Dict[int, Turret] = {}

        self._rocket_ids = count(1)
        self._interceptor_ids = count(1)
        self._explosion_ids = count(1)

        if settings is not None:
            self.reset(settings)

    # =========================================================================
    # RESET
    # =========================================================================

    def reset(self, settings: 'GameSettings') -> None:
        """Clear moving entities and restore the starting layout with full ammo."""
        self.rockets.clear()
        self.interceptors.clear()
        self.explosions.clear()

        self.cities = {
            i: City(id=i, x=layout.x, y=layout.y)
            for i, layout in enumerate(settings.cities, start=1)
        }
        self.turrets = {
            i: Turret(id=i, x=layout.x, y=layout.y,
                      ammo=layout.max_ammo, max_ammo=layout.max_ammo)
            for i, layout in enumerate(settings.turrets, start=1)
        }

    # =========================================================================
    # MOVING ENTITIES
    # =========================================================================

    def add_rocket(
        self,
        x: float,
        y: float,
        target: TargetRef,
        target_x: float,
        target_y: float,
        speed: float,
    ) -> Rocket:
        rocket = Rocket(
            id=next(self._rocket_ids), x=x, y=y,
            target_x=target_x, target_y=target_y, target=target, speed=speed,
        )
        self.rockets[rocket.id] = rocket
        return rocket

    def add_interceptor(
        self,
        start_x: float,
        start_y: float,
        target_x: float,
        target_y: float,
        speed: float,
    ) -> Interceptor:
        interceptor = Interceptor(
            id=next(self._interceptor_ids), x=start_x, y=start_y,
            start_x=start_x, start_y=start_y,
            target_x=target_x, target_y=target_y, speed=speed,
        )
        self.interceptors[interceptor.id] = interceptor
        return interceptor

    def add_explosion(self, x: float, y: float, **params: float) -> Explosion:
        """
        Add a fresh explosion (radius 0, expanding, full life).
        Keyword params override the lifecycle tuning (max_radius, rates).
        """
        explosion = Explosion(id=next(self._explosion_ids), x=x, y=y, **params)
        self.explosions[explosion.id] = explosion
        return explosion

    def remove_rocket(self, rocket_id: int) -> Optional[Rocket]:
        """Remove and return a rocket, or None if it is already gone."""
        return self.rockets.pop(rocket_id, None)

    def remove_interceptor(self, interceptor_id: int) -> Optional[Interceptor]:
        return self.interceptors.pop(interceptor_id, None)

    def remove_explosion(self, explosion_id: int) -> Optional[Explosion]:
        return self.explosions.pop(explosion_id, None)

    # =========================================================================
    # STRUCTURES
    # =========================================================================

    def get_structure(self, ref: TargetRef) -> Optional[Structure]:
        """Resolve a target reference to its city or turret."""
        if ref.kind == StructureKind.CITY:
            return self.cities.get(ref.id)
        return self.turrets.get(ref.id)

    def active_cities(self) -> List[City]:
        return [c for c in self.cities.values() if c.active]

    def active_turrets(self) -> List[Turret]:
        return [t for t in self.turrets.values() if t.active]

    def live_targets(self) -> List[Tuple[TargetRef, Structure]]:
        """All structures a rocket may still target: active cities, then active turrets."""
        targets: List[Tuple[TargetRef, Structure]] = [
            (TargetRef(StructureKind.CITY, c.id), c) for c in self.active_cities()
        ]
        targets.extend(
            (TargetRef(StructureKind.TURRET, t.id), t) for t in self.active_turrets()
        )
        return targets

    def all_turrets_inactive(self) -> bool:
        return all(not t.active for t in self.turrets.values())

    # =========================================================================
    # READ-ONLY ITERATION
    # =========================================================================

    def iter_rockets(self) -> Iterator[Rocket]:
        """Iterate over a stable copy of the rocket ids, so removal is safe."""
        for rocket_id in list(self.rockets):
            rocket = self.rockets.get(rocket_id)
            if rocket is not None:
                yield rocket

    def iter_interceptors(self) -> Iterator[Interceptor]:
        for interceptor_id in list(self.interceptors):
            interceptor = self.interceptors.get(interceptor_id)
            if interceptor is not None:
                yield interceptor

    def iter_explosions(self) -> Iterator[Explosion]:
        for explosion_id in list(self.explosions):
            explosion = self.explosions.get(explosion_id)
            if explosion is not None:
                yield explosion

    def __repr__(self) -> str:
        return (
            f"EntityStore(rockets={len(self.rockets)}, "
            f"interceptors={len(self.interceptors)}, "
            f"explosions={len(self.explosions)}, "
            f"cities={len(self.active_cities())}/{len(self.cities)}, "
            f"turrets={len(self.active_turrets())}/{len(self.turrets)})"
        )
