"""
Read-only view of the simulation for the presentation layer.
NO UI DEPENDENCIES.
"""
from dataclasses import dataclass
from typing import Tuple, TYPE_CHECKING

from .entities import Rocket, Interceptor, Explosion, City, Turret

if TYPE_CHECKING:
    from .game import GameStatus


@dataclass(frozen=True)
class GameSnapshot:
    """
    Everything a renderer needs for one frame.

    The entity tuples hold copies, so drawing code can read them freely
    without reaching back into the live store.
    """
    status: 'GameStatus'
    score: int
    level: int
    target_score: int
    max_level: int
    playfield_width: float
    playfield_height: float
    rockets: Tuple[Rocket, ...]
    interceptors: Tuple[Interceptor, ...]
    explosions: Tuple[Explosion, ...]
    cities: Tuple[City, ...]
    turrets: Tuple[Turret, ...]

    @property
    def active_city_count(self) -> int:
        return sum(1 for c in self.cities if c.active)

    @property
    def total_ammo(self) -> int:
        return sum(t.ammo for t in self.turrets if t.active)
