"""
Playfield entities: Rocket, Interceptor, Explosion, City, Turret.
NO UI DEPENDENCIES.

Moving entities advance one tick at a time; every rate here is "per tick",
not per second. Entities never touch the store themselves: the simulation
step reads their state after update() and decides what to add or remove.
"""
from dataclasses import dataclass, replace
from enum import Enum, auto

from .geometry import Point, interpolate, rocket_step
from .constants import (
    EXPLOSION_MAX_RADIUS, EXPLOSION_EXPANSION_RATE,
    EXPLOSION_CONTRACTION_RATE, EXPLOSION_FADE_RATE,
)


class StructureKind(Enum):
    """Kinds of ground structures a rocket can target."""
    CITY = auto()
    TURRET = auto()


@dataclass(frozen=True)
class TargetRef:
    """Identity of a rocket's target, fixed at spawn time."""
    kind: StructureKind
    id: int


@dataclass
class City:
    """A passive structure. Once struck it stays inactive."""
    id: int
    x: float
    y: float
    active: bool = True

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)

    def destroy(self) -> None:
        self.active = False

    def copy(self) -> 'City':
        return replace(self)


@dataclass
class Turret:
    """
    A firing position with a finite magazine.
    Once struck it stays inactive and can no longer fire.
    """
    id: int
    x: float
    y: float
    ammo: int
    max_ammo: int
    active: bool = True

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)

    @property
    def can_fire(self) -> bool:
        return self.active and self.ammo > 0

    def consume_ammo(self) -> bool:
        """
        Spend one round.
        Returns True if a round was spent, False if the turret cannot fire.
        """
        if not self.can_fire:
            return False
        self.ammo -= 1
        return True

    def refill(self) -> None:
        """Top up the magazine. Destroyed turrets stay as they are."""
        if self.active:
            self.ammo = self.max_ammo

    def destroy(self) -> None:
        self.active = False

    def copy(self) -> 'Turret':
        return replace(self)


@dataclass
class Rocket:
    """
    An incoming projectile falling toward a city or turret.

    The target position is copied from the structure at spawn time; the
    TargetRef says which structure the impact resolves against.
    """
    id: int
    x: float
    y: float
    target_x: float
    target_y: float
    target: TargetRef
    speed: float
    progress: float = 0.0  # 0 to 1

    def update(self) -> None:
        """Advance one tick along the remaining-distance-biased path."""
        self.progress += self.speed
        self.x, self.y = rocket_step(
            self.x, self.y, self.target_x, self.target_y, self.speed, self.progress
        )

    @property
    def has_landed(self) -> bool:
        return self.progress >= 1.0

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)

    def copy(self) -> 'Rocket':
        return replace(self)


@dataclass
class Interceptor:
    """A player-fired projectile flying in a straight line to a chosen point."""
    id: int
    x: float
    y: float
    start_x: float
    start_y: float
    target_x: float
    target_y: float
    speed: float
    progress: float = 0.0  # 0 to 1

    def update(self) -> None:
        """Advance one tick by linear interpolation from the launch origin."""
        self.progress += self.speed
        position = interpolate(
            Point(self.start_x, self.start_y),
            Point(self.target_x, self.target_y),
            self.progress,
        )
        self.x, self.y = position.x, position.y

    @property
    def has_arrived(self) -> bool:
        return self.progress >= 1.0

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)

    def copy(self) -> 'Interceptor':
        return replace(self)


@dataclass
class Explosion:
    """
    A blast left behind by an interceptor.

    Two phases:
    - expanding: radius grows each tick until it reaches max_radius
    - contracting: life fades and radius shrinks each tick until life <= 0
    """
    id: int
    x: float
    y: float
    radius: float = 0.0
    max_radius: float = EXPLOSION_MAX_RADIUS
    expanding: bool = True
    life: float = 1.0  # 0 to 1, drives fade
    expansion_rate: float = EXPLOSION_EXPANSION_RATE
    contraction_rate: float = EXPLOSION_CONTRACTION_RATE
    fade_rate: float = EXPLOSION_FADE_RATE

    def update(self) -> None:
        """Advance one tick of the two-phase lifecycle."""
        if self.expanding:
            self.radius = min(self.radius + self.expansion_rate, self.max_radius)
            if self.radius >= self.max_radius:
                self.expanding = False
        else:
            self.life -= self.fade_rate
            self.radius = max(0.0, self.radius - self.contraction_rate)

    def contains(self, x: float, y: float) -> bool:
        """Check if a point lies strictly inside the current blast radius."""
        return self.position.distance_to(Point(x, y)) < self.radius

    @property
    def is_spent(self) -> bool:
        return self.life <= 0

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)

    def copy(self) -> 'Explosion':
        return replace(self)
