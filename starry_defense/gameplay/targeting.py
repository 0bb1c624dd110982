"""
Targeting - turns a player's click or tap into an interceptor launch.
NO UI DEPENDENCIES.
"""
from typing import Iterable, Optional, Tuple, TYPE_CHECKING

from .entities import Interceptor, Turret
from .geometry import Point

if TYPE_CHECKING:
    from .store import EntityStore


# (left, top, width, height) of the displayed playfield, in device pixels
DisplayRect = Tuple[float, float, float, float]


def to_playfield(
    device_x: float,
    device_y: float,
    display_rect: DisplayRect,
    playfield_size: Tuple[float, float],
) -> Point:
    """
    Map a device-pixel position onto the logical playfield.

    The playfield may be drawn scaled (e.g. a resized window), so the
    offset from the display origin is multiplied by logical/displayed size.
    """
    left, top, width, height = display_rect
    if width <= 0 or height <= 0:
        raise ValueError(f"display size must be positive, got {width}x{height}")

    playfield_width, playfield_height = playfield_size
    scale_x = playfield_width / width
    scale_y = playfield_height / height
    return Point((device_x - left) * scale_x, (device_y - top) * scale_y)


def select_turret(point: Point, turrets: Iterable[Turret]) -> Optional[Turret]:
    """
    Pick the turret that should answer a shot at `point`.

    Only active turrets with ammo are considered. The one with the smallest
    horizontal distance wins; on a tie the first one encountered is kept.
    """
    best: Optional[Turret] = None
    best_distance = float("inf")

    for turret in turrets:
        if not turret.can_fire:
            continue
        dist = abs(turret.x - point.x)
        if dist < best_distance:
            best_distance = dist
            best = turret

    return best


def fire_interceptor(
    point: Point,
    store: 'EntityStore',
    interceptor_speed: float,
) -> Optional[Tuple[Turret, Interceptor]]:
    """
    Launch an interceptor toward `point` from the best turret.
    Returns (turret, interceptor), or None if no turret can fire.
    """
    turret = select_turret(point, store.turrets.values())
    if turret is None:
        return None

    turret.consume_ammo()
    interceptor = store.add_interceptor(
        start_x=turret.x,
        start_y=turret.y,
        target_x=point.x,
        target_y=point.y,
        speed=interceptor_speed,
    )
    return turret, interceptor
