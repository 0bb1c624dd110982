"""
Playfield geometry and kinematics.
NO UI DEPENDENCIES.

Coordinate system:
- (0, 0) is top-left
- x increases to the right
- y increases downward (rockets fall toward larger y)
"""
import math
from dataclasses import dataclass
from typing import Tuple

from .constants import ROCKET_EPSILON


@dataclass(frozen=True)
class Point:
    """A position on the logical playfield."""
    x: float
    y: float

    def distance_to(self, other: 'Point') -> float:
        return distance(self.x, self.y, other.x, other.y)


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two coordinates."""
    return math.hypot(x2 - x1, y2 - y1)


def lerp(start: float, end: float, t: float) -> float:
    """Linear interpolation: start at t=0, end at t=1."""
    return start + (end - start) * t


def interpolate(start: Point, end: Point, progress: float) -> Point:
    """Position along the start->end line at the given progress."""
    return Point(lerp(start.x, end.x, progress), lerp(start.y, end.y, progress))


def rocket_step(
    x: float,
    y: float,
    target_x: float,
    target_y: float,
    speed: float,
    progress: float,
    epsilon: float = ROCKET_EPSILON,
) -> Tuple[float, float]:
    """
    Move a rocket a fraction of its remaining distance to target.

    `progress` is the value AFTER this tick's increment. The fraction
    speed / (1 - progress + epsilon) grows as the remaining distance
    shrinks, so the step length stays close to constant until the last
    tick, which can overshoot the target.
    """
    factor = speed / (1.0 - progress + epsilon)
    return (
        x + (target_x - x) * factor,
        y + (target_y - y) * factor,
    )
