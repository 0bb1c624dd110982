"""
Difficulty curve - how spawning and progression scale with level.
NO UI DEPENDENCIES.

These are tuning formulas without a derivation; keep them parameterized
through GameSettings rather than baking in new meaning.
"""
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config import GameSettings


def spawn_interval(level: int, settings: 'GameSettings') -> float:
    """
    Milliseconds between rockets at the given level.
    Shrinks by spawn_interval_step per level, floored at min_spawn_interval.
    """
    return max(
        settings.min_spawn_interval,
        settings.base_spawn_interval - level * settings.spawn_interval_step,
    )


def rocket_speed(level: int, settings: 'GameSettings') -> float:
    """Progress per tick for rockets spawned at the given level."""
    return settings.base_rocket_speed + level * settings.rocket_speed_step


def level_up_threshold(level: int, settings: 'GameSettings') -> int:
    """Score that must be exceeded (strictly) to leave the given level."""
    return level * settings.level_score_step


def should_level_up(level: int, score: int, settings: 'GameSettings') -> bool:
    """Check if the score earns the next level."""
    return level < settings.max_level and score > level_up_threshold(level, settings)
