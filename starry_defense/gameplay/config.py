"""
Configuration management for Starry Defense.
Uses pydantic-settings for environment variable parsing.

Every field can be overridden with a STARRY_DEFENSE_* environment variable
(or a .env file). Invalid values are rejected when the settings object is
constructed, before any simulation state exists.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings

from .constants import (
    PLAYFIELD_WIDTH, PLAYFIELD_HEIGHT, TURRET_LAYOUT, CITY_LAYOUT,
    BASE_SPAWN_INTERVAL, SPAWN_INTERVAL_STEP, MIN_SPAWN_INTERVAL,
    BASE_ROCKET_SPEED, ROCKET_SPEED_STEP, INTERCEPTOR_SPEED,
    EXPLOSION_MAX_RADIUS, EXPLOSION_EXPANSION_RATE,
    EXPLOSION_CONTRACTION_RATE, EXPLOSION_FADE_RATE,
    TARGET_SCORE, KILL_REWARD, MAX_LEVEL, LEVEL_SCORE_STEP, FRAME_RATE,
)


class CityLayout(BaseModel):
    """Starting position of one city."""
    x: float
    y: float


class TurretLayout(BaseModel):
    """Starting position and magazine size of one turret."""
    x: float
    y: float
    max_ammo: int = Field(ge=0)


def _default_cities() -> List[CityLayout]:
    return [CityLayout(x=x, y=y) for x, y in CITY_LAYOUT]


def _default_turrets() -> List[TurretLayout]:
    return [TurretLayout(x=x, y=y, max_ammo=ammo) for x, y, ammo in TURRET_LAYOUT]


class GameSettings(BaseSettings):
    """Simulation settings loaded from environment variables."""

    # Playfield
    playfield_width: float = Field(default=PLAYFIELD_WIDTH, gt=0)
    playfield_height: float = Field(default=PLAYFIELD_HEIGHT, gt=0)

    # Layout
    cities: List[CityLayout] = Field(default_factory=_default_cities)
    turrets: List[TurretLayout] = Field(
        default_factory=_default_turrets,
        description="Losing every turret ends the game, so at least one is required"
    )

    # Spawning
    base_spawn_interval: float = Field(
        default=BASE_SPAWN_INTERVAL,
        ge=0,
        description="Milliseconds between rockets at level 0"
    )
    spawn_interval_step: float = Field(
        default=SPAWN_INTERVAL_STEP,
        ge=0,
        description="Milliseconds removed from the interval per level"
    )
    min_spawn_interval: float = Field(default=MIN_SPAWN_INTERVAL, ge=0)

    # Kinematics (progress per tick)
    base_rocket_speed: float = Field(default=BASE_ROCKET_SPEED, gt=0, le=1)
    rocket_speed_step: float = Field(default=ROCKET_SPEED_STEP, ge=0)
    interceptor_speed: float = Field(default=INTERCEPTOR_SPEED, gt=0, le=1)

    # Explosions
    explosion_max_radius: float = Field(default=EXPLOSION_MAX_RADIUS, gt=0)
    explosion_expansion_rate: float = Field(default=EXPLOSION_EXPANSION_RATE, gt=0)
    explosion_contraction_rate: float = Field(default=EXPLOSION_CONTRACTION_RATE, ge=0)
    explosion_fade_rate: float = Field(default=EXPLOSION_FADE_RATE, gt=0, le=1)

    # Scoring & progression
    target_score: int = Field(default=TARGET_SCORE, gt=0)
    kill_reward: int = Field(default=KILL_REWARD, gt=0)
    max_level: int = Field(default=MAX_LEVEL, ge=1)
    level_score_step: int = Field(default=LEVEL_SCORE_STEP, gt=0)

    # Host
    frame_rate: int = Field(default=FRAME_RATE, gt=0)
    seed: Optional[int] = Field(
        default=None,
        description="Seed for the simulation random source. None means unseeded"
    )
    log_level: str = Field(default="INFO", pattern="(?i)^(debug|info|warning|error|critical)$")
    language: str = Field(default="zh", pattern="^(zh|en)$")

    class Config:
        env_prefix = "STARRY_DEFENSE_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    @model_validator(mode="after")
    def check_layout(self) -> "GameSettings":
        """Reject layouts the simulation cannot play."""
        if not self.turrets:
            raise ValueError("at least one turret is required")

        for structure in [*self.cities, *self.turrets]:
            if not (0 <= structure.x <= self.playfield_width
                    and 0 <= structure.y <= self.playfield_height):
                raise ValueError(
                    f"structure at ({structure.x}, {structure.y}) lies outside the "
                    f"{self.playfield_width}x{self.playfield_height} playfield"
                )

        # Progress per tick at max level stays within one full path
        top_speed = self.base_rocket_speed + self.max_level * self.rocket_speed_step
        if top_speed > 1:
            raise ValueError(
                f"rocket speed at level {self.max_level} would be {top_speed}, above 1 per tick"
            )
        return self


@lru_cache()
def get_settings() -> GameSettings:
    """
    Get cached settings instance.
    Tests should build GameSettings directly instead.
    """
    return GameSettings()
