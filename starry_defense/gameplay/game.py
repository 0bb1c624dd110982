"""
Main Game class - orchestrates all gameplay systems.
NO UI DEPENDENCIES.

This is the central gameplay module. It can be fully tested
without any UI framework.
"""
import logging
import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional

from .config import GameSettings
from .entities import TargetRef
from .levels import should_level_up
from .snapshot import GameSnapshot
from .spawner import Spawner
from .store import EntityStore
from .targeting import DisplayRect, fire_interceptor, to_playfield
from .geometry import Point


logger = logging.getLogger(__name__)


class GameStatus(Enum):
    """Current status of the game."""
    START = auto()      # Title screen, waiting for the player
    PLAYING = auto()    # Rockets falling, simulation advancing
    WON = auto()        # Target score reached
    LOST = auto()       # Every turret destroyed


@dataclass
class GameEvent:
    """An event that occurred during gameplay (for UI to react to)."""
    pass


@dataclass
class PhaseChangedEvent(GameEvent):
    """Game status changed."""
    old_status: GameStatus
    new_status: GameStatus


@dataclass
class RocketSpawnedEvent(GameEvent):
    rocket_id: int
    target: TargetRef


@dataclass
class ImpactEvent(GameEvent):
    """A rocket reached its target. `destroyed` is False if the target was already down."""
    rocket_id: int
    target: TargetRef
    destroyed: bool


@dataclass
class InterceptorLaunchedEvent(GameEvent):
    interceptor_id: int
    turret_id: int


@dataclass
class DetonationEvent(GameEvent):
    """An interceptor reached its aim point and became an explosion."""
    interceptor_id: int
    explosion_id: int
    x: float
    y: float


@dataclass
class RocketDestroyedEvent(GameEvent):
    rocket_id: int
    explosion_id: int
    points: int
    new_score: int


@dataclass
class LevelUpEvent(GameEvent):
    new_level: int


class Game:
    """
    The main game class that orchestrates all gameplay.

    This class is COMPLETELY DECOUPLED from UI.
    It exposes state as a snapshot and accepts commands as method calls.
    Input handling and advance() are expected on the same thread, so no
    locking is done.

    Usage:
        game = Game(settings, rng=random.Random(7))
        game.start()
        while game.status == GameStatus.PLAYING:
            game.fire_at(x, y)
            events = game.advance(timestamp_ms)
            # UI reads game.snapshot() and renders
    """

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        rng: Optional[random.Random] = None,
    ):
        self.settings = settings if settings is not None else GameSettings()
        if rng is None:
            rng = random.Random(self.settings.seed)

        self.store = EntityStore(self.settings)
        self.spawner = Spawner(self.settings, rng)

        # Game state
        self.status = GameStatus.START
        self.score: int = 0
        self.level: int = 1
        self.last_timestamp: float = 0.0

        # Events raised between ticks (input) are delivered with the next tick
        self._events: List[GameEvent] = []

    # =========================================================================
    # LIFECYCLE COMMANDS
    # =========================================================================

    def start(self) -> None:
        """Leave the title screen and begin playing."""
        if self.status != GameStatus.START:
            logger.debug(f"Ignoring start() while {self.status.name}")
            return

        self._reset_state()
        self._set_status(GameStatus.PLAYING)
        logger.info("Game started")

    def restart(self) -> None:
        """
        Reset store, score and level, then play again.
        Has no effect on the title screen; use start() there.
        """
        if self.status == GameStatus.START:
            logger.debug("Ignoring restart() on the title screen")
            return

        self._reset_state()
        self._set_status(GameStatus.PLAYING)
        logger.info("Game restarted")

    def _reset_state(self) -> None:
        self.score = 0
        self.level = 1
        self.store.reset(self.settings)
        self.spawner.reset(self.last_timestamp)

    def _set_status(self, new_status: GameStatus) -> None:
        if new_status == self.status:
            return
        old_status = self.status
        self.status = new_status
        self._events.append(PhaseChangedEvent(old_status, new_status))

    # =========================================================================
    # PLAYER COMMANDS
    # =========================================================================

    def fire_at(self, x: float, y: float) -> bool:
        """
        Fire at a playfield point from the nearest turret that can shoot.
        Returns True if an interceptor was launched.
        """
        if self.status != GameStatus.PLAYING:
            return False

        launch = fire_interceptor(Point(x, y), self.store, self.settings.interceptor_speed)
        if launch is None:
            logger.debug(f"No turret can fire at ({x:.0f}, {y:.0f})")
            return False

        turret, interceptor = launch
        self._events.append(InterceptorLaunchedEvent(interceptor.id, turret.id))
        return True

    def fire_at_pointer(self, device_x: float, device_y: float, display_rect: DisplayRect) -> bool:
        """Fire at a pointer position given in device pixels of the displayed playfield."""
        point = to_playfield(
            device_x, device_y, display_rect,
            (self.settings.playfield_width, self.settings.playfield_height),
        )
        return self.fire_at(point.x, point.y)

    # =========================================================================
    # UPDATE LOOP
    # =========================================================================

    def advance(self, timestamp: float) -> List[GameEvent]:
        """
        Run one simulation tick at `timestamp` (milliseconds, monotonic).
        Returns list of events that occurred since the previous tick.
        """
        self.last_timestamp = timestamp

        if self.status == GameStatus.PLAYING:
            self._update_playing(timestamp)
        # START, WON and LOST don't update

        events = self._events
        self._events = []
        return events

    def _update_playing(self, timestamp: float) -> None:
        """One tick, in order: spawn, rockets, interceptors, explosions, level."""
        # Level-up looks at the score as it stood before this tick's kills
        score_at_tick_start = self.score

        self._spawn(timestamp)

        self._update_rockets()
        if self.status != GameStatus.PLAYING:
            return

        self._update_interceptors()
        self._update_explosions()
        if self.status != GameStatus.PLAYING:
            return

        self._check_level_up(score_at_tick_start)

    def _spawn(self, timestamp: float) -> None:
        rocket = self.spawner.update(timestamp, self.store, self.level)
        if rocket is not None:
            self._events.append(RocketSpawnedEvent(rocket.id, rocket.target))
            logger.debug(f"Rocket {rocket.id} spawned toward {rocket.target.kind.name} {rocket.target.id}")

    def _update_rockets(self) -> None:
        for rocket in self.store.iter_rockets():
            rocket.update()
            if not rocket.has_landed:
                continue

            structure = self.store.get_structure(rocket.target)
            destroyed = structure is not None and structure.active
            if destroyed:
                structure.destroy()
                logger.debug(f"Rocket {rocket.id} destroyed {rocket.target.kind.name} {rocket.target.id}")
            self._events.append(ImpactEvent(rocket.id, rocket.target, destroyed))
            self.store.remove_rocket(rocket.id)

        if self.store.all_turrets_inactive():
            self._set_status(GameStatus.LOST)
            logger.info(f"All turrets lost at score {self.score}")

    def _update_interceptors(self) -> None:
        for interceptor in self.store.iter_interceptors():
            interceptor.update()
            if not interceptor.has_arrived:
                continue

            explosion = self.store.add_explosion(
                interceptor.target_x,
                interceptor.target_y,
                max_radius=self.settings.explosion_max_radius,
                expansion_rate=self.settings.explosion_expansion_rate,
                contraction_rate=self.settings.explosion_contraction_rate,
                fade_rate=self.settings.explosion_fade_rate,
            )
            self._events.append(DetonationEvent(
                interceptor.id, explosion.id, explosion.x, explosion.y
            ))
            self.store.remove_interceptor(interceptor.id)

    def _update_explosions(self) -> None:
        for explosion in self.store.iter_explosions():
            explosion.update()

            # Collision: this explosion vs every rocket still alive
            for rocket in self.store.iter_rockets():
                if not explosion.contains(rocket.x, rocket.y):
                    continue

                self.store.remove_rocket(rocket.id)
                self.score += self.settings.kill_reward
                self._events.append(RocketDestroyedEvent(
                    rocket.id, explosion.id, self.settings.kill_reward, self.score
                ))
                logger.debug(f"Rocket {rocket.id} destroyed by explosion {explosion.id}, score {self.score}")

                if self.status == GameStatus.PLAYING and self.score >= self.settings.target_score:
                    self._set_status(GameStatus.WON)
                    logger.info(f"Target score reached: {self.score}")

            if explosion.is_spent:
                self.store.remove_explosion(explosion.id)

    def _check_level_up(self, score: int) -> None:
        if not should_level_up(self.level, score, self.settings):
            return

        self.level += 1
        for turret in self.store.turrets.values():
            turret.refill()
        self._events.append(LevelUpEvent(self.level))
        logger.info(f"Level up: {self.level}")

    # =========================================================================
    # STATE QUERIES (for UI to read)
    # =========================================================================

    def snapshot(self) -> GameSnapshot:
        """Read-only copy of everything the renderer draws."""
        return GameSnapshot(
            status=self.status,
            score=self.score,
            level=self.level,
            target_score=self.settings.target_score,
            max_level=self.settings.max_level,
            playfield_width=self.settings.playfield_width,
            playfield_height=self.settings.playfield_height,
            rockets=tuple(r.copy() for r in self.store.rockets.values()),
            interceptors=tuple(i.copy() for i in self.store.interceptors.values()),
            explosions=tuple(e.copy() for e in self.store.explosions.values()),
            cities=tuple(c.copy() for c in self.store.cities.values()),
            turrets=tuple(t.copy() for t in self.store.turrets.values()),
        )

    # =========================================================================
    # CONVENIENCE METHODS FOR TESTING
    # =========================================================================

    def simulate(self, ticks: int, frame_ms: float = 1000.0 / 60) -> List[GameEvent]:
        """
        Run up to `ticks` ticks on a synthetic clock while PLAYING.
        Returns all events that occurred.
        """
        all_events: List[GameEvent] = []
        timestamp = self.last_timestamp
        for _ in range(ticks):
            if self.status != GameStatus.PLAYING:
                break
            timestamp += frame_ms
            all_events.extend(self.advance(timestamp))
        return all_events
