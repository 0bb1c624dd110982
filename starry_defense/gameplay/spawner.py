"""
Rocket spawner - decides when and where new rockets appear.
NO UI DEPENDENCIES.
"""
import random
from typing import Optional, TYPE_CHECKING

from .entities import Rocket
from .levels import spawn_interval, rocket_speed

if TYPE_CHECKING:
    from .config import GameSettings
    from .store import EntityStore


class Spawner:
    """
    Time-gated rocket factory.

    A rocket appears when more than spawn_interval(level) milliseconds have
    passed since the last one, aimed at a uniformly random live structure
    and starting at a random x on the top edge.

    The random source is injected so seeded games replay exactly.
    """

    def __init__(self, settings: 'GameSettings', rng: Optional[random.Random] = None):
        self.settings = settings
        self.rng = rng if rng is not None else random.Random()
        self.last_spawn_time: float = 0.0

    def reset(self, now: float = 0.0) -> None:
        """Re-arm the gate so the next rocket is one full interval after `now`."""
        self.last_spawn_time = now

    def is_due(self, now: float, level: int) -> bool:
        return now - self.last_spawn_time > spawn_interval(level, self.settings)

    def update(self, now: float, store: 'EntityStore', level: int) -> Optional[Rocket]:
        """
        Spawn a rocket if one is due.
        Returns the new rocket, or None if not due or nothing is left to hit.
        """
        if not self.is_due(now, level):
            return None

        targets = store.live_targets()
        if not targets:
            # Happens legitimately in the final ticks of a lost game
            return None

        ref, structure = targets[self.rng.randrange(len(targets))]
        start_x = self.rng.random() * self.settings.playfield_width

        rocket = store.add_rocket(
            x=start_x,
            y=0.0,
            target=ref,
            target_x=structure.x,
            target_y=structure.y,
            speed=rocket_speed(level, self.settings),
        )
        self.last_spawn_time = now
        return rocket
