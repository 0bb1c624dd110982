"""
Pytest fixtures for Starry Defense tests.
"""
import random

import pytest

from starry_defense.gameplay.config import GameSettings
from starry_defense.gameplay.game import Game


# Long enough that no rocket ever spawns on its own during a test
NEVER = 1e12


@pytest.fixture
def settings() -> GameSettings:
    """Default settings."""
    return GameSettings()


@pytest.fixture
def quiet_settings() -> GameSettings:
    """Default layout with spawning switched off, so tests place rockets by hand."""
    return GameSettings(base_spawn_interval=NEVER, min_spawn_interval=NEVER)


@pytest.fixture
def game(quiet_settings: GameSettings) -> Game:
    """A started game with no automatic spawning."""
    game = Game(quiet_settings, rng=random.Random(1))
    game.start()
    return game
