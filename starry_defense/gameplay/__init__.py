"""
Gameplay core for Starry Defense.
NO UI DEPENDENCIES.
"""

from starry_defense.gameplay.config import GameSettings, get_settings
from starry_defense.gameplay.game import Game, GameStatus
from starry_defense.gameplay.loop import FrameLoop
from starry_defense.gameplay.snapshot import GameSnapshot

__all__ = ["Game", "GameStatus", "GameSettings", "GameSnapshot", "FrameLoop", "get_settings"]
