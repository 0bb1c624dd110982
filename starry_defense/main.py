#!/usr/bin/env python3
"""
Starry Defense - Main Entry Point

Rockets fall toward your cities and turrets. Click to fire interceptors
from the nearest turret; their blasts destroy any rocket caught inside.
Reach the target score before every turret is lost.

Usage:
    python -m starry_defense.main

Controls:
    Mouse click / tap: Fire an interceptor at that point
    Space/Enter: Start game (title screen) or play again (after win/loss)
    R: Restart
    L: Toggle language (中文 / English)
    Escape: Quit
"""
import asyncio
import logging

import pygame

from starry_defense.gameplay.config import get_settings
from starry_defense.gameplay.game import Game
from starry_defense.gameplay.loop import FrameLoop
from starry_defense.ui.renderer import Renderer
from starry_defense.ui.input_handler import InputHandler

logger = logging.getLogger(__name__)


async def run() -> None:
    """Open the window and drive the game until the player quits."""
    settings = get_settings()
    game = Game(settings)

    # Create renderer and input handler
    renderer = Renderer(game, language=settings.language)
    renderer.init_window()
    input_handler = InputHandler(game, renderer)

    frame_loop: FrameLoop

    def on_frame(timestamp: float) -> None:
        """Input, then one simulation tick, then draw."""
        if input_handler.handle_events():
            frame_loop.request_stop()
            return

        game.advance(timestamp)
        renderer.render()

    frame_loop = FrameLoop(settings.frame_rate, on_frame)
    await frame_loop.start()
    try:
        await frame_loop.wait_closed()
    finally:
        await frame_loop.stop()


def main():
    """Main entry point."""
    settings = get_settings()

    # Configure logging
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info("Starry Defense - Starting...")

    pygame.init()
    try:
        asyncio.run(run())
    finally:
        pygame.quit()
        logger.info("Starry Defense - Stopped")


if __name__ == "__main__":
    main()
