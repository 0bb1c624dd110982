"""
Tests for the pygame input adapter.
Runs headless on SDL's dummy video driver.
"""
import os
import random

import pygame
import pytest

from starry_defense.gameplay.config import GameSettings
from starry_defense.gameplay.game import Game
from starry_defense.ui.input_handler import InputHandler
from starry_defense.ui.renderer import Renderer


@pytest.fixture
def handler(quiet_settings: GameSettings, monkeypatch) -> InputHandler:
    """Input handler over a started game in an 800x600 dummy window."""
    monkeypatch.setitem(os.environ, "SDL_VIDEODRIVER", "dummy")
    pygame.init()

    game = Game(quiet_settings, rng=random.Random(1))
    game.start()
    renderer = Renderer(game, language="en")
    renderer.init_window()
    pygame.event.clear()

    yield InputHandler(game, renderer)
    pygame.quit()


def post_tap(norm_x: float, norm_y: float, window_x: int, window_y: int) -> None:
    """Queue the event pair SDL emits for one finger tap."""
    pygame.event.post(pygame.event.Event(
        pygame.FINGERDOWN, touch_id=0, finger_id=0,
        x=norm_x, y=norm_y, dx=0.0, dy=0.0, pressure=1.0,
    ))
    pygame.event.post(pygame.event.Event(
        pygame.MOUSEBUTTONDOWN, pos=(window_x, window_y), button=1, touch=True,
    ))


class TestPointerInput:
    """Tests for clicks and taps turning into shots."""

    def test_tap_fires_once(self, handler: InputHandler):
        """One tap is one interceptor and one round, even with the mirrored mouse press."""
        post_tap(0.25, 0.5, 200, 300)

        handler.handle_events()

        store = handler.game.store
        assert len(store.interceptors) == 1
        assert store.turrets[1].ammo == 19
        interceptor = next(iter(store.interceptors.values()))
        assert interceptor.target_x == pytest.approx(200.0)
        assert interceptor.target_y == pytest.approx(300.0)

    def test_mouse_click_fires(self, handler: InputHandler):
        """A real mouse click still fires."""
        pygame.event.post(pygame.event.Event(
            pygame.MOUSEBUTTONDOWN, pos=(200, 300), button=1, touch=False,
        ))

        handler.handle_events()

        assert len(handler.game.store.interceptors) == 1
        assert handler.game.store.turrets[1].ammo == 19

    def test_right_click_ignored(self, handler: InputHandler):
        pygame.event.post(pygame.event.Event(
            pygame.MOUSEBUTTONDOWN, pos=(200, 300), button=3, touch=False,
        ))

        handler.handle_events()

        assert not handler.game.store.interceptors


class TestKeys:
    """Tests for keyboard commands."""

    def test_escape_quits(self, handler: InputHandler):
        assert handler.handle_key(pygame.K_ESCAPE)

    def test_language_toggle(self, handler: InputHandler):
        handler.handle_key(pygame.K_l)
        assert handler.renderer.language == "zh"


class TestRenderer:
    """Smoke tests for drawing a frame headless."""

    def test_render_with_ruined_city(self, handler: InputHandler):
        """A frame with a destroyed city draws and keeps the full-window display rect."""
        game = handler.game
        game.store.cities[2].destroy()
        game.fire_at(300.0, 200.0)
        game.advance(16.0)

        handler.renderer.render()

        assert handler.renderer.display_rect == (0.0, 0.0, 800.0, 600.0)
