"""
Input Handler - Translates pygame events to gameplay commands.
This is a THIN ADAPTER - no game logic here.
"""
import pygame

from starry_defense.gameplay.game import Game, GameStatus
from starry_defense.ui.renderer import Renderer


class InputHandler:
    """
    Handles pointer and keyboard input and translates to game commands.

    The input handler:
    - Reads pygame events
    - Updates renderer state (language)
    - Calls game methods to modify game state
    """

    def __init__(self, game: Game, renderer: Renderer):
        self.game = game
        self.renderer = renderer

    def handle_events(self) -> bool:
        """
        Drain the pygame event queue.
        Returns True if the game should quit.
        """
        should_quit = False
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                should_quit = True
            elif event.type == pygame.KEYDOWN:
                should_quit = self.handle_key(event.key) or should_quit
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                # SDL mirrors each tap as a mouse press; FINGERDOWN already fired it
                if not getattr(event, "touch", False):
                    self.handle_click(*event.pos)
            elif event.type == pygame.FINGERDOWN:
                self.handle_tap(event.x, event.y)
        return should_quit

    def handle_key(self, key: int) -> bool:
        """
        Handle a single key press.
        Returns True if the game should quit.
        """
        # Quit
        if key == pygame.K_ESCAPE:
            return True

        if key == pygame.K_l:
            self.renderer.toggle_language()

        # Phase-specific handling
        elif key in (pygame.K_SPACE, pygame.K_RETURN):
            if self.game.status == GameStatus.START:
                self.game.start()
            elif self.game.status in (GameStatus.WON, GameStatus.LOST):
                self.game.restart()

        elif key == pygame.K_r:
            self.game.restart()

        return False

    def handle_click(self, x: int, y: int) -> None:
        """Fire at a mouse position given in window pixels."""
        self.game.fire_at_pointer(x, y, self.renderer.display_rect)

    def handle_tap(self, norm_x: float, norm_y: float) -> None:
        """Fire at a touch position given as 0..1 fractions of the window."""
        window_w, window_h = self.renderer.screen.get_size()
        self.game.fire_at_pointer(norm_x * window_w, norm_y * window_h, self.renderer.display_rect)
