"""
Renderer - Reads a game snapshot and draws it with pygame.
This is a THIN ADAPTER - no game logic here.
"""
from typing import Optional, Tuple

import pygame

from starry_defense.gameplay.constants import GROUND_Y
from starry_defense.gameplay.game import Game, GameStatus
from starry_defense.gameplay.snapshot import GameSnapshot
from starry_defense.gameplay.targeting import DisplayRect


# Colors
COLOR_BACKGROUND = (10, 10, 10)
COLOR_GROUND = (26, 26, 26)
COLOR_CITY = (59, 130, 246)
COLOR_CITY_ROOF = (96, 165, 250)
COLOR_CITY_RUIN = (69, 26, 3)
COLOR_TURRET = (16, 185, 129)
COLOR_TURRET_DOWN = (239, 68, 68)
COLOR_ROCKET_TRAIL = (239, 68, 68)
COLOR_ROCKET_HEAD = (248, 113, 113)
COLOR_INTERCEPTOR = (255, 255, 255)
COLOR_EXPLOSION_CORE = (255, 255, 255)
COLOR_EXPLOSION_MID = (251, 191, 36)
COLOR_EXPLOSION_EDGE = (239, 68, 68)
COLOR_HUD = (200, 200, 200)
COLOR_HUD_DIM = (90, 90, 90)
COLOR_ACCENT = (16, 185, 129)
COLOR_OVERLAY_WON = (16, 185, 129)
COLOR_OVERLAY_LOST = (239, 68, 68)

# HUD strings
STRINGS = {
    'zh': {
        'title': "LIAOZHIH星空防御",
        'start': "按空格开始游戏",
        'win': "胜利！",
        'lose': "城市陷落",
        'restart': "按空格再玩一次",
        'score': "得分",
        'level': "关卡",
        'ammo': "弹药",
        'cities': "城市",
        'mission': "目标：{target}分",
        'instructions': "点击屏幕发射拦截导弹。保护城市和炮台！",
    },
    'en': {
        'title': "LIAOZHIH Starry Defense",
        'start': "Press Space to Start",
        'win': "Victory!",
        'lose': "Cities Fallen",
        'restart': "Press Space to Play Again",
        'score': "Score",
        'level': "Level",
        'ammo': "Ammo",
        'cities': "Cities",
        'mission': "Goal: {target} Pts",
        'instructions': "Click to fire interceptors. Protect cities and turrets!",
    },
}

LANGUAGES = ('zh', 'en')

# First installed font wins; the CJK faces cover the Chinese strings
FONT_NAMES = "notosanscjksc,notosanscjk,wenquanyimicrohei,microsoftyahei,simhei,pingfangsc,arial"


class Renderer:
    """
    Renders game snapshots to a pygame window.

    Everything is drawn on a logical playfield surface which is then scaled
    to fit the window, keeping aspect ratio. display_rect says where the
    playfield ended up so pointer positions can be mapped back.

    This class reads from Game but never modifies it.
    """

    def __init__(self, game: Game, language: str = 'zh'):
        self.game = game
        self.language = language

        # Created in init_window()
        self.screen: Optional[pygame.Surface] = None
        self.playfield: Optional[pygame.Surface] = None
        self.font: Optional[pygame.font.Font] = None
        self.big_font: Optional[pygame.font.Font] = None

        self.display_rect: DisplayRect = (
            0.0, 0.0, game.settings.playfield_width, game.settings.playfield_height
        )

    def init_window(self, title: str = "Starry Defense") -> None:
        """Create the window, playfield surface and fonts."""
        width = int(self.game.settings.playfield_width)
        height = int(self.game.settings.playfield_height)

        self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        pygame.display.set_caption(title)
        self.playfield = pygame.Surface((width, height))
        self.font = pygame.font.SysFont(FONT_NAMES, 20)
        self.big_font = pygame.font.SysFont(FONT_NAMES, 56, bold=True)

    @property
    def strings(self) -> dict:
        return STRINGS[self.language]

    def toggle_language(self) -> None:
        index = LANGUAGES.index(self.language)
        self.language = LANGUAGES[(index + 1) % len(LANGUAGES)]

    def render(self) -> None:
        """Render entire game state."""
        snapshot = self.game.snapshot()
        surface = self.playfield

        surface.fill(COLOR_BACKGROUND)
        pygame.draw.rect(
            surface, COLOR_GROUND,
            (0, GROUND_Y, snapshot.playfield_width, snapshot.playfield_height - GROUND_Y)
        )

        self.render_cities(surface, snapshot)
        self.render_turrets(surface, snapshot)
        self.render_rockets(surface, snapshot)
        self.render_interceptors(surface, snapshot)
        self.render_explosions(surface, snapshot)
        self.render_hud(surface, snapshot)
        self.render_overlay(surface, snapshot)

        self._present()

    def render_cities(self, surface: pygame.Surface, snapshot: GameSnapshot) -> None:
        for city in snapshot.cities:
            x, y = int(city.x), int(city.y)
            if city.active:
                pygame.draw.rect(surface, COLOR_CITY, (x - 15, y - 10, 30, 20))
                pygame.draw.rect(surface, COLOR_CITY_ROOF, (x - 10, y - 15, 10, 10))
                pygame.draw.rect(surface, COLOR_CITY_ROOF, (x + 2, y - 12, 8, 8))
            else:
                pygame.draw.circle(surface, COLOR_CITY_RUIN, (x, y), 10)

    def render_turrets(self, surface: pygame.Surface, snapshot: GameSnapshot) -> None:
        for turret in snapshot.turrets:
            x, y = int(turret.x), int(turret.y)
            if turret.active:
                pygame.draw.polygon(
                    surface, COLOR_TURRET,
                    [(x - 20, y + 20), (x + 20, y + 20), (x, y - 10)]
                )
                # Ammo indicator
                self._blit_centered(surface, str(turret.ammo), (x, y + 35), COLOR_HUD)
            else:
                pygame.draw.line(surface, COLOR_TURRET_DOWN, (x - 15, y + 15), (x + 15, y - 15))
                pygame.draw.line(surface, COLOR_TURRET_DOWN, (x + 15, y + 15), (x - 15, y - 15))

    def render_rockets(self, surface: pygame.Surface, snapshot: GameSnapshot) -> None:
        for rocket in snapshot.rockets:
            # Short trail pointing back along the flight path
            tail = (
                rocket.x - (rocket.target_x - rocket.x) * 0.1,
                rocket.y - (rocket.target_y - rocket.y) * 0.1,
            )
            pygame.draw.line(surface, COLOR_ROCKET_TRAIL, tail, (rocket.x, rocket.y))
            pygame.draw.circle(surface, COLOR_ROCKET_HEAD, (int(rocket.x), int(rocket.y)), 2)

    def render_interceptors(self, surface: pygame.Surface, snapshot: GameSnapshot) -> None:
        for interceptor in snapshot.interceptors:
            pygame.draw.line(
                surface, COLOR_INTERCEPTOR,
                (interceptor.start_x, interceptor.start_y), (interceptor.x, interceptor.y)
            )
            # Aim marker
            tx, ty = interceptor.target_x, interceptor.target_y
            pygame.draw.line(surface, COLOR_INTERCEPTOR, (tx - 5, ty - 5), (tx + 5, ty + 5))
            pygame.draw.line(surface, COLOR_INTERCEPTOR, (tx + 5, ty - 5), (tx - 5, ty + 5))

    def render_explosions(self, surface: pygame.Surface, snapshot: GameSnapshot) -> None:
        for explosion in snapshot.explosions:
            if explosion.radius <= 0:
                continue
            alpha = int(255 * max(0.0, min(1.0, explosion.life)))
            size = int(explosion.radius * 2) + 2
            center = size // 2
            blast = pygame.Surface((size, size), pygame.SRCALPHA)

            # Rings from the edge inward approximate a radial gradient
            pygame.draw.circle(blast, (*COLOR_EXPLOSION_EDGE, alpha // 3), (center, center), int(explosion.radius))
            pygame.draw.circle(blast, (*COLOR_EXPLOSION_MID, alpha), (center, center), int(explosion.radius * 0.7))
            pygame.draw.circle(blast, (*COLOR_EXPLOSION_CORE, alpha), (center, center), int(explosion.radius * 0.3))

            surface.blit(blast, (explosion.x - center, explosion.y - center))

    def render_hud(self, surface: pygame.Surface, snapshot: GameSnapshot) -> None:
        """Render HUD overlay."""
        s = self.strings

        self._blit(surface, s['title'], (12, 10), COLOR_ACCENT)
        self._blit(surface, s['mission'].format(target=snapshot.target_score), (12, 30), COLOR_HUD_DIM)
        self._blit(surface, f"{s['score']} {snapshot.score:04d}", (snapshot.playfield_width - 140, 10), COLOR_ACCENT)

        # Level pips
        self._blit(surface, s['level'], (12, 52), COLOR_HUD_DIM)
        for i in range(1, snapshot.max_level + 1):
            color = COLOR_ACCENT if i <= snapshot.level else COLOR_HUD_DIM
            pygame.draw.rect(surface, color, (70 + (i - 1) * 8, 52, 4, 14))

        # City status squares
        self._blit(surface, s['cities'], (12, 72), COLOR_HUD_DIM)
        for i, city in enumerate(snapshot.cities):
            color = COLOR_CITY if city.active else COLOR_CITY_RUIN
            pygame.draw.rect(surface, color, (70 + i * 12, 74, 9, 9))
        self._blit(
            surface, f"{snapshot.active_city_count}/{len(snapshot.cities)}",
            (76 + len(snapshot.cities) * 12, 70), COLOR_HUD_DIM,
        )

        self._blit(surface, f"{s['ammo']} {snapshot.total_ammo}", (12, 92), COLOR_HUD_DIM)

    def render_overlay(self, surface: pygame.Surface, snapshot: GameSnapshot) -> None:
        """Render the START / WON / LOST screens."""
        s = self.strings
        status = snapshot.status
        if status == GameStatus.PLAYING:
            return

        shade = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 200))
        surface.blit(shade, (0, 0))

        middle = (int(snapshot.playfield_width // 2), int(snapshot.playfield_height // 2))
        if status == GameStatus.START:
            self._blit_centered(surface, s['title'], (middle[0], middle[1] - 60), COLOR_ACCENT, big=True)
            self._blit_centered(surface, s['instructions'], (middle[0], middle[1]), COLOR_HUD)
            self._blit_centered(surface, s['start'], (middle[0], middle[1] + 40), COLOR_ACCENT)
            return

        won = status == GameStatus.WON
        color = COLOR_OVERLAY_WON if won else COLOR_OVERLAY_LOST
        self._blit_centered(surface, s['win'] if won else s['lose'], (middle[0], middle[1] - 40), color, big=True)
        self._blit_centered(surface, f"{s['score']}: {snapshot.score}", (middle[0], middle[1] + 10), color)
        self._blit_centered(surface, s['restart'], (middle[0], middle[1] + 50), COLOR_HUD)

    def _present(self) -> None:
        """Scale the playfield into the window, letterboxed, and flip."""
        window_w, window_h = self.screen.get_size()
        field_w, field_h = self.playfield.get_size()
        scale = min(window_w / field_w, window_h / field_h)
        scaled_w, scaled_h = max(1, int(field_w * scale)), max(1, int(field_h * scale))
        left = (window_w - scaled_w) // 2
        top = (window_h - scaled_h) // 2

        self.screen.fill((0, 0, 0))
        self.screen.blit(pygame.transform.smoothscale(self.playfield, (scaled_w, scaled_h)), (left, top))
        pygame.display.flip()

        self.display_rect = (float(left), float(top), float(scaled_w), float(scaled_h))

    def _blit(self, surface: pygame.Surface, text: str, pos: Tuple[float, float], color) -> None:
        surface.blit(self.font.render(text, True, color), pos)

    def _blit_centered(self, surface: pygame.Surface, text: str, center: Tuple[int, int], color, big: bool = False) -> None:
        font = self.big_font if big else self.font
        image = font.render(text, True, color)
        surface.blit(image, image.get_rect(center=center))
