import math
import os

import numpy as np
import pygame
import pygame.gfxdraw

from sky_climber import config
from sky_climber.entities import ItemKind, ObstacleKind
from sky_climber.session import GameState

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")


def _rotate(points, angle, cx, cy):
    c, s = math.cos(angle), math.sin(angle)
    return [(cx + px * c - py * s, cy + px * s + py * c) for px, py in points]


class Renderer:
    """
    Draws a session onto a pygame Surface.

    `draw` only reads the session; blinking and the damage flash are decided
    from the `now` timestamp so the same inputs always give the same frame.
    """

    # --- Colors ---
    COLOR_WALL_LIGHT = (225, 232, 240)
    COLOR_WALL_DARK = (17, 17, 17)
    COLOR_WINDOW_LIGHT = (100, 180, 255, 153)
    COLOR_SILL_LIGHT = (255, 255, 255, 77)
    COLOR_WINDOW_DARK = (0, 0, 0, 153)
    COLOR_SILL_DARK = (255, 255, 255, 13)
    COLOR_PLAYER = (0, 255, 136)
    COLOR_DEBRIS = (136, 136, 136)
    COLOR_GLASS = (200, 240, 255, 153)
    COLOR_GLASS_OUTLINE = (255, 255, 255)
    COLOR_POT = (210, 105, 30)
    COLOR_LEAVES = (34, 139, 34)
    COLOR_HEART = (255, 51, 102)
    COLOR_COIN = (255, 215, 0)
    COLOR_SPEED = (199, 21, 133)
    COLOR_WARP = (75, 0, 130)
    COLOR_WHITE = (255, 255, 255)
    COLOR_FLASH = (255, 0, 0, 90)
    COLOR_OVERLAY = (0, 0, 0, 170)
    COLOR_TEXT_LIGHT = (30, 30, 40)
    COLOR_TEXT_DARK = (235, 235, 235)
    COLOR_MUTED = (136, 136, 136)

    def __init__(self, cfg=None):
        self.cfg = cfg or config.GameConfig()
        pygame.init()
        pygame.font.init()
        self.screen = pygame.Surface((self.cfg.width, self.cfg.height))
        self.font_small = pygame.font.Font(None, 24)
        self.font_item = pygame.font.Font(None, 22)
        self.font_main = pygame.font.Font(None, 36)
        self.font_large = pygame.font.Font(None, 56)

    def draw(self, session, now):
        dark = session.theme == config.THEME_DARK
        self.screen.fill(self.COLOR_WALL_DARK if dark else self.COLOR_WALL_LIGHT)
        self._render_background(session.windows, dark)
        self._render_player(session.player, now)
        for obs in session.obstacles:
            self._render_obstacle(obs, dark)
        for item in session.items:
            self._render_item(item)
        if now < session.flash_until:
            pygame.gfxdraw.box(self.screen, self.screen.get_rect(), self.COLOR_FLASH)
        self._render_ui(session, dark)
        return self.screen

    def to_array(self):
        arr = pygame.surfarray.array3d(self.screen)
        return np.transpose(arr, (1, 0, 2)).astype(np.uint8)

    def _render_background(self, windows, dark):
        w = self.cfg.width
        gap = (w - config.WINDOW_WIDTH * config.WINDOW_COLUMNS) / (config.WINDOW_COLUMNS + 1)
        glass = self.COLOR_WINDOW_DARK if dark else self.COLOR_WINDOW_LIGHT
        sill = self.COLOR_SILL_DARK if dark else self.COLOR_SILL_LIGHT
        for row in windows:
            y = int(row.y)
            for c in range(config.WINDOW_COLUMNS):
                wx = int(gap + c * (config.WINDOW_WIDTH + gap))
                pygame.gfxdraw.box(self.screen, (wx, y, config.WINDOW_WIDTH, config.WINDOW_HEIGHT), glass)
                sill_y = y + config.WINDOW_HEIGHT - config.SILL_HEIGHT
                pygame.gfxdraw.box(self.screen, (wx, sill_y, config.WINDOW_WIDTH, config.SILL_HEIGHT), sill)

    def _render_player(self, player, now):
        # Blink while invulnerable.
        if player.is_invulnerable(now) and (int(now) // 100) % 2 == 0:
            return

        x, y, w, h = player.x, player.y, player.width, player.height
        cx = x + w / 2
        color = self.COLOR_PLAYER

        pygame.gfxdraw.filled_circle(self.screen, int(cx), int(y + 10), 8, color)
        pygame.gfxdraw.aacircle(self.screen, int(cx), int(y + 10), 8, color)
        pygame.draw.rect(self.screen, color, (int(cx - 4), int(y + 15), 8, 20))

        swing = math.sin(player.anim_frame) * 10
        limbs = [
            ((cx - 4, y + 20), (x, y + 5 + swing)),
            ((cx + 4, y + 20), (x + w, y + 5 - swing)),
            ((cx - 2, y + 35), (x, y + h - 5 - swing)),
            ((cx + 2, y + 35), (x + w, y + h - 5 + swing)),
        ]
        for start, end in limbs:
            pygame.draw.line(self.screen, color, start, end, 4)

    def _render_obstacle(self, obs, dark):
        cx = obs.x + obs.width / 2
        cy = obs.y + obs.height / 2
        w, h = obs.width, obs.height

        debris = [(-w / 2, -h / 2), (w / 2, -h / 3), (w / 3, h / 2), (-w / 2, h / 3)]
        shard = [(0, -h / 2), (w / 2, h / 2), (-w / 2, 0)]

        if not dark and obs.theme_color:
            color = pygame.Color(obs.theme_color)
            if obs.kind is ObstacleKind.DEBRIS:
                shape = debris
            elif obs.kind is ObstacleKind.GLASS:
                shape = shard
            else:
                shape = [(-w / 2, -h / 2), (w / 2, -h / 2), (w / 2, h / 2), (-w / 2, h / 2)]
            self._polygon(_rotate(shape, obs.rotation, cx, cy), color)
            return

        if obs.kind is ObstacleKind.DEBRIS:
            self._polygon(_rotate(debris, obs.rotation, cx, cy), self.COLOR_DEBRIS)
        elif obs.kind is ObstacleKind.GLASS:
            points = _rotate(shard, obs.rotation, cx, cy)
            self._polygon(points, self.COLOR_GLASS)
            pygame.draw.polygon(self.screen, self.COLOR_GLASS_OUTLINE, points, 1)
        elif obs.kind is ObstacleKind.POT:
            box = [(-w / 3, -h / 3), (w * 0.6 - w / 3, -h / 3), (w * 0.6 - w / 3, h * 0.6 - h / 3), (-w / 3, h * 0.6 - h / 3)]
            self._polygon(_rotate(box, obs.rotation, cx, cy), self.COLOR_POT)
            r = w / 3
            dome = [(r * math.cos(t), -h / 3 - r * math.sin(t)) for t in np.linspace(0, math.pi, 12)]
            self._polygon(_rotate(dome, obs.rotation, cx, cy), self.COLOR_LEAVES)
        else:
            raise ValueError(f"unhandled obstacle kind: {obs.kind!r}")

    def _render_item(self, item):
        x, y = int(item.x), int(item.y)
        if item.kind is ItemKind.HEART:
            self._heart(x + 15, y + 15, 14, self.COLOR_HEART)
        elif item.kind is ItemKind.SCORE:
            self._coin(x, y, self.COLOR_COIN, "$")
        elif item.kind is ItemKind.SPEED:
            self._coin(x, y, self.COLOR_SPEED, "UP")
        elif item.kind is ItemKind.WARP:
            diamond = [(x + 15, y), (x + 30, y + 15), (x + 15, y + 30), (x, y + 15)]
            self._polygon(diamond, self.COLOR_WARP)
            self._blit_centered(self.font_item.render("!?", True, self.COLOR_WHITE), (x + 15, y + 15))
        else:
            raise ValueError(f"unhandled item kind: {item.kind!r}")

    def _coin(self, x, y, color, label):
        # Glow
        pygame.gfxdraw.filled_circle(self.screen, x + 15, y + 15, 15, (*color, 60))
        pygame.gfxdraw.filled_circle(self.screen, x + 15, y + 15, 12, color)
        pygame.gfxdraw.aacircle(self.screen, x + 15, y + 15, 12, color)
        self._blit_centered(self.font_item.render(label, True, self.COLOR_WHITE), (x + 15, y + 15))

    def _heart(self, cx, cy, size, color):
        r = max(2, size // 2)
        pygame.gfxdraw.filled_circle(self.screen, cx - r // 2 - 1, cy - r // 3, r // 2 + 2, color)
        pygame.gfxdraw.filled_circle(self.screen, cx + r // 2 + 1, cy - r // 3, r // 2 + 2, color)
        self._polygon([(cx - r - 2, cy - r // 4), (cx + r + 2, cy - r // 4), (cx, cy + r)], color)

    def _polygon(self, points, color):
        pts = [(int(px), int(py)) for px, py in points]
        pygame.gfxdraw.filled_polygon(self.screen, pts, color)
        pygame.gfxdraw.aapolygon(self.screen, pts, color)

    def _blit_centered(self, surf, center):
        self.screen.blit(surf, surf.get_rect(center=(int(center[0]), int(center[1]))))

    def _render_ui(self, session, dark):
        text_color = self.COLOR_TEXT_DARK if dark else self.COLOR_TEXT_LIGHT
        w, h = self.cfg.width, self.cfg.height

        if session.state in (GameState.PLAYING, GameState.GAMEOVER, GameState.GAMECLEAR):
            if session.mode == config.MODE_MISSION:
                label = f"{session.display_distance}m / {config.GOAL_DISTANCE}m"
            else:
                label = f"SCORE: {session.challenge_score}"
            self.screen.blit(self.font_main.render(label, True, text_color), (10, 10))

            speed_text = self.font_small.render(f"SPEED: {session.display_speed}", True, text_color)
            self.screen.blit(speed_text, (w - speed_text.get_width() - 10, 14))

            for i in range(session.player.lives):
                self._heart(20 + i * 26, 56, 16, self.COLOR_HEART)

        if session.state is GameState.PLAYING:
            return

        pygame.gfxdraw.box(self.screen, self.screen.get_rect(), self.COLOR_OVERLAY)
        if session.state is GameState.START:
            lines = [
                (self.font_large, "SKY CLIMBER", self.COLOR_PLAYER),
                (self.font_small, "M: Mission   C: Challenge", self.COLOR_TEXT_DARK),
                (self.font_small, "R: Ranking   T: Theme", self.COLOR_TEXT_DARK),
            ]
        elif session.state is GameState.GAMEOVER:
            if session.mode == config.MODE_MISSION:
                result = f"Distance: {session.display_distance}m"
            else:
                result = f"Score: {session.challenge_score}   Best: {session.best_challenge_score}"
            lines = [
                (self.font_large, "GAME OVER", self.COLOR_HEART),
                (self.font_small, result, self.COLOR_TEXT_DARK),
                (self.font_small, "SPACE to return", self.COLOR_MUTED),
            ]
        elif session.state is GameState.GAMECLEAR:
            lines = [
                (self.font_large, "MISSION CLEAR!", self.COLOR_COIN),
                (self.font_small, f"{config.GOAL_DISTANCE}m reached", self.COLOR_TEXT_DARK),
                (self.font_small, "SPACE to return", self.COLOR_MUTED),
            ]
        else:
            self._render_ranking(session)
            return

        y = h / 2 - 60
        for font, text, color in lines:
            self._blit_centered(font.render(text, True, color), (w / 2, y))
            y += font.get_linesize() + 12

    def _render_ranking(self, session):
        w = self.cfg.width
        tab = session.ranking_tab
        self._blit_centered(self.font_main.render(f"RANKING - {tab}", True, self.COLOR_COIN), (w / 2, 60))
        self._blit_centered(
            self.font_small.render("TAB: switch   ESC: back", True, self.COLOR_MUTED), (w / 2, 95)
        )

        ranking = session.leaderboard.get_ranking(tab)
        if not ranking:
            self._blit_centered(self.font_small.render("No Records Yet", True, self.COLOR_MUTED), (w / 2, 150))
            return

        y = 140
        for index, entry in enumerate(ranking):
            score = f"{entry.score}m" if tab == config.MODE_MISSION else str(entry.score)
            rank = self.font_small.render(str(index + 1), True, self.COLOR_COIN)
            name = self.font_small.render(entry.name[:16], True, self.COLOR_TEXT_DARK)
            value = self.font_small.render(score, True, self.COLOR_TEXT_DARK)
            self.screen.blit(rank, (40, y))
            self.screen.blit(name, (80, y))
            self.screen.blit(value, (w - value.get_width() - 40, y))
            y += 32
