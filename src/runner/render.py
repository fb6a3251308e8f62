# src/runner/render.py
from __future__ import annotations
from typing import Optional
import pygame
from .config import (
    WIDTH, HEIGHT, GROUND_Y,
    COLOR_BG, COLOR_GROUND, COLOR_FG, COLOR_PLAYER, COLOR_INVINCIBLE,
    COLOR_OBSTACLE, COLOR_SHADOW, COLOR_SCORE_BOOST, COLOR_DANGER,
)
from .entities import OVERHEAD, INVINCIBLE
from .game import GameView
from .state import GAME_OVER

GROUND_TILE = 40


def draw_frame(surf: pygame.Surface, view: GameView, font: Optional[pygame.font.Font] = None):
    """Draw one frame from a GameView. Text is skipped when no font is given."""
    surf.fill(COLOR_BG)

    # scrolling ground strip
    x = view.background_x
    while x < WIDTH + GROUND_TILE:
        pygame.draw.rect(surf, COLOR_GROUND, (int(x), GROUND_Y - 20, GROUND_TILE, 20))
        x += GROUND_TILE

    px, py, pw, ph = view.player
    color = COLOR_INVINCIBLE if view.player_color_state == "invincible" else COLOR_PLAYER
    pygame.draw.rect(surf, color, (int(px), int(py), int(pw), int(ph)))

    for (ox, oy, ow, oh), kind in view.obstacles:
        pygame.draw.rect(surf, COLOR_OBSTACLE, (int(ox), int(oy), int(ow), int(oh)))
        if kind == OVERHEAD:
            # translucent halo so floating obstacles read as "duck under"
            r = int(ow)
            halo = pygame.Surface((2 * r, 2 * r), pygame.SRCALPHA)
            pygame.draw.circle(halo, COLOR_SHADOW, (r, r), r)
            surf.blit(halo, (int(ox + ow / 2) - r, int(oy + oh / 2) - r))

    for (ux, uy, us, _), kind in view.power_ups:
        center = (int(ux + us / 2), int(uy + us / 2))
        fill = COLOR_INVINCIBLE if kind == INVINCIBLE else COLOR_SCORE_BOOST
        pygame.draw.circle(surf, fill, center, int(us / 2))
        pygame.draw.circle(surf, COLOR_FG, center, int(us / 2), width=1)
        if font is not None:
            label = font.render("*" if kind == INVINCIBLE else "+10", True, COLOR_FG)
            surf.blit(label, (center[0] - label.get_width() // 2, center[1] - label.get_height() // 2))

    if font is None:
        return

    surf.blit(font.render(f"Score: {view.score}", True, COLOR_FG), (10, 10))
    surf.blit(font.render(f"High Score: {view.high_score}", True, COLOR_FG), (10, 34))
    if view.invincible_seconds > 0:
        txt = font.render(f"Invincible: {view.invincible_seconds}s", True, COLOR_INVINCIBLE)
        surf.blit(txt, (WIDTH - 190, 10))

    if view.phase == GAME_OVER:
        msg = font.render(f"Game Over! Score: {view.score}  (R restart | N new seed)", True, COLOR_DANGER)
        surf.blit(msg, ((WIDTH - msg.get_width()) // 2, HEIGHT // 2 - msg.get_height()))
