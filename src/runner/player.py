# src/runner/player.py
from __future__ import annotations
import pygame
from dataclasses import dataclass
from .config import (
    PLAYER_X, PLAYER_W, PLAYER_H, PLAYER_DUCK_H, GROUND_Y,
    GRAVITY, JUMP_FORCE, MAX_JUMP_TIME, COYOTE_TIME_LIMIT
)

# Input edge kinds, queued by InputState in arrival order
JUMP_PRESS = "jump_press"
JUMP_RELEASE = "jump_release"
DUCK_PRESS = "duck_press"
DUCK_RELEASE = "duck_release"

@dataclass
class Player:
    """
    Runner with variable-height jump and duck:
    - y is the TOP edge, feet sit at y + height
    - height is PLAYER_H standing, PLAYER_DUCK_H ducking
    """
    x: float = float(PLAYER_X)
    y: float = float(GROUND_Y - PLAYER_H)
    width: int = PLAYER_W
    height: int = PLAYER_H
    dy: float = 0.0
    jumping: bool = False
    ducking: bool = False
    grounded: bool = True
    jump_time: int = 0
    coyote_time: int = COYOTE_TIME_LIMIT
    invincible: bool = False
    invincible_timer: int = 0

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x), int(self.y), self.width, self.height)

    @property
    def color_state(self) -> str:
        return "invincible" if self.invincible else "normal"

    def can_jump(self) -> bool:
        return (self.grounded or self.coyote_time > 0) and not self.ducking

    def try_jump(self) -> bool:
        """Start a jump on a rising jump edge. Returns True if performed."""
        if not self.can_jump():
            return False
        self.jumping = True
        self.dy = JUMP_FORCE
        self.grounded = False
        self.coyote_time = 0
        self.jump_time = 0
        return True

    def release_jump(self):
        # only ends the held phase, velocity is kept
        self.jumping = False

    def start_duck(self) -> bool:
        if not self.grounded or self.ducking:
            return False
        delta = PLAYER_H - PLAYER_DUCK_H
        self.ducking = True
        self.height = PLAYER_DUCK_H
        self.y += delta
        return True

    def stop_duck(self) -> bool:
        if not self.ducking:
            return False
        delta = PLAYER_H - PLAYER_DUCK_H
        self.ducking = False
        self.height = PLAYER_H
        self.y -= delta
        return True

    def grant_invincibility(self, ticks: int):
        self.invincible = True
        self.invincible_timer = int(ticks)

    def update_physics(self):
        """One tick: gravity (halved while a jump is held), integrate, ground clamp, timers."""
        if self.jumping and self.jump_time < MAX_JUMP_TIME:
            self.dy += GRAVITY / 2
            self.jump_time += 1
        else:
            self.dy += GRAVITY

        self.y += self.dy

        if self.y + self.height >= GROUND_Y:
            self.y = GROUND_Y - self.height
            self.dy = 0.0
            self.grounded = True
            self.jumping = False
        else:
            self.grounded = False

        if self.grounded:
            self.coyote_time = COYOTE_TIME_LIMIT
        else:
            self.coyote_time = max(0, self.coyote_time - 1)

        if self.invincible:
            self.invincible_timer -= 1
            if self.invincible_timer <= 0:
                self.invincible_timer = 0
                self.invincible = False

        assert self.height in (PLAYER_H, PLAYER_DUCK_H), f"bad player height {self.height}"


def step_player(player: Player, inputs) -> Player:
    """
    Physics engine entry point: apply the drained input edges in arrival order,
    then integrate one tick.
    """
    for edge in inputs.edges:
        if edge == JUMP_PRESS:
            player.try_jump()
        elif edge == JUMP_RELEASE:
            player.release_jump()
        elif edge == DUCK_PRESS:
            player.start_duck()
        elif edge == DUCK_RELEASE:
            player.stop_duck()
    # a crouch only exists while its key is down, so jump suppression
    # by `ducking` is suppression by the held duck key
    assert not player.ducking or inputs.duck_held, "ducking without the duck key held"
    player.update_physics()
    return player
