# src/runner/entities.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, List
import pygame

from .state import SimulationState

GROUND = "ground"
OVERHEAD = "overhead"
INVINCIBLE = "invincible"
SCORE_BOOST = "score_boost"

# Event kinds returned by advance_entities
CLEARED = "cleared"   # obstacle scrolled off the left edge
HIT = "hit"           # unresolved obstacle collision
PICKUP = "pickup"     # power-up collected


@dataclass
class Obstacle:
    x: float
    y: float
    width: float
    height: float
    kind: str  # "ground" or "overhead"

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x), int(self.y), int(self.width), int(self.height))


@dataclass
class PowerUp:
    x: float
    y: float
    size: float
    kind: str  # "invincible" or "score_boost"

    @property
    def right(self) -> float:
        return self.x + self.size

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x), int(self.y), int(self.size), int(self.size))


@dataclass
class EntityEvent:
    kind: str      # CLEARED | HIT | PICKUP
    entity: Any


def overlaps(ax: float, ay: float, aw: float, ah: float,
             bx: float, by: float, bw: float, bh: float) -> bool:
    """Float AABB test; touching edges do not count."""
    return ax < bx + bw and ax + aw > bx and ay < by + bh and ay + ah > by


def _hits_player(player, x: float, y: float, w: float, h: float) -> bool:
    return overlaps(player.x, player.y, player.width, player.height, x, y, w, h)


def advance_entities(state: SimulationState) -> List[EntityEvent]:
    """
    Scroll obstacles and power-ups by the game speed, prune what left the field
    and collect collision events. Both lists are walked backwards so removals
    never skip a neighbour.
    """
    events: List[EntityEvent] = []
    player = state.player
    speed = state.game_speed

    obstacles = state.obstacles
    for i in range(len(obstacles) - 1, -1, -1):
        ob = obstacles[i]
        ob.x -= speed

        if ob.right < 0:
            del obstacles[i]
            events.append(EntityEvent(CLEARED, ob))
            continue

        if _hits_player(player, ob.x, ob.y, ob.width, ob.height):
            if player.ducking and ob.kind == OVERHEAD:
                continue
            if not player.invincible:
                events.append(EntityEvent(HIT, ob))

    power_ups = state.power_ups
    for i in range(len(power_ups) - 1, -1, -1):
        pu = power_ups[i]
        pu.x -= speed

        if pu.right < 0:
            del power_ups[i]
            continue

        if _hits_player(player, pu.x, pu.y, pu.size, pu.size):
            del power_ups[i]
            events.append(EntityEvent(PICKUP, pu))

    return events
