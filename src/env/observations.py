# src/env/observations.py
from __future__ import annotations
from typing import List
import numpy as np
from src.runner.config import (
    WIDTH, HEIGHT, JUMP_FORCE, START_SPEED, MAX_SPEED, INVINCIBLE_TICKS
)
from src.runner.entities import OVERHEAD
from src.runner.state import SimulationState

NEAREST_OBSTACLES = 2          # obstacle slots in the vector
LOOKAHEAD_PX = 2 * WIDTH       # dx normalisation (spawns sit at most ~WIDTH + 650 ahead)
OBS_SIZE = 6 + 4 * NEAREST_OBSTACLES + 2

# [y_top, dy, grounded, ducking, invincible_left, speed,
#  (dx, overhead, top, height) x NEAREST_OBSTACLES,
#  powerup_dx, powerup_y]
OBS_LOW = np.array([0.0, -1.0, 0.0, 0.0, 0.0, 0.0]
                   + [0.0, 0.0, 0.0, 0.0] * NEAREST_OBSTACLES
                   + [0.0, 0.0], dtype=np.float32)
OBS_HIGH = np.ones(OBS_SIZE, dtype=np.float32)


def _clip01(v: float) -> float:
    return max(0.0, min(1.0, v))


def build_observation(state: SimulationState) -> np.ndarray:
    """
    Compact vector view of the simulation for an agent, all values in [0, 1]
    except dy in [-1, 1]. Empty obstacle/power-up slots read as "far away".
    """
    p = state.player
    out: List[float] = [
        _clip01(p.y / HEIGHT),
        max(-1.0, min(1.0, p.dy / abs(JUMP_FORCE))),
        1.0 if p.grounded else 0.0,
        1.0 if p.ducking else 0.0,
        _clip01(p.invincible_timer / INVINCIBLE_TICKS) if p.invincible else 0.0,
        _clip01((state.game_speed - START_SPEED) / (MAX_SPEED - START_SPEED)),
    ]

    # obstacles still ahead of (or overlapping) the player, nearest first
    ahead = sorted((o for o in state.obstacles if o.right >= p.x), key=lambda o: o.x)
    for i in range(NEAREST_OBSTACLES):
        if i < len(ahead):
            o = ahead[i]
            out += [
                _clip01((o.x - p.right) / LOOKAHEAD_PX),
                1.0 if o.kind == OVERHEAD else 0.0,
                _clip01(o.y / HEIGHT),
                _clip01(o.height / HEIGHT),
            ]
        else:
            out += [1.0, 0.0, 1.0, 0.0]

    ups = sorted((u for u in state.power_ups if u.right >= p.x), key=lambda u: u.x)
    if ups:
        out += [_clip01((ups[0].x - p.right) / LOOKAHEAD_PX), _clip01(ups[0].y / HEIGHT)]
    else:
        out += [1.0, 0.0]

    obs = np.asarray(out, dtype=np.float32)
    assert obs.shape == (OBS_SIZE,)
    return obs
