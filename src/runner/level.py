# src/runner/level.py
from __future__ import annotations
import logging
import random
from typing import Optional, Tuple
from .config import (
    WIDTH, GROUND_Y, START_SPEED,
    BASE_MIN_GAP, BASE_MAX_GAP, GAP_SCALING, MIN_GAP_SLOPE, MAX_GAP_SLOPE,
    MIN_GAP_CAP, MAX_GAP_CAP,
    OBSTACLE_W, GROUND_OBS_MIN_H, GROUND_OBS_RANGE_H,
    OVERHEAD_OBS_MIN_H, OVERHEAD_OBS_RANGE_H, OVERHEAD_CLEARANCE,
    POWERUP_SIZE, POWERUP_CHANCE, MAX_POWERUPS,
    POWERUP_SPAWN_OFFSET, POWERUP_SPAWN_JITTER, POWERUP_LOW_BAND, POWERUP_HIGH_BAND,
    PLAYER_H,
)
from .entities import Obstacle, PowerUp, GROUND, OVERHEAD, INVINCIBLE, SCORE_BOOST
from .state import SimulationState

logger = logging.getLogger(__name__)


def gap_range(speed: float) -> Tuple[float, float]:
    """
    Spawn gap bounds for the current speed. Both grow with speed above the
    starting speed and are capped so the field never gets too sparse.
    """
    boost = (speed - START_SPEED) * GAP_SCALING
    min_gap = min(BASE_MIN_GAP + boost * MIN_GAP_SLOPE, MIN_GAP_CAP)
    max_gap = min(BASE_MAX_GAP + boost * MAX_GAP_SLOPE, MAX_GAP_CAP)
    return min_gap, max_gap


class ObstacleGen:
    """
    Decides once per tick whether a new obstacle and/or power-up enters the field.
    Owns only its RNG; the entities live in the SimulationState it is handed.
    """
    def __init__(self, seed: Optional[int]):
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.seed = seed
        self.rng = random.Random(seed)

    def should_spawn_obstacle(self, state: SimulationState, min_gap: float) -> bool:
        if not state.obstacles:
            return True
        # obstacles are appended in spawn order, the last one is the newest
        return state.obstacles[-1].x < WIDTH - min_gap

    def make_obstacle(self, gap: float) -> Obstacle:
        kind = GROUND if self.rng.random() < 0.5 else OVERHEAD
        if kind == GROUND:
            h = self.rng.random() * GROUND_OBS_RANGE_H + GROUND_OBS_MIN_H
            y = GROUND_Y - h
        else:
            h = self.rng.random() * OVERHEAD_OBS_RANGE_H + OVERHEAD_OBS_MIN_H
            y = GROUND_Y - OVERHEAD_CLEARANCE - h
        return Obstacle(x=WIDTH + gap, y=y, width=OBSTACLE_W, height=h, kind=kind)

    def make_power_up(self) -> PowerUp:
        kind = self.rng.choice([INVINCIBLE, SCORE_BOOST])
        size = POWERUP_SIZE
        if self.rng.random() < 0.5:
            # low arc: reachable standing or ducking
            y = GROUND_Y - size - self.rng.random() * POWERUP_LOW_BAND
        else:
            # high arc: needs a jump
            y = GROUND_Y - PLAYER_H - size - self.rng.random() * POWERUP_HIGH_BAND
        x = WIDTH + self.rng.random() * POWERUP_SPAWN_JITTER + POWERUP_SPAWN_OFFSET
        return PowerUp(x=x, y=y, size=size, kind=kind)

    def update_and_generate(self, state: SimulationState):
        """Spawn at most one obstacle and one power-up for this tick."""
        min_gap, max_gap = gap_range(state.game_speed)
        if self.should_spawn_obstacle(state, min_gap):
            gap = self.rng.uniform(min_gap, max_gap)
            assert min_gap <= gap <= max_gap, f"gap {gap} outside [{min_gap}, {max_gap}]"
            ob = self.make_obstacle(gap)
            state.obstacles.append(ob)
            logger.debug("frame %d: %s obstacle at x=%.1f (gap %.1f)",
                         state.frame_count, ob.kind, ob.x, gap)

        if self.rng.random() < POWERUP_CHANCE and len(state.power_ups) < MAX_POWERUPS:
            pu = self.make_power_up()
            state.power_ups.append(pu)
            logger.debug("frame %d: %s power-up at (%.1f, %.1f)",
                         state.frame_count, pu.kind, pu.x, pu.y)
