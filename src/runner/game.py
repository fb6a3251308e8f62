# src/runner/game.py
"""
Game state machine and the public surface a host drives.

A host forwards key edges (on_jump_pressed, ...) and calls tick() once per
frame while the phase is "running". After a hit the phase becomes
"game_over" and tick() does nothing until reset() is called.
"""
from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .config import (
    WIDTH, START_SPEED, MAX_SPEED, SPEED_STEP, BACKGROUND_DIVISOR,
    INVINCIBLE_TICKS, SCORE_BOOST as SCORE_BOOST_POINTS, TICKS_PER_SECOND,
)
from .entities import EntityEvent, advance_entities, CLEARED, HIT, PICKUP, INVINCIBLE, SCORE_BOOST
from .level import ObstacleGen
from .player import Player, step_player
from .state import SimulationState, InputState, RUNNING, GAME_OVER

logger = logging.getLogger(__name__)

Rect = Tuple[float, float, float, float]


@dataclass(frozen=True)
class GameView:
    """Read-only snapshot of what a renderer needs for one frame."""
    player: Rect
    player_color_state: str                 # "normal" | "invincible"
    obstacles: Tuple[Tuple[Rect, str], ...]
    power_ups: Tuple[Tuple[Rect, str], ...]
    score: int
    high_score: int
    background_x: float
    invincible_seconds: int
    game_speed: float
    frame_count: int
    phase: str


class RunnerGame:
    def __init__(self, seed: Optional[int] = None):
        self.level = ObstacleGen(seed)
        self.state = SimulationState()
        self.inputs = InputState()

    @property
    def seed(self) -> int:
        return self.level.seed

    # -------------------- Input edges --------------------

    def on_jump_pressed(self):
        self.inputs.press_jump()

    def on_jump_released(self):
        self.inputs.release_jump()

    def on_duck_pressed(self):
        self.inputs.press_duck()

    def on_duck_released(self):
        self.inputs.release_duck()

    # -------------------- Simulation --------------------

    def tick(self) -> bool:
        """Advance one frame. Returns False (and does nothing) unless running."""
        st = self.state
        if st.phase != RUNNING:
            return False

        edges = self.inputs.drain()

        st.frame_count += 1
        st.background_x -= st.game_speed / BACKGROUND_DIVISOR
        if st.background_x <= -WIDTH:
            st.background_x += WIDTH

        # physics must settle the player before collisions are tested
        step_player(st.player, edges)
        events = advance_entities(st)
        self._apply_events(events)
        self.level.update_and_generate(st)

        assert st.score >= 0
        return True

    def _apply_events(self, events: List[EntityEvent]):
        st = self.state
        for ev in events:
            if ev.kind == CLEARED:
                st.score += 1
                st.obstacles_cleared += 1
                st.game_speed = min(st.game_speed + SPEED_STEP, MAX_SPEED)
            elif ev.kind == PICKUP:
                st.power_ups_collected += 1
                self.apply_power_up(ev.entity.kind)
            elif ev.kind == HIT and st.phase == RUNNING:
                st.phase = GAME_OVER
                st.high_score = max(st.high_score, st.score)
                logger.info("Game over at frame %d: score=%d high=%d (hit %s obstacle)",
                            st.frame_count, st.score, st.high_score, ev.entity.kind)

    def apply_power_up(self, kind: str):
        st = self.state
        if kind == INVINCIBLE:
            st.player.grant_invincibility(INVINCIBLE_TICKS)
        elif kind == SCORE_BOOST:
            st.score += SCORE_BOOST_POINTS

    def reset(self, seed: Optional[int] = None):
        """Start a new run. High score survives; a seed reseeds the generator."""
        st = self.state
        high = max(st.high_score, st.score)
        if seed is not None:
            self.level = ObstacleGen(seed)
        self.state = SimulationState(player=Player(), high_score=high, game_speed=START_SPEED)
        self.inputs = InputState()
        logger.info("Reset (seed=%s, high score %d)", self.level.seed, high)

    # -------------------- Output --------------------

    @property
    def phase(self) -> str:
        return self.state.phase

    @property
    def game_over(self) -> bool:
        return self.state.phase == GAME_OVER

    def invincible_seconds(self) -> int:
        p = self.state.player
        if not p.invincible:
            return 0
        return math.ceil(p.invincible_timer / TICKS_PER_SECOND)

    def view(self) -> GameView:
        st = self.state
        p = st.player
        return GameView(
            player=(p.x, p.y, p.width, p.height),
            player_color_state=p.color_state,
            obstacles=tuple(((o.x, o.y, o.width, o.height), o.kind) for o in st.obstacles),
            power_ups=tuple(((u.x, u.y, u.size, u.size), u.kind) for u in st.power_ups),
            score=st.score,
            high_score=st.high_score,
            background_x=st.background_x,
            invincible_seconds=self.invincible_seconds(),
            game_speed=st.game_speed,
            frame_count=st.frame_count,
            phase=st.phase,
        )
