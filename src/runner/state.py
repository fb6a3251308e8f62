# src/runner/state.py
from __future__ import annotations
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, TYPE_CHECKING
from .config import START_SPEED
from .player import Player, JUMP_PRESS, JUMP_RELEASE, DUCK_PRESS, DUCK_RELEASE

if TYPE_CHECKING:
    from .entities import Obstacle, PowerUp

RUNNING = "running"
GAME_OVER = "game_over"


@dataclass
class InputState:
    """
    Buffered key state between two ticks.
    Held flags follow the physical keys; edges queue up in the order they
    arrived until the next tick drains them, so replaying the queue gives the
    same result as applying each edge the moment it happened. Pressing a key
    that is already held (OS auto-repeat) produces no new edge.
    """
    jump_held: bool = False
    duck_held: bool = False
    edges: Deque[str] = field(default_factory=deque)

    def press_jump(self):
        if not self.jump_held:
            self.jump_held = True
            self.edges.append(JUMP_PRESS)

    def release_jump(self):
        if self.jump_held:
            self.jump_held = False
            self.edges.append(JUMP_RELEASE)

    def press_duck(self):
        if not self.duck_held:
            self.duck_held = True
            self.edges.append(DUCK_PRESS)

    def release_duck(self):
        if self.duck_held:
            self.duck_held = False
            self.edges.append(DUCK_RELEASE)

    def drain(self) -> "InputState":
        """Return the edges seen since the last drain and clear the queue."""
        edges = InputState(jump_held=self.jump_held, duck_held=self.duck_held, edges=self.edges)
        self.edges = deque()
        return edges


@dataclass
class SimulationState:
    """Everything one run of the game owns. Only the game state machine writes phase and score."""
    player: Player = field(default_factory=Player)
    obstacles: List["Obstacle"] = field(default_factory=list)
    power_ups: List["PowerUp"] = field(default_factory=list)
    score: int = 0
    high_score: int = 0
    game_speed: float = START_SPEED
    frame_count: int = 0
    phase: str = RUNNING
    background_x: float = 0.0
    obstacles_cleared: int = 0
    power_ups_collected: int = 0

    @property
    def running(self) -> bool:
        return self.phase == RUNNING
