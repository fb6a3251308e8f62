# src/tests/test_game.py
"""
Game state machine: tick order, scoring, power-up effects, game over and reset.

Usage (from repo root):
  python -m pytest src/tests/test_game.py
  python -m src.tests.test_game
"""
from __future__ import annotations
import math

from src.runner.config import (
    WIDTH, GROUND_Y, GRAVITY, JUMP_FORCE, PLAYER_X, PLAYER_H, PLAYER_DUCK_H, OBSTACLE_W, POWERUP_SIZE,
    START_SPEED, MAX_SPEED, SPEED_STEP, INVINCIBLE_TICKS, SCORE_BOOST as BOOST_POINTS,
)
from src.runner.entities import Obstacle, PowerUp, GROUND, OVERHEAD, INVINCIBLE, SCORE_BOOST
from src.runner.game import RunnerGame
from src.runner.state import RUNNING, GAME_OVER


def _game() -> RunnerGame:
    return RunnerGame(seed=1)


def _obstacle_at_player(game: RunnerGame, kind: str, y: float, h: float) -> Obstacle:
    ob = Obstacle(x=PLAYER_X + 10 + game.state.game_speed, y=y, width=OBSTACLE_W, height=h, kind=kind)
    game.state.obstacles.append(ob)
    return ob


def _power_up_at_player(game: RunnerGame, kind: str) -> PowerUp:
    pu = PowerUp(x=PLAYER_X + 5 + game.state.game_speed, y=GROUND_Y - 50, size=POWERUP_SIZE, kind=kind)
    game.state.power_ups.append(pu)
    return pu


def test_initial_state():
    g = _game()
    st = g.state
    assert (st.player.x, st.player.y) == (PLAYER_X, GROUND_Y - PLAYER_H)
    assert st.game_speed == START_SPEED
    assert st.score == 0 and st.high_score == 0 and st.frame_count == 0
    assert st.obstacles == [] and st.power_ups == []
    assert st.phase == RUNNING and not g.game_over


def test_tick_advances_world():
    g = _game()
    assert g.tick()
    st = g.state
    assert st.frame_count == 1
    assert math.isclose(st.background_x, -START_SPEED / 6)
    assert st.player.bottom == GROUND_Y and st.player.dy == 0.0
    assert len(st.obstacles) == 1 and st.obstacles[0].x > WIDTH  # first spawn


def test_background_wraps():
    g = _game()
    g.state.background_x = -WIDTH + 0.1
    g.tick()
    assert -WIDTH < g.state.background_x <= 0


def test_clearing_one_obstacle():
    g = _game()
    g.state.obstacles.append(Obstacle(x=-OBSTACLE_W + 1, y=GROUND_Y - 40, width=OBSTACLE_W, height=40, kind=GROUND))
    g.tick()
    assert g.state.score == 1 and g.state.obstacles_cleared == 1
    assert math.isclose(g.state.game_speed, 2.8 + 0.013)
    assert g.state.phase == RUNNING


def test_speed_is_capped():
    g = _game()
    g.state.game_speed = MAX_SPEED - SPEED_STEP / 2
    g.state.obstacles.append(Obstacle(x=-OBSTACLE_W + 1, y=GROUND_Y - 40, width=OBSTACLE_W, height=40, kind=GROUND))
    g.tick()
    assert g.state.game_speed == MAX_SPEED


def test_hit_ends_game_and_freezes():
    g = _game()
    g.state.score = 7
    ob = _obstacle_at_player(g, OVERHEAD, GROUND_Y - 60 - 30, 30)
    assert g.tick()
    assert g.state.phase == GAME_OVER and g.game_over
    assert g.state.high_score == 7

    frame, x = g.state.frame_count, ob.x
    assert not g.tick()
    assert g.state.frame_count == frame and ob.x == x


def test_ducking_passes_overhead():
    g = _game()
    g.on_duck_pressed()
    _obstacle_at_player(g, OVERHEAD, GROUND_Y - 30, 20)
    g.tick()
    assert g.state.player.ducking
    assert g.state.phase == RUNNING

    g.on_duck_released()
    g.tick()
    assert not g.state.player.ducking
    assert g.state.phase == GAME_OVER  # same obstacle, now standing


def test_invincible_pickup_negates_hits():
    g = _game()
    _power_up_at_player(g, INVINCIBLE)
    g.tick()
    p = g.state.player
    assert p.invincible and p.invincible_timer == INVINCIBLE_TICKS
    assert g.state.power_ups == []
    assert g.invincible_seconds() == 3
    assert g.view().player_color_state == "invincible"

    _obstacle_at_player(g, GROUND, GROUND_Y - 40, 40)
    _obstacle_at_player(g, OVERHEAD, GROUND_Y - 60 - 30, 30)
    g.tick()
    assert g.state.phase == RUNNING
    assert p.invincible_timer == INVINCIBLE_TICKS - 1


def test_invincibility_runs_out():
    g = _game()
    g.apply_power_up(INVINCIBLE)
    for _ in range(INVINCIBLE_TICKS):
        g.tick()
    assert not g.state.player.invincible
    assert g.invincible_seconds() == 0


def test_score_boost_is_single_use():
    g = _game()
    _power_up_at_player(g, SCORE_BOOST)
    g.tick()
    assert g.state.score == BOOST_POINTS
    assert g.state.power_ups_collected == 1 and g.state.obstacles_cleared == 0
    g.tick()
    assert g.state.score == BOOST_POINTS


def test_jump_through_public_interface():
    g = _game()
    g.on_jump_pressed()
    g.on_jump_pressed()  # auto-repeat, same press
    g.tick()
    p = g.state.player
    assert math.isclose(p.dy, JUMP_FORCE + GRAVITY / 2)
    assert p.jumping and not p.grounded

    g.on_jump_pressed()  # still held: no new edge
    g.tick()
    assert p.jump_time == 2


def test_no_double_jump():
    g = _game()
    g.on_jump_pressed()
    g.tick()
    g.on_jump_released()
    g.on_jump_pressed()
    g.tick()
    p = g.state.player
    assert math.isclose(p.dy, JUMP_FORCE + GRAVITY / 2 + GRAVITY)
    assert not p.jumping


def test_stand_up_and_jump_before_one_tick():
    g = _game()
    g.on_duck_pressed()
    g.tick()
    p = g.state.player
    assert p.ducking

    g.on_duck_released()
    g.on_jump_pressed()
    g.tick()
    assert not p.ducking and p.height == PLAYER_H
    assert not p.grounded and p.jumping
    assert math.isclose(p.dy, JUMP_FORCE + GRAVITY / 2)


def test_duck_tap_again_before_one_tick_stays_ducked():
    g = _game()
    g.on_duck_pressed()
    g.tick()
    g.on_duck_released()
    g.on_duck_pressed()
    g.tick()
    p = g.state.player
    assert g.inputs.duck_held
    assert p.ducking and p.height == PLAYER_DUCK_H and p.bottom == GROUND_Y


def test_jump_then_duck_before_one_tick():
    # jump leaves the ground first, so the duck press that follows is dropped
    g = _game()
    g.on_jump_pressed()
    g.on_duck_pressed()
    g.tick()
    p = g.state.player
    assert p.jumping and not p.ducking and p.height == PLAYER_H


def test_crouch_only_while_duck_key_held():
    g = _game()
    p = g.state.player
    presses = [
        g.on_duck_pressed, g.on_jump_pressed, g.on_duck_released, g.on_jump_released,
        g.on_duck_pressed, g.on_duck_released, g.on_duck_pressed, g.on_jump_pressed,
    ]
    for press in presses:
        press()
        g.tick()
        assert not p.ducking or g.inputs.duck_held
        assert not p.ducking or not p.try_jump()


def test_duck_held_through_landing_does_not_crouch():
    g = _game()
    p = g.state.player
    g.on_jump_pressed()
    g.tick()
    g.on_jump_released()
    g.on_duck_pressed()  # mid-air: dropped
    for _ in range(120):
        g.tick()
        if p.grounded:
            break
    assert p.grounded and g.inputs.duck_held
    assert not p.ducking and p.height == PLAYER_H
    # standing with the key down: a fresh jump edge is honoured
    g.on_jump_pressed()
    g.tick()
    assert p.jumping and not p.grounded


def test_reset_restores_start_and_keeps_high_score():
    g = _game()
    for _ in range(30):
        g.tick()
    g.state.score = 12
    g.on_jump_pressed()
    g.reset()
    st = g.state
    assert (st.player.x, st.player.y) == (PLAYER_X, GROUND_Y - PLAYER_H)
    assert st.game_speed == START_SPEED
    assert st.score == 0 and st.frame_count == 0 and st.background_x == 0.0
    assert st.obstacles == [] and st.power_ups == []
    assert st.phase == RUNNING
    assert st.high_score == 12

    # pending press was dropped by the reset
    g.tick()
    assert st.player.grounded

    st.score = 3
    g.reset()
    assert g.state.high_score == 12


def test_reset_with_seed_reseeds():
    a, b = RunnerGame(seed=99), RunnerGame(seed=1)
    b.reset(seed=99)
    assert b.seed == 99
    for _ in range(200):
        a.tick()
        b.tick()
    assert [o.x for o in a.state.obstacles] == [o.x for o in b.state.obstacles]


def test_view_mirrors_state():
    g = _game()
    g.tick()
    v = g.view()
    st = g.state
    assert v.player == (st.player.x, st.player.y, st.player.width, st.player.height)
    assert v.player_color_state == "normal"
    assert [kind for _, kind in v.obstacles] == [o.kind for o in st.obstacles]
    assert v.score == st.score and v.high_score == st.high_score
    assert v.phase == RUNNING and v.frame_count == 1
    assert v.invincible_seconds == 0


def test_idle_runner_eventually_loses():
    g = RunnerGame(seed=2024)
    speed = g.state.game_speed
    for _ in range(10_000):
        if not g.tick():
            break
        st = g.state
        assert st.score >= 0
        assert speed <= st.game_speed <= MAX_SPEED
        speed = st.game_speed
        for o in st.obstacles:
            if o.kind == GROUND:
                assert math.isclose(o.y + o.height, GROUND_Y)
    assert g.game_over


def main():
    tests = [v for k, v in sorted(globals().items()) if k.startswith("test_") and callable(v)]
    for t in tests:
        t()
        print(f"✓ {t.__name__}")


if __name__ == "__main__":
    main()
