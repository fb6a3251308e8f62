# /experiments/sanity_rollout.py
"""
Sanity rollouts for RunnerEnv.

Plays a random policy and a reflex policy (jump the next ground block,
duck the next overhead one) over a set of seeds and reports, per episode,
how far each got: obstacles cleared, power-ups picked up, final score and
speed. A policy that reacts to obstacles should clear clearly more than the
random one; if it does not, the observation or the action mapping is off.

Usage (from repo root):
  python -m experiments.sanity_rollout
  python -m experiments.sanity_rollout --policies reflex --seeds 111,222,333
  python -m experiments.sanity_rollout --steps 300 --csv /tmp/episodes.csv
"""

from __future__ import annotations
import argparse
import csv
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Callable, Dict, List, Optional

import numpy as np

from src.env.observations import LOOKAHEAD_PX
from src.env.runner_env import RunnerEnv, NOOP, JUMP, DUCK

Policy = Callable[[np.ndarray], int]

JUMP_TRIGGER_PX = 60    # ground block this close: jump
DUCK_TRIGGER_PX = 90    # overhead block this close: duck until it passed


@dataclass
class EpisodeResult:
    policy: str
    seed: int
    decisions: int
    obstacles_cleared: int
    power_ups_collected: int
    score: int
    final_speed: float
    hit: bool


def random_policy(seed: int) -> Policy:
    rng = np.random.default_rng(seed)
    return lambda _obs: int(rng.integers(0, 3))


def reflex_policy(_seed: int) -> Policy:
    """Reacts to the nearest obstacle only (observation slots 6 and 7)."""
    def act(obs: np.ndarray) -> int:
        dx_px = float(obs[6]) * LOOKAHEAD_PX
        if obs[7] >= 0.5:
            return DUCK if dx_px <= DUCK_TRIGGER_PX else NOOP
        return JUMP if dx_px <= JUMP_TRIGGER_PX else NOOP
    return act


POLICIES: Dict[str, Callable[[int], Policy]] = {
    "random": random_policy,
    "reflex": reflex_policy,
}


def run_one_episode(policy_name: str, seed: int, frame_skip: int = 4,
                    steps_limit: int = 10_000) -> EpisodeResult:
    """Play one episode until the runner is hit, the env truncates, or steps_limit."""
    if policy_name not in POLICIES:
        raise ValueError(f"Unknown policy {policy_name!r}")
    policy = POLICIES[policy_name](seed)

    env = RunnerEnv(frame_skip=frame_skip)
    try:
        obs, info = env.reset(seed=seed)
        terminated = False
        for _ in range(steps_limit):
            obs, _, terminated, truncated, info = env.step(policy(obs))
            if terminated or truncated:
                break
    finally:
        env.close()

    return EpisodeResult(
        policy=policy_name,
        seed=seed,
        decisions=info["timestep"],
        obstacles_cleared=info["obstacles_cleared"],
        power_ups_collected=info["power_ups_collected"],
        score=info["score"],
        final_speed=round(float(info["game_speed"]), 3),
        hit=bool(terminated),
    )


def write_csv(path: Path, results: List[EpisodeResult]):
    path.parent.mkdir(parents=True, exist_ok=True)
    names = [f.name for f in fields(EpisodeResult)]
    with path.open("w", newline="") as f:
        w = csv.DictWriter(f, fieldnames=names)
        w.writeheader()
        for r in results:
            w.writerow(asdict(r))


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Random vs reflex rollouts on RunnerEnv")
    ap.add_argument("--policies", default="both", choices=["random", "reflex", "both"])
    ap.add_argument("--seeds", default="", help="Comma-separated seeds (default 101..120)")
    ap.add_argument("--frame-skip", type=int, default=4)
    ap.add_argument("--steps", type=int, default=10_000, help="Decision cap per episode")
    ap.add_argument("--csv", default="", help="Optional path for a per-episode CSV")
    return ap.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    args = parse_args(argv)
    seeds = [int(s) for s in args.seeds.split(",") if s.strip()] or list(range(101, 121))
    names = list(POLICIES) if args.policies == "both" else [args.policies]

    results: List[EpisodeResult] = []
    for name in names:
        for seed in seeds:
            r = run_one_episode(name, seed, frame_skip=args.frame_skip, steps_limit=args.steps)
            results.append(r)
            print(f"[{name}] seed={seed}  cleared={r.obstacles_cleared}  "
                  f"power-ups={r.power_ups_collected}  score={r.score}  "
                  f"speed={r.final_speed:.3f}  {'hit' if r.hit else 'survived'}")

    for name in names:
        cleared = [r.obstacles_cleared for r in results if r.policy == name]
        print(f"{name}: mean cleared {np.mean(cleared):.1f} (max {max(cleared)}) over {len(cleared)} seeds")

    if args.csv:
        write_csv(Path(args.csv), results)
        print(f"Wrote {args.csv}")

    print("✓ Sanity rollouts complete")


if __name__ == "__main__":
    main()
