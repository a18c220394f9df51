# /experiments/sanity_rollout.py
"""
Sanity rollouts for PlatformerEnv:
- Runs RANDOM and/or TINY-HEURISTIC policies over fixed seeds
- Writes an episodes CSV for notebook analysis
- Optionally saves per-episode action sequences

Usage examples (from repo root):
  # Both policies over 20 default seeds, frame_skip=4:
  python -m experiments.sanity_rollout --policies both

  # Only heuristic on hard, custom seeds, keep the action traces:
  python -m experiments.sanity_rollout --policies heuristic --difficulty hard --seeds 111,222 --save-traces
"""

from __future__ import annotations
import argparse
import csv
from pathlib import Path
from typing import List, Tuple

import numpy as np

from src.env.platformer_env import PlatformerEnv
from src.game.config import DIFFICULTIES


# ------------------------ Policies ------------------------

def random_policy_init(action_seed: int, n_actions: int):
    rng = np.random.RandomState(action_seed)
    def act(_obs: np.ndarray) -> int:
        return int(rng.randint(0, n_actions))
    return act

def tiny_heuristic_policy_init():
    """
    Very small rule:
      - walk toward the nearest flag (obs[10] = dx)
      - jump when the flag is above us (obs[11] < 0) or a hazard is close ahead
    """
    def act(obs: np.ndarray) -> int:
        marker_dx, marker_dy = obs[10], obs[11]
        hazard_dx, hazard_dy, has_hazard = obs[12], obs[13], obs[14]
        go_right = marker_dx >= 0.0
        hazard_close = has_hazard > 0.5 and abs(hazard_dx) < 0.08 and abs(hazard_dy) < 0.1
        want_jump = marker_dy < -0.05 or hazard_close
        if go_right:
            return 5 if want_jump else 2
        return 4 if want_jump else 1
    return act


# ------------------------ Rollout core ------------------------

def write_episode_row(csv_path: Path, header: List[str], row: List):
    exists = csv_path.exists()
    with csv_path.open("a", newline="") as f:
        w = csv.writer(f)
        if not exists:
            w.writerow(header)
        w.writerow(row)

def run_one_episode(policy_name: str,
                    seed: int,
                    frame_skip: int,
                    difficulty: str,
                    steps_limit: int,
                    save_traces: bool,
                    out_dir: Path) -> Tuple[int, float, dict, bool, bool]:
    """Returns: (ep_len, ret_sum, last_info, terminated, truncated)"""
    env = PlatformerEnv(frame_skip=frame_skip, difficulty=difficulty)

    if policy_name == "random":
        policy = random_policy_init(10_000 + seed, env.action_space.n)
    elif policy_name == "heuristic":
        policy = tiny_heuristic_policy_init()
    else:
        raise ValueError("Unknown policy")

    actions: List[int] = []
    ret_sum = 0.0
    ep_len = 0
    term = trunc = False

    try:
        obs, info = env.reset(seed=seed)
        for _ in range(steps_limit):
            a = policy(obs)
            actions.append(int(a))
            obs, r, term, trunc, info = env.step(a)
            ret_sum += float(r)
            ep_len += 1
            if term or trunc:
                break
    finally:
        env.close()

    if save_traces:
        trace_dir = out_dir / "traces" / policy_name
        trace_dir.mkdir(parents=True, exist_ok=True)
        np.save(trace_dir / f"{seed}_actions.npy", np.asarray(actions, dtype=np.int8))

    return ep_len, ret_sum, info, bool(term), bool(trunc)


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--policies", type=str, default="both",
                    choices=["random", "heuristic", "both"])
    ap.add_argument("--seeds", type=str, default="",
                    help="Comma-separated seeds. If empty, uses 20 defaults: 101..120")
    ap.add_argument("--difficulty", type=str, default="normal", choices=DIFFICULTIES)
    ap.add_argument("--frame-skip", type=int, default=4)
    ap.add_argument("--steps", type=int, default=10_000,
                    help="Hard cap on decision steps (env may truncate earlier)")
    ap.add_argument("--out-dir", type=str, default="experiments/runs")
    ap.add_argument("--save-traces", action="store_true")
    args = ap.parse_args()

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    if args.seeds.strip():
        seeds = [int(s) for s in args.seeds.split(",") if s.strip()]
    else:
        seeds = list(range(101, 121))

    episodes_csv = out_dir / "episodes.csv"
    header = [
        "policy_name", "seed", "difficulty", "frame_skip",
        "episode_len_decisions", "return_sum", "score", "level", "lives",
        "final_mode", "terminated", "truncated",
    ]
    to_run = ["random", "heuristic"] if args.policies == "both" else [args.policies]

    print(f"Running policies={to_run} on {len(seeds)} seeds "
          f"(difficulty={args.difficulty}, frame_skip={args.frame_skip})")
    print(f"Writing summaries to {episodes_csv}")

    for policy_name in to_run:
        for seed in seeds:
            ep_len, ret_sum, info, terminated, truncated = run_one_episode(
                policy_name=policy_name,
                seed=seed,
                frame_skip=args.frame_skip,
                difficulty=args.difficulty,
                steps_limit=args.steps,
                save_traces=args.save_traces,
                out_dir=out_dir,
            )
            row = [
                policy_name, seed, args.difficulty, args.frame_skip,
                ep_len, f"{ret_sum:.1f}", info["score"], info["level"], info["lives"],
                info["mode"], int(terminated), int(truncated),
            ]
            write_episode_row(episodes_csv, header, row)
            print(f"[{policy_name}] seed={seed}  len={ep_len}  score={info['score']}  "
                  f"level={info['level']}  mode={info['mode']}  ret={ret_sum:.1f}")

    print("✓ Sanity rollouts complete")


if __name__ == "__main__":
    main()
