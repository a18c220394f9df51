# src/tests/test_env.py
"""
Quick tests for PlatformerEnv (Gymnasium environment).

Usage (from repo root):
  python -m src.tests.test_env
"""
from __future__ import annotations
from typing import List, Tuple

import numpy as np
from gymnasium.utils.env_checker import check_env

from src.env.platformer_env import PlatformerEnv
from src.env.observations import build_observation, OBS_SIZE
from src.game.world import new_world


def test_api_check():
    """Verify Gym API contract (spaces, step/reset signatures, types)."""
    env = PlatformerEnv(frame_skip=4)
    try:
        check_env(env.unwrapped, skip_render_check=True)
    finally:
        env.close()


def test_reset_starts_playing():
    env = PlatformerEnv()
    try:
        obs, info = env.reset(seed=7)
        assert obs.shape == (OBS_SIZE,) and obs.dtype == np.float32
        assert info["mode"] == "playing"
        assert info["lives"] == 3 and info["level"] == 1 and info["seed"] == 7
    finally:
        env.close()


def test_smoke_random_rollout():
    """Short random rollout: no crashes, obs in space, reward type."""
    env = PlatformerEnv(frame_skip=4, difficulty="hard", time_limit_seconds=10.0)
    try:
        obs, info = env.reset(seed=123)
        assert env.observation_space.contains(obs)
        for t in range(500):
            a = env.action_space.sample()
            obs, r, term, trunc, info = env.step(a)
            assert isinstance(r, float)
            assert env.observation_space.contains(obs), f"Step {t}: observation out of bounds"
            if term or trunc:
                break
        assert term or trunc, "10 s time limit must end the episode"
    finally:
        env.close()


def test_determinism():
    """Same seed + same action sequence => identical obs/reward/terminal flags."""
    def rollout(seed_val: int, action_seq: List[int]) -> List[Tuple[np.ndarray, float, bool, bool]]:
        env = PlatformerEnv(frame_skip=2)
        traj = []
        try:
            env.reset(seed=seed_val)
            for a in action_seq:
                obs, r, term, trunc, _ = env.step(int(a))
                traj.append((obs.copy(), float(r), bool(term), bool(trunc)))
                if term or trunc:
                    break
        finally:
            env.close()
        return traj

    rng = np.random.RandomState(42)
    action_seq = [int(rng.randint(0, 6)) for _ in range(300)]
    t1 = rollout(99, action_seq)
    t2 = rollout(99, action_seq)
    assert len(t1) == len(t2)
    for i, ((o1, r1, te1, tr1), (o2, r2, te2, tr2)) in enumerate(zip(t1, t2)):
        assert np.array_equal(o1, o2), f"obs mismatch at step {i}"
        assert (r1, te1, tr1) == (r2, te2, tr2), f"transition mismatch at step {i}"


def test_falling_off_costs_reward():
    env = PlatformerEnv(frame_skip=1)
    try:
        env.reset(seed=1)
        env.state.player.y = 600
        _, r, term, _, info = env.step(0)
        assert r == -1.0
        assert info["lives"] == 2 and not term
    finally:
        env.close()


def test_cleared_level_auto_advances():
    env = PlatformerEnv(frame_skip=1)
    try:
        env.reset(seed=3)
        st = env.state
        for mk in st.markers:
            mk.x, mk.y = st.player.x, st.player.y
        _, r, term, _, info = env.step(0)
        assert info["levels_cleared"] == 1
        assert info["level"] == 2 and info["mode"] == "playing"
        assert r == 6.0 and not term
    finally:
        env.close()


def test_observation_without_player_is_zero():
    obs = build_observation(new_world())
    assert obs.shape == (OBS_SIZE,) and not obs.any()


def main():
    for name, fn in list(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()
            print(f"✓ {name}")
    print("🎉 All selected tests passed")


if __name__ == "__main__":
    main()
