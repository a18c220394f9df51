# src/env/observations.py
from __future__ import annotations
from typing import Iterable, Optional, Tuple
import numpy as np

from src.game.config import (
    WIDTH, HEIGHT, WORLD_WIDTH, PLAYER_SPEED, SPEED_BOOST, PLAYER_JUMP, JUMP_BOOST,
    RESPAWN_INVULN_TICKS, POWERUP_TICKS, MARKERS_NEEDED, MAX_LEVEL, DIFFICULTY_LIVES,
)
from src.game.geometry import center
from src.game.world import WorldState

OBS_SIZE = 15
MAX_VX = PLAYER_SPEED * SPEED_BOOST
MAX_VY = PLAYER_JUMP * JUMP_BOOST * 1.5
MAX_LIVES = max(DIFFICULTY_LIVES.values())


def _clip(x: float, lo: float = -1.0, hi: float = 1.0) -> float:
    return lo if x < lo else (hi if x > hi else x)


def _nearest(px: float, py: float, objs: Iterable) -> Optional[Tuple[float, float]]:
    """(dx, dy) from (px, py) to the closest object centre, or None."""
    best = None
    best_d2 = None
    for o in objs:
        ox, oy = center(o)
        dx, dy = ox - px, oy - py
        d2 = dx * dx + dy * dy
        if best_d2 is None or d2 < best_d2:
            best, best_d2 = (dx, dy), d2
    return best


def build_observation(state: WorldState) -> np.ndarray:
    """
    Fixed (15,) float32 vector, every entry in [-1, 1]:
      [ x, y, vx, vy, on_ground, invulnerable, power_up,
        lives, flags, level,
        marker_dx, marker_dy, hazard_dx, hazard_dy, has_hazard ]
    - positions normalised by world width / screen height
    - marker/hazard offsets point from the player centre to the nearest one;
      (0, 0) when none is left
    """
    pl = state.player
    if pl is None:
        return np.zeros(OBS_SIZE, dtype=np.float32)

    px, py = center(pl)
    feats = [
        _clip(pl.x / WORLD_WIDTH),
        _clip(pl.y / HEIGHT),
        _clip(pl.vx / MAX_VX),
        _clip(pl.vy / MAX_VY),
        1.0 if pl.on_ground else 0.0,
        _clip(pl.invulnerability / RESPAWN_INVULN_TICKS),
        _clip(pl.power_up_time / POWERUP_TICKS),
        _clip(state.lives / MAX_LIVES),
        _clip(state.markers_collected / MARKERS_NEEDED),
        _clip(state.level / MAX_LEVEL),
    ]

    mk = _nearest(px, py, state.markers)
    feats.extend([_clip(mk[0] / WIDTH), _clip(mk[1] / HEIGHT)] if mk else [0.0, 0.0])

    hz = _nearest(px, py, state.hazards)
    feats.extend([_clip(hz[0] / WIDTH), _clip(hz[1] / HEIGHT), 1.0] if hz else [0.0, 0.0, 0.0])

    return np.asarray(feats, dtype=np.float32)
