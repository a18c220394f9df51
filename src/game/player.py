# src/game/player.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .config import (
    PLAYER_START_X, PLAYER_START_Y, PLAYER_W, PLAYER_H, PLAYER_SPEED, PLAYER_JUMP,
    GRAVITY, RESPAWN_INVULN_TICKS, POWERUP_TICKS, SPEED_BOOST, JUMP_BOOST,
    PLAYER_COLORS,
)
from .controls import InputState
from .entities import Platform, PICKUP_KINDS
from .geometry import overlaps


@dataclass
class Player:
    """
    Side-view player.
    - velocity switches instantly with input (no acceleration or friction)
    - gravity is applied every tick, grounded or not
    - platforms are resolved one by one in list order, no global solver
    """
    x: float = float(PLAYER_START_X)
    y: float = float(PLAYER_START_Y)
    vx: float = 0.0
    vy: float = 0.0
    width: float = PLAYER_W
    height: float = PLAYER_H
    speed: float = PLAYER_SPEED
    jump_power: float = PLAYER_JUMP
    on_ground: bool = False
    invulnerability: int = 0        # ticks left
    power_up_time: int = 0          # ticks left
    speed_boost: float = 1.0
    jump_boost: float = 1.0
    color: Tuple[int, int, int] = PLAYER_COLORS[0]

    @property
    def invulnerable(self) -> bool:
        return self.invulnerability > 0

    def update(self, inputs: InputState, platforms: List[Platform], audio=None) -> bool:
        """One tick of input, gravity, integration and platform resolution.
        Returns True when a jump started this tick."""
        self.vx = 0.0
        if inputs.left:
            self.vx = -self.speed * self.speed_boost
        if inputs.right:
            self.vx = self.speed * self.speed_boost

        jumped = False
        if inputs.jump and self.on_ground:
            self.vy = -self.jump_power * self.jump_boost
            self.on_ground = False
            jumped = True
            if audio is not None:
                audio.on_jump()

        self.vy += GRAVITY
        self.x += self.vx
        self.y += self.vy

        self.on_ground = False
        for plat in platforms:
            self._resolve(plat)

        if self.power_up_time > 0:
            self.power_up_time -= 1
            if self.power_up_time <= 0:
                self.speed_boost = 1.0
                self.jump_boost = 1.0

        if self.invulnerability > 0:
            self.invulnerability -= 1
        return jumped

    def _resolve(self, plat: Platform):
        if not overlaps(self, plat):
            return
        if self.vy > 0 and self.y < plat.y:
            # landing on top
            self.y = plat.y - self.height
            self.vy = 0.0
            self.on_ground = True
        elif self.vy < 0 and self.y > plat.y:
            # head bump from below
            self.y = plat.y + plat.height
            self.vy = 0.0
        elif self.vx > 0:
            self.x = plat.x - self.width
        elif self.vx < 0:
            self.x = plat.x + plat.width

    def respawn(self):
        self.x = float(PLAYER_START_X)
        self.y = float(PLAYER_START_Y)
        self.vx = 0.0
        self.vy = 0.0
        self.invulnerability = RESPAWN_INVULN_TICKS

    def apply_power_up(self, kind: str):
        """Restart the shared power-up timer and set the boost for `kind`.
        The other boost is left as it is."""
        if kind not in PICKUP_KINDS:
            raise ValueError(f"Unknown power-up kind: {kind!r}")
        self.power_up_time = POWERUP_TICKS
        if kind == "speed":
            self.speed_boost = SPEED_BOOST
        else:
            self.jump_boost = JUMP_BOOST


def make_player(color_index: int = 0, start: Optional[Tuple[float, float]] = None) -> Player:
    x, y = start if start is not None else (PLAYER_START_X, PLAYER_START_Y)
    return Player(x=float(x), y=float(y), color=PLAYER_COLORS[color_index % len(PLAYER_COLORS)])
