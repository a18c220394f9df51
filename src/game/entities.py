# src/game/entities.py
from __future__ import annotations
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .config import (
    WORLD_WIDTH, GRAVITY, MOVING_PLATFORM_SPEED,
    MARKER_W, MARKER_H, HAZARD_W, HAZARD_H, HAZARD_BASE_SPEED,
    HAZARD_JUMP_PERIOD, HAZARD_JUMP_IMPULSE, PICKUP_W, PICKUP_H,
    EFFECT_LIFE, PARTICLE_GRAVITY, PARTICLE_SPREAD, POPUP_VY, COLOR_FLAG,
)
from .geometry import overlaps

PLATFORM_KINDS = ("static", "moving")
HAZARD_KINDS = ("patrol", "jump")
PICKUP_KINDS = ("speed", "jump")
EFFECT_KINDS = ("particle", "popup")

Color = Tuple[int, int, int]


def _bounce_between(x: float, width: float, min_x: float, max_x: float, direction: int) -> int:
    """Flip direction once the leading edge reaches either bound (checked after moving)."""
    if x <= min_x or x + width >= max_x:
        return -direction
    return direction


@dataclass
class Platform:
    x: float
    y: float
    width: float
    height: float
    kind: str = "static"        # "static" or "moving"
    min_x: float = 0.0
    max_x: float = 0.0
    speed: float = 0.0
    direction: int = 1          # +1 right, -1 left
    ground: bool = False        # cosmetic: ground slabs draw darker

    @classmethod
    def moving(cls, x: float, y: float, width: float, height: float,
               min_x: float, max_x: float) -> "Platform":
        return cls(x, y, width, height, kind="moving", min_x=min_x, max_x=max_x,
                   speed=MOVING_PLATFORM_SPEED, direction=1)

    @property
    def updatable(self) -> bool:
        return self.kind == "moving"

    def update(self):
        """Advance a moving platform one tick; static platforms never move."""
        if self.kind == "moving":
            self.x += self.speed * self.direction
            self.direction = _bounce_between(self.x, self.width, self.min_x, self.max_x, self.direction)


@dataclass
class Marker:
    x: float
    y: float
    value: int = 1              # 1..3, score is value * 100
    width: float = MARKER_W
    height: float = MARKER_H


@dataclass
class Pickup:
    x: float
    y: float
    kind: str = "speed"         # "speed" or "jump"
    width: float = PICKUP_W
    height: float = PICKUP_H


@dataclass
class Hazard:
    """
    Roaming enemy.
    - "patrol" walks between min_x and max_x
    - "jump" hops straight up every HAZARD_JUMP_PERIOD ticks while grounded
    Both fall under gravity and can only land on top of platforms.
    """
    x: float
    y: float
    kind: str = "patrol"
    min_x: float = 0.0
    max_x: float = float(WORLD_WIDTH)
    speed: float = HAZARD_BASE_SPEED
    direction: int = 1
    vy: float = 0.0
    jump_timer: int = 0
    on_ground: bool = False
    width: float = HAZARD_W
    height: float = HAZARD_H

    def update(self, platforms: List[Platform]):
        if self.kind == "patrol":
            self.x += self.speed * self.direction
            self.direction = _bounce_between(self.x, self.width, self.min_x, self.max_x, self.direction)
        elif self.kind == "jump":
            self.jump_timer += 1
            if self.jump_timer > HAZARD_JUMP_PERIOD and self.on_ground:
                self.vy = HAZARD_JUMP_IMPULSE
                self.jump_timer = 0
                self.on_ground = False

        self.vy += GRAVITY
        self.y += self.vy

        # Landing only; no side or underside resolution for hazards
        self.on_ground = False
        for plat in platforms:
            if overlaps(self, plat) and self.vy > 0 and self.y < plat.y:
                self.y = plat.y - self.height
                self.vy = 0.0
                self.on_ground = True


@dataclass
class Effect:
    """Particle or score popup. Both share the same decay rule; popups carry text."""
    x: float
    y: float
    vx: float
    vy: float
    kind: str = "particle"
    color: Color = COLOR_FLAG
    text: Optional[str] = None
    life: int = EFFECT_LIFE
    max_life: int = EFFECT_LIFE

    @property
    def alive(self) -> bool:
        return self.life > 0

    @property
    def alpha(self) -> float:
        return min(1.0, max(0.0, self.life / self.max_life))

    def update(self):
        self.x += self.vx
        self.y += self.vy
        self.vy += PARTICLE_GRAVITY
        self.life -= 1


def spawn_particles(rng: random.Random, x: float, y: float, color: Color, count: int) -> List[Effect]:
    out = []
    for _ in range(count):
        vx = (rng.random() - 0.5) * PARTICLE_SPREAD
        vy = (rng.random() - 0.5) * PARTICLE_SPREAD - 2
        out.append(Effect(x, y, vx, vy, kind="particle", color=color))
    return out


def score_popup(x: float, y: float, text: str) -> Effect:
    return Effect(x, y, 0.0, POPUP_VY, kind="popup", color=COLOR_FLAG, text=text)


def decay_effects(effects: List[Effect]) -> List[Effect]:
    """Advance every effect one tick and keep only the live ones."""
    kept = []
    for fx in effects:
        fx.update()
        if fx.alive:
            kept.append(fx)
    return kept
