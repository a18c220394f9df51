# src/game/level.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from .config import (
    MAX_LEVEL, HAZARD_BASE_SPEED, HAZARD_LEVEL_RAMP, DIFFICULTY_SPEED,
)
from .entities import Platform, Marker, Hazard, Pickup

log = logging.getLogger(__name__)

# Ground slabs, always present: (x, y, w, h)
GROUND = (
    (0, 350, 200, 50),
    (250, 350, 150, 50),
    (450, 350, 200, 50),
    (700, 350, 100, 50),
)

# Platforms unlocked at each level, cumulative.
# Static: (x, y, w, h); moving: (x, y, w, h, min_x, max_x)
PLATFORMS_BY_LEVEL: Dict[int, Tuple[tuple, ...]] = {
    1: ((150, 280, 100, 20), (300, 220, 100, 20), (500, 180, 100, 20)),
    2: ((650, 250, 80, 20), (400, 120, 80, 20, 300, 500)),
    3: ((100, 200, 60, 20), (600, 150, 60, 20), (200, 100, 60, 20, 150, 350)),
    4: ((350, 100, 50, 20), (750, 200, 50, 20), (500, 80, 50, 20, 450, 650)),
    5: ((50, 150, 40, 20), (720, 100, 40, 20),
        (300, 50, 40, 20, 250, 450), (600, 300, 40, 20, 550, 750)),
}

# Exactly three flags per level: (x, y, value)
MARKERS_BY_LEVEL: Dict[int, Tuple[Tuple[int, int, int], ...]] = {
    1: ((180, 240, 1), (530, 140, 2), (680, 210, 3)),
    2: ((130, 240, 1), (430, 80, 2), (680, 210, 3)),
    3: ((130, 160, 1), (230, 60, 2), (630, 110, 3)),
    4: ((380, 60, 1), (530, 40, 2), (780, 160, 3)),
    5: ((80, 110, 1), (330, 10, 2), (750, 60, 3)),
}

# Hazards unlocked at each level, cumulative.
# Patrol: (x, y, "patrol", min_x, max_x); jumper: (x, y, "jump")
HAZARDS_BY_LEVEL: Dict[int, Tuple[tuple, ...]] = {
    1: ((280, 320, "patrol", 250, 380), (520, 320, "patrol", 450, 620)),
    2: ((330, 180, "jump"), (650, 250, "patrol", 600, 750)),
    3: ((150, 250, "patrol", 100, 200), (400, 100, "jump")),
    4: ((500, 180, "jump"), (700, 320, "patrol", 650, 780), (200, 100, "patrol", 150, 300)),
    5: ((100, 320, "patrol", 50, 150), (600, 100, "jump"), (450, 250, "patrol", 400, 550)),
}

# Same two power-ups on every level
PICKUPS = ((350, 180, "speed"), (750, 310, "jump"))


@dataclass
class LevelLayout:
    level: int
    difficulty: str
    platforms: List[Platform] = field(default_factory=list)
    markers: List[Marker] = field(default_factory=list)
    hazards: List[Hazard] = field(default_factory=list)
    pickups: List[Pickup] = field(default_factory=list)


def hazard_speed(level: int, difficulty: str) -> float:
    mult = DIFFICULTY_SPEED.get(difficulty, DIFFICULTY_SPEED["normal"])
    return HAZARD_BASE_SPEED * (1 + (level - 1) * HAZARD_LEVEL_RAMP) * mult


def _make_platform(row: tuple) -> Platform:
    if len(row) == 6:
        x, y, w, h, min_x, max_x = row
        return Platform.moving(x, y, w, h, min_x, max_x)
    x, y, w, h = row
    return Platform(x, y, w, h)


def _make_hazard(row: tuple, speed: float) -> Hazard:
    if row[2] == "patrol":
        x, y, kind, min_x, max_x = row
        return Hazard(x, y, kind=kind, min_x=min_x, max_x=max_x, speed=speed)
    x, y, kind = row
    return Hazard(x, y, kind=kind, speed=speed)


def build_level(level: int, difficulty: str = "normal") -> LevelLayout:
    """
    Build the layout for `level` (1..MAX_LEVEL). Pure: every call returns fresh
    entities and the same inputs always give equal layouts.
    Out-of-range levels fall back to level 1.
    """
    if not (isinstance(level, int) and 1 <= level <= MAX_LEVEL):
        log.warning("Level %r out of range, using level 1 layout", level)
        level = 1
    if difficulty not in DIFFICULTY_SPEED:
        log.warning("Unknown difficulty %r, using 'normal'", difficulty)
        difficulty = "normal"

    layout = LevelLayout(level=level, difficulty=difficulty)
    layout.platforms = [Platform(x, y, w, h, ground=True) for (x, y, w, h) in GROUND]
    speed = hazard_speed(level, difficulty)
    for lv in range(1, level + 1):
        layout.platforms.extend(_make_platform(p) for p in PLATFORMS_BY_LEVEL[lv])
        layout.hazards.extend(_make_hazard(h, speed) for h in HAZARDS_BY_LEVEL[lv])

    layout.markers = [Marker(x, y, value=v) for (x, y, v) in MARKERS_BY_LEVEL[level]]
    layout.pickups = [Pickup(x, y, kind=k) for (x, y, k) in PICKUPS]
    return layout
