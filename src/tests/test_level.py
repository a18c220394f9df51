# src/tests/test_level.py
"""
Level builder: fixed content, scaling with level/difficulty, purity.

Usage (from repo root):
  python -m src.tests.test_level
"""
from __future__ import annotations
import math

from src.game.level import build_level, hazard_speed

# (platforms, moving platforms, hazards, jump hazards) per level
EXPECTED_COUNTS = {
    1: (7, 0, 2, 0),
    2: (9, 1, 4, 1),
    3: (12, 2, 6, 2),
    4: (15, 3, 9, 3),
    5: (19, 5, 12, 4),
}


def test_build_is_deterministic_and_fresh():
    a = build_level(3, "hard")
    b = build_level(3, "hard")
    assert a == b
    assert a.platforms[0] is not b.platforms[0], "each build returns new entities"
    a.hazards[0].x += 50
    assert build_level(3, "hard") == b, "mutating one build leaves later builds untouched"


def test_every_level_has_three_markers_and_ground():
    for level in range(1, 6):
        layout = build_level(level)
        assert sorted(m.value for m in layout.markers) == [1, 2, 3]
        ground = [p for p in layout.platforms if p.ground]
        assert len(ground) == 4
        assert all(p.y == 350 and p.kind == "static" for p in ground)


def test_layout_grows_with_level():
    for level, (n_plat, n_moving, n_haz, n_jump) in EXPECTED_COUNTS.items():
        layout = build_level(level, "normal")
        assert len(layout.platforms) == n_plat, level
        assert sum(p.kind == "moving" for p in layout.platforms) == n_moving, level
        assert len(layout.hazards) == n_haz, level
        assert sum(h.kind == "jump" for h in layout.hazards) == n_jump, level


def test_pickups_do_not_depend_on_level():
    for level in range(1, 6):
        layout = build_level(level, "easy")
        assert [(p.x, p.y, p.kind) for p in layout.pickups] == [(350, 180, "speed"), (750, 310, "jump")]


def test_hazard_speed_scaling():
    assert math.isclose(hazard_speed(1, "normal"), 1.0)
    assert math.isclose(hazard_speed(1, "easy"), 0.8)
    assert math.isclose(hazard_speed(3, "hard"), 1.6 * 1.3)
    assert math.isclose(hazard_speed(5, "normal"), 2.2)
    layout = build_level(4, "easy")
    assert all(math.isclose(h.speed, 1.9 * 0.8) for h in layout.hazards)


def test_out_of_range_level_falls_back_to_level_one():
    ref = build_level(1, "normal")
    for bad in (0, 6, -3, 99):
        assert build_level(bad, "normal") == ref


def test_unknown_difficulty_falls_back_to_normal():
    assert build_level(2, "nightmare") == build_level(2, "normal")


def test_moving_platforms_carry_bounds():
    layout = build_level(2)
    mover = next(p for p in layout.platforms if p.kind == "moving")
    assert (mover.x, mover.y, mover.min_x, mover.max_x, mover.direction) == (400, 120, 300, 500, 1)


def main():
    for name, fn in list(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()
            print(f"✓ {name}")
    print("🎉 All selected tests passed")


if __name__ == "__main__":
    main()
