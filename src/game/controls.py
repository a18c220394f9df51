# src/game/controls.py
from __future__ import annotations
from dataclasses import dataclass, fields
from typing import Mapping, Optional

import pygame

# Physical keys behind each logical key (first match wins)
KEYMAP = {
    "left": (pygame.K_LEFT, pygame.K_a),
    "right": (pygame.K_RIGHT, pygame.K_d),
    "jump": (pygame.K_SPACE,),
    "pause": (pygame.K_p,),
    "confirm": (pygame.K_RETURN, pygame.K_KP_ENTER),
    "cancel": (pygame.K_ESCAPE, pygame.K_m),
    "up": (pygame.K_UP, pygame.K_w),
    "down": (pygame.K_DOWN, pygame.K_s),
}


@dataclass(frozen=True)
class InputState:
    """
    Point-in-time snapshot of the logical keys, sampled once before each tick.
    The core never sees physical key codes.
    """
    left: bool = False
    right: bool = False
    jump: bool = False
    pause: bool = False
    confirm: bool = False
    cancel: bool = False
    up: bool = False
    down: bool = False

    @classmethod
    def from_mapping(cls, keys: Mapping[str, bool]) -> "InputState":
        known = {f.name for f in fields(cls)}
        unknown = set(keys) - known
        if unknown:
            raise ValueError(f"Unknown logical keys: {sorted(unknown)}")
        return cls(**{k: bool(v) for k, v in keys.items()})

    @classmethod
    def from_pygame(cls, pressed) -> "InputState":
        """Build from the sequence returned by pygame.key.get_pressed()."""
        return cls(**{name: any(pressed[code] for code in codes)
                      for name, codes in KEYMAP.items()})

    def pressed_since(self, previous: Optional["InputState"]) -> "InputState":
        """Rising edges: keys held now that were not held in `previous`."""
        if previous is None:
            return self
        return InputState(**{f.name: getattr(self, f.name) and not getattr(previous, f.name)
                             for f in fields(self)})


NO_INPUT = InputState()
