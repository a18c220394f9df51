# src/game/geometry.py
from __future__ import annotations
import pygame


def overlaps(a, b) -> bool:
    """Strict AABB intersection on both axes (touching edges do not count)."""
    return (a.x < b.x + b.width and
            a.x + a.width > b.x and
            a.y < b.y + b.height and
            a.y + a.height > b.y)


def center(obj) -> tuple[float, float]:
    return obj.x + obj.width / 2, obj.y + obj.height / 2


def to_rect(obj, camera_x: float = 0.0) -> pygame.Rect:
    """Screen-space pygame.Rect for drawing (world x shifted by the camera)."""
    return pygame.Rect(int(obj.x - camera_x), int(obj.y), int(obj.width), int(obj.height))
