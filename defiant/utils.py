"""
Geometry and math helpers shared by the simulation
"""

from __future__ import annotations
import math
from typing import Tuple

ISO_ANGLE = math.pi / 6  # 30 degrees
_ISO_COS = math.cos(ISO_ANGLE)
_ISO_SIN = math.sin(ISO_ANGLE)


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points"""
    return math.hypot(x1 - x2, y1 - y2)


def normalize(x: float, y: float, eps: float = 1e-8) -> Tuple[float, float]:
    """Normalize a vector to unit length"""
    l = math.hypot(x, y)
    if l < eps:
        return 0.0, 0.0
    return x / l, y / l


def circle_collide(x1, y1, r1, x2, y2, r2) -> bool:
    """Check if two circles overlap (strictly closer than the summed radii)"""
    dx = x1 - x2
    dy = y1 - y2
    rr = r1 + r2
    return (dx * dx + dy * dy) < (rr * rr)


def wrap_angle(angle: float) -> float:
    """Wrap an angle difference into [-pi, pi]"""
    while angle > math.pi:
        angle -= math.pi * 2
    while angle < -math.pi:
        angle += math.pi * 2
    return angle


def turn_toward(current: float, target: float, max_step: float) -> float:
    """Rotate `current` toward `target` along the shortest arc, at most `max_step` radians"""
    diff = wrap_angle(target - current)
    return current + math.copysign(min(abs(diff), max_step), diff) if diff else current


def to_iso(x: float, y: float) -> Tuple[float, float]:
    """Project world coordinates onto the isometric plane"""
    return (x - y) * _ISO_COS, (x + y) * _ISO_SIN


def world_to_screen(
    wx: float,
    wy: float,
    camera_x: float,
    camera_y: float,
    view_w: float,
    view_h: float,
) -> Tuple[float, float]:
    """Screen position (top-left origin) of a world point for the given camera"""
    ix, iy = to_iso(wx, wy)
    return ix - camera_x + view_w / 2, iy - camera_y + view_h / 2
