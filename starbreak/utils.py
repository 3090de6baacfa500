"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def within(x1: float, y1: float, x2: float, y2: float, radius: float) -> bool:
    """True if the two centers are strictly closer than radius"""
    dx = x1 - x2
    dy = y1 - y2
    return (dx * dx + dy * dy) < (radius * radius)


def approach(value: float, target: float, step: float) -> float:
    """Move value toward target by at most step"""
    if value < target:
        return min(value + step, target)
    if value > target:
        return max(value - step, target)
    return value


def rotate(x: float, y: float, angle: float):
    """Rotate a point around the origin (radians)"""
    c = math.cos(angle)
    s = math.sin(angle)
    return x * c - y * s, x * s + y * c
