# follow/geom.py
from __future__ import annotations
from typing import Tuple

Vec3 = Tuple[float, float, float]


def as_vec3(p) -> Vec3:
    """Coerce a 2- or 3-sequence into an (x, y, z) float tuple."""
    if len(p) == 2:
        return (float(p[0]), float(p[1]), 0.0)
    return (float(p[0]), float(p[1]), float(p[2]))


def sqr_dist(a: Vec3, b: Vec3) -> float:
    """Squared Euclidean distance between two world points."""
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    dz = a[2] - b[2]
    return dx * dx + dy * dy + dz * dz


def world_to_screen(p: Vec3, view: dict) -> Tuple[int, int]:
    """
    Project a world point top-down onto the window.
    World x grows right, world z grows up the screen; world y (height) is dropped.
    """
    ppu = view["pixels_per_unit"]
    return (int(round(view["origin_x"] + p[0] * ppu)),
            int(round(view["origin_y"] - p[2] * ppu)))


def screen_to_world(px, view: dict, height: float = 0.0) -> Vec3:
    """Inverse of world_to_screen on the plane y == height."""
    ppu = view["pixels_per_unit"] or 1.0
    x = (px[0] - view["origin_x"]) / ppu
    z = (view["origin_y"] - px[1]) / ppu
    return (x, float(height), z)
