from __future__ import annotations

import math

import numpy as np

from chartpane.raster.canvas import RGBA, draw_filled_rect


def draw_polyline(dst: np.ndarray, xs: np.ndarray, ys: np.ndarray, color: RGBA, width: int = 1) -> None:
    for i in range(xs.size - 1):
        draw_segment(dst, int(xs[i]), int(ys[i]), int(xs[i + 1]), int(ys[i + 1]), color, width=width)


def draw_segment(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, *, width: int = 1) -> None:
    # Bresenham walk stamping a square brush per step.
    radius = max(0, width // 2)
    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    while True:
        draw_filled_rect(dst, x0 - radius, y0 - radius, x0 + radius, y0 + radius, color)
        if x0 == x1 and y0 == y1:
            return
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def draw_markers(dst: np.ndarray, xs: np.ndarray, ys: np.ndarray, color: RGBA, size: int = 1) -> None:
    radius = max(0, size // 2)
    for x, y in zip(xs.tolist(), ys.tolist(), strict=False):
        draw_filled_rect(dst, int(x) - radius, int(y) - radius, int(x) + radius, int(y) + radius, color)


def draw_arrow_head(
    dst: np.ndarray,
    tail: tuple[int, int],
    tip: tuple[int, int],
    color: RGBA,
    *,
    size: float,
    width: int = 1,
) -> None:
    """Two barbs at ``tip`` pointing back toward ``tail``."""
    dx = tip[0] - tail[0]
    dy = tip[1] - tail[1]
    if dx == 0 and dy == 0:
        return
    angle = math.atan2(dy, dx)
    for offset in (math.pi * 5.0 / 6.0, -math.pi * 5.0 / 6.0):
        bx = int(round(tip[0] + size * math.cos(angle + offset)))
        by = int(round(tip[1] + size * math.sin(angle + offset)))
        draw_segment(dst, tip[0], tip[1], bx, by, color, width=width)


def distance_to_segment(px: float, py: float, x0: float, y0: float, x1: float, y1: float) -> float:
    vx, vy = x1 - x0, y1 - y0
    length_sq = vx * vx + vy * vy
    if length_sq == 0:
        return math.hypot(px - x0, py - y0)
    t = max(0.0, min(1.0, ((px - x0) * vx + (py - y0) * vy) / length_sq))
    return math.hypot(px - (x0 + t * vx), py - (y0 + t * vy))
