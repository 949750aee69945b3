from __future__ import annotations

import numpy as np


RGBA = tuple[int, int, int, int]


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 255)) -> np.ndarray:
    canvas = np.empty((height, width, 4), dtype=np.uint8)
    canvas[:, :] = np.asarray(color, dtype=np.uint8)
    return canvas


def _blend(region: np.ndarray, color: RGBA) -> None:
    a = color[3] / 255.0
    src = np.asarray(color[:3], dtype=np.float32) * a
    region[..., :3] = (src + region[..., :3].astype(np.float32) * (1.0 - a)).astype(np.uint8)
    region[..., 3] = 255


def draw_filled_rect(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> None:
    """Blend an inclusive pixel rectangle, clipped to the canvas."""
    left = max(0, min(x0, x1))
    right = min(dst.shape[1] - 1, max(x0, x1))
    top = max(0, min(y0, y1))
    bottom = min(dst.shape[0] - 1, max(y0, y1))
    if right < left or bottom < top:
        return
    _blend(dst[top : bottom + 1, left : right + 1], color)


def draw_hline(dst: np.ndarray, x0: int, x1: int, y: int, color: RGBA) -> None:
    draw_filled_rect(dst, x0, y, x1, y, color)


def draw_vline(dst: np.ndarray, x: int, y0: int, y1: int, color: RGBA) -> None:
    draw_filled_rect(dst, x, y0, x, y1, color)


def draw_rect_outline(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, width: int = 1) -> None:
    left, right = min(x0, x1), max(x0, x1)
    top, bottom = min(y0, y1), max(y0, y1)
    w = max(1, width)
    draw_filled_rect(dst, left, top, right, min(bottom, top + w - 1), color)
    draw_filled_rect(dst, left, max(top, bottom - w + 1), right, bottom, color)
    # Side strokes skip the rows already covered so corners blend once.
    inner_top, inner_bottom = top + w, bottom - w
    if inner_top <= inner_bottom:
        draw_filled_rect(dst, left, inner_top, min(right, left + w - 1), inner_bottom, color)
        draw_filled_rect(dst, max(left, right - w + 1), inner_top, right, inner_bottom, color)
