from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from chartpane.errors import ChartDataError


@dataclass(frozen=True)
class AxisBounds:
    xmin: float = 0.0
    xmax: float = 1.0
    ymin: float = 0.0
    ymax: float = 1.0
    y2min: float = 0.0
    y2max: float = 1.0
    max_pts: int = 1

    def as_tuple(self) -> tuple[float, float, float, float, float, float]:
        return (self.xmin, self.xmax, self.ymin, self.ymax, self.y2min, self.y2max)


@dataclass(frozen=True)
class PaneTransform:
    """Affine data-to-pixel mapping for the plot rectangle of a pane."""

    x0: int
    y0: int
    width: int
    height: int
    sx: float
    tx: float
    sy: float
    ty: float
    sy2: float
    ty2: float

    def x_to_px(self, x: np.ndarray | float) -> np.ndarray:
        return self.x0 + np.asarray(x, dtype=np.float64) * self.sx + self.tx

    def y_to_px(self, y: np.ndarray | float, *, is_y2: bool = False) -> np.ndarray:
        sy, ty = (self.sy2, self.ty2) if is_y2 else (self.sy, self.ty)
        # Pixel rows grow downward.
        return self.y0 + (self.height - 1) - (np.asarray(y, dtype=np.float64) * sy + ty)


def _axis_scale(vmin: float, vmax: float, pixels: int) -> tuple[float, float]:
    if vmax == vmin:
        vmin -= 0.5
        vmax += 0.5
    scale = (pixels - 1) / (vmax - vmin)
    return scale, -vmin * scale


def build_transform(bounds: AxisBounds, plot_rect: tuple[int, int, int, int]) -> PaneTransform:
    x0, y0, width, height = plot_rect
    if width <= 1 or height <= 1:
        raise ChartDataError("plot viewport width/height must be > 1")
    sx, tx = _axis_scale(bounds.xmin, bounds.xmax, width)
    sy, ty = _axis_scale(bounds.ymin, bounds.ymax, height)
    sy2, ty2 = _axis_scale(bounds.y2min, bounds.y2max, height)
    return PaneTransform(x0=x0, y0=y0, width=width, height=height, sx=sx, tx=tx, sy=sy, ty=ty, sy2=sy2, ty2=ty2)


def map_to_pixels(
    x: np.ndarray,
    y: np.ndarray,
    transform: PaneTransform,
    *,
    is_y2: bool = False,
) -> tuple[np.ndarray, np.ndarray]:
    px = np.rint(transform.x_to_px(x)).astype(np.int32)
    py = np.rint(transform.y_to_px(y, is_y2=is_y2)).astype(np.int32)
    return px, py
