from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from chartpane.adapters import normalize_xy
from chartpane.context import PaneContext
from chartpane.curves import CurveList
from chartpane.errors import ChartDataError
from chartpane.overlays import ItemList
from chartpane.raster import draw_hline, draw_vline, new_canvas
from chartpane.scales import AxisBounds, PaneTransform, build_transform
from chartpane.series import Series, SeriesKind, SeriesStyle


def _coerce_color(color: tuple[int, int, int] | tuple[int, int, int, int], alpha: float) -> tuple[int, int, int, int]:
    alpha = max(0.0, min(1.0, alpha))
    if len(color) == 3:
        r, g, b = color
        return (r, g, b, int(alpha * 255))
    r, g, b, a = color
    return (r, g, b, int(alpha * a))


@dataclass
class Pane:
    width: int = 640
    height: int = 480
    context: PaneContext = field(default_factory=PaneContext)
    curves: CurveList = field(default_factory=CurveList)
    items: ItemList = field(default_factory=ItemList)
    ignore_initial: bool = False

    background: tuple[int, int, int, int] = (255, 255, 255, 255)
    plot_bg_color: tuple[int, int, int, int] = (245, 247, 250, 255)
    axis_color: tuple[int, int, int, int] = (90, 98, 110, 255)

    # plot region gutters
    _gutter_left: int = field(default=48, init=False, repr=False, compare=False)
    _gutter_right: int = field(default=48, init=False, repr=False, compare=False)
    _gutter_top: int = field(default=24, init=False, repr=False, compare=False)
    _gutter_bottom: int = field(default=32, init=False, repr=False, compare=False)

    _transform: PaneTransform | None = field(default=None, init=False, repr=False, compare=False)
    _last_bounds: AxisBounds | None = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ChartDataError("width and height must be > 0")

    def _add(
        self,
        kind: SeriesKind,
        y: Any,
        *,
        x: Any,
        data: Any,
        label: str,
        color: tuple[int, int, int] | tuple[int, int, int, int],
        alpha: float,
        line_width: int = 1,
        marker_size: int = 0,
        is_y2_axis: bool = False,
        tag: Any = None,
    ) -> Series:
        style = SeriesStyle(color=_coerce_color(color, alpha), line_width=max(1, line_width), marker_size=max(0, marker_size))
        series = Series(
            data=normalize_xy(y=y, x=x, data=data, source_name=label or None),
            kind=kind,
            style=style,
            label=label,
            tag=tag,
            is_y2_axis=is_y2_axis,
        )
        self.curves.add(series)
        self._transform = None
        return series

    def add_bar(
        self,
        y: Any = None,
        *,
        x: Any = None,
        data: Any = None,
        label: str = "",
        color: tuple[int, int, int] | tuple[int, int, int, int] = (110, 169, 255),
        alpha: float = 1.0,
        is_y2_axis: bool = False,
        tag: Any = None,
    ) -> Series:
        return self._add("bar", y, x=x, data=data, label=label, color=color, alpha=alpha, is_y2_axis=is_y2_axis, tag=tag)

    def add_line(
        self,
        y: Any = None,
        *,
        x: Any = None,
        data: Any = None,
        label: str = "",
        color: tuple[int, int, int] | tuple[int, int, int, int] = (255, 165, 0),
        width: int = 1,
        marker_size: int = 0,
        alpha: float = 1.0,
        is_y2_axis: bool = False,
        tag: Any = None,
    ) -> Series:
        return self._add(
            "line",
            y,
            x=x,
            data=data,
            label=label,
            color=color,
            alpha=alpha,
            line_width=width,
            marker_size=marker_size,
            is_y2_axis=is_y2_axis,
            tag=tag,
        )

    def add_scatter(
        self,
        y: Any = None,
        *,
        x: Any = None,
        data: Any = None,
        label: str = "",
        color: tuple[int, int, int] | tuple[int, int, int, int] = (62, 149, 255),
        size: int = 3,
        alpha: float = 1.0,
        is_y2_axis: bool = False,
        tag: Any = None,
    ) -> Series:
        return self._add(
            "other",
            y,
            x=x,
            data=data,
            label=label,
            color=color,
            alpha=alpha,
            marker_size=size,
            is_y2_axis=is_y2_axis,
            tag=tag,
        )

    def add_pie(self, value: float, *, label: str = "", tag: Any = None) -> Series:
        return self._add("pie", [value], x=None, data=None, label=label, color=(200, 200, 200), alpha=1.0, tag=tag)

    def compute_range(self) -> AxisBounds:
        self._last_bounds = self.curves.get_range(self.ignore_initial, self.context)
        return self._last_bounds

    def last_bounds(self) -> AxisBounds | None:
        return self._last_bounds

    def scale_factor(self) -> float:
        return float(max(0.5, min(3.0, min(self.width, self.height) / 720.0)))

    def plot_rect(self) -> tuple[int, int, int, int]:
        left = min(self._gutter_left, max(4, self.width // 4))
        right = min(self._gutter_right, max(4, self.width // 8))
        top = min(self._gutter_top, max(4, self.height // 5))
        bottom = min(self._gutter_bottom, max(4, self.height // 4))
        width = self.width - left - right
        height = self.height - top - bottom
        if width <= 1 or height <= 1:
            raise ChartDataError("pane too small for plotting viewport")
        return (left, top, width, height)

    def transform(self) -> PaneTransform:
        return build_transform(self.compute_range(), self.plot_rect())

    @property
    def active_transform(self) -> PaneTransform:
        """Transform of the last rendered frame.

        Recomputed on first use after an ``add_*`` helper; direct edits to
        ``curves`` keep the cached transform until the next ``render``.
        """
        if self._transform is None:
            self._transform = self.transform()
        return self._transform

    def render(self) -> np.ndarray:
        frame = new_canvas(self.width, self.height, color=self.background)
        self._transform = self.transform()
        x0, y0, w, h = self.plot_rect()
        frame[y0 : y0 + h, x0 : x0 + w] = np.asarray(self.plot_bg_color, dtype=np.uint8)

        scale_factor = self.scale_factor()
        self.curves.draw(frame, self, scale_factor)
        self.items.draw(frame, self, scale_factor)

        draw_hline(frame, x0, x0 + w - 1, y0 + h - 1, self.axis_color)
        draw_vline(frame, x0, y0, y0 + h - 1, self.axis_color)
        if any(s.is_y2_axis for s in self.curves):
            draw_vline(frame, x0 + w - 1, y0, y0 + h - 1, self.axis_color)
        return frame

    def find_item(self, pt: tuple[float, float]) -> tuple[bool, int]:
        return self.items.find_point(pt, self)

    def copy(self) -> "Pane":
        clone = copy.copy(self)
        clone.context = copy.deepcopy(self.context)
        clone.curves = self.curves.copy()
        clone.items = self.items.copy()
        clone._transform = None
        clone._last_bounds = None
        return clone
