from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal, get_args

import numpy as np

from chartpane.context import BarBase, PaneContext
from chartpane.errors import ChartDataError
from chartpane import render

if TYPE_CHECKING:
    from chartpane.pane import Pane


SeriesKind = Literal["bar", "line", "pie", "other"]
_SERIES_KINDS = frozenset(get_args(SeriesKind))

RGBA = tuple[int, int, int, int]


@dataclass(frozen=True, eq=False)
class SeriesData:
    x: np.ndarray
    y: np.ndarray
    source_name: str | None = None

    @property
    def mask(self) -> np.ndarray:
        # Recomputed on access so in-place edits to x/y stay consistent.
        return np.isfinite(self.x) & np.isfinite(self.y)


@dataclass(frozen=True)
class SeriesStyle:
    color: RGBA = (62, 149, 255, 255)
    line_width: int = 1
    marker_size: int = 0


@dataclass(frozen=True)
class SeriesCaps:
    is_bar: bool
    is_pie: bool
    is_line: bool
    is_y2_axis: bool


@dataclass(frozen=True)
class SeriesExtent:
    xmin: float = np.inf
    xmax: float = -np.inf
    ymin: float = np.inf
    ymax: float = -np.inf

    @property
    def has_x(self) -> bool:
        return self.xmin <= self.xmax

    @property
    def has_y(self) -> bool:
        return self.ymin <= self.ymax


@dataclass(eq=False)
class Series:
    data: SeriesData
    kind: SeriesKind = "line"
    style: SeriesStyle = field(default_factory=SeriesStyle)
    label: str = ""
    tag: Any = None
    is_y2_axis: bool = False

    def __post_init__(self) -> None:
        if self.kind not in _SERIES_KINDS:
            raise ChartDataError(f"unsupported series kind: {self.kind!r}")
        if self.data.x.shape != self.data.y.shape:
            raise ChartDataError(f"x and y length mismatch: {self.data.x.size} != {self.data.y.size}")

    @property
    def npts(self) -> int:
        return int(self.data.y.size)

    @property
    def is_bar(self) -> bool:
        return self.kind == "bar"

    @property
    def is_pie(self) -> bool:
        return self.kind == "pie"

    @property
    def is_line(self) -> bool:
        return self.kind == "line"

    @property
    def caps(self) -> SeriesCaps:
        return SeriesCaps(
            is_bar=self.is_bar,
            is_pie=self.is_pie,
            is_line=self.is_line,
            is_y2_axis=self.is_y2_axis,
        )

    def is_stacked(self, context: PaneContext) -> bool:
        if self.is_bar:
            return context.is_bar_stacked
        if self.is_line:
            return context.is_line_stacked
        return False

    def base_value_at(self, index: int, bar_base: BarBase) -> float:
        """Value on the base (category) axis; only Y-based bars use y."""
        if index < 0 or index >= self.npts:
            return np.nan
        if self.is_bar and bar_base == "y":
            return float(self.data.y[index])
        return float(self.data.x[index])

    def value_at(self, index: int, bar_base: BarBase) -> float:
        """Value on the value axis, NaN when the point is missing or out of range."""
        if index < 0 or index >= self.npts:
            return np.nan
        x = float(self.data.x[index])
        y = float(self.data.y[index])
        if not (np.isfinite(x) and np.isfinite(y)):
            return np.nan
        if self.is_bar and bar_base == "y":
            return x
        return y

    def get_range(self, ignore_initial: bool = False) -> SeriesExtent:
        """Min/max of the valid points.

        With ``ignore_initial`` the leading points whose y is exactly zero do not
        count toward the Y extent; their x values still do.
        """
        mask = self.data.mask
        if not np.any(mask):
            return SeriesExtent()
        xs = self.data.x[mask]
        ys = self.data.y[mask]
        if ignore_initial:
            nonzero = np.flatnonzero(ys != 0.0)
            ys = ys[int(nonzero[0]) :] if nonzero.size else ys[:0]
        if ys.size == 0:
            return SeriesExtent(xmin=float(np.min(xs)), xmax=float(np.max(xs)))
        return SeriesExtent(
            xmin=float(np.min(xs)),
            xmax=float(np.max(xs)),
            ymin=float(np.min(ys)),
            ymax=float(np.max(ys)),
        )

    def copy(self) -> "Series":
        return copy.deepcopy(self)

    def draw(self, canvas: np.ndarray, pane: "Pane", pos: int, scale_factor: float) -> None:
        render.draw_series(canvas, self, pane, pos, scale_factor)

    def draw_single_bar(self, canvas: np.ndarray, pane: "Pane", index: int, scale_factor: float) -> None:
        render.draw_bar(canvas, self, pane, index, pos=0, scale_factor=scale_factor, overlay=True)
