from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Literal, overload

import math

import numpy as np

from chartpane.context import PaneContext
from chartpane.errors import ChartDataError
from chartpane.ranges import compute_range
from chartpane.scales import AxisBounds
from chartpane.scheduling import DrawOp, schedule_draw
from chartpane.series import Series

if TYPE_CHECKING:
    from chartpane.pane import Pane


SortType = Literal["x", "y"]


class CurveList:
    """Ordered series collection of a pane.

    Order matters: earlier series draw on top and stacked series accumulate on
    the ones before them.
    """

    def __init__(self, curves: list[Series] | None = None) -> None:
        self._curves: list[Series] = list(curves) if curves is not None else []
        self._max_pts = 1

    def __len__(self) -> int:
        return len(self._curves)

    def __iter__(self) -> Iterator[Series]:
        return iter(self._curves)

    def __reversed__(self) -> Iterator[Series]:
        return reversed(self._curves)

    @overload
    def __getitem__(self, key: int) -> Series: ...

    @overload
    def __getitem__(self, key: str) -> Series | None: ...

    def __getitem__(self, key: int | str) -> Series | None:
        if isinstance(key, str):
            index = self.index_of(key)
            return self._curves[index] if index >= 0 else None
        return self._curves[key]

    def __setitem__(self, index: int, series: Series) -> None:
        self._curves[index] = series

    @property
    def max_pts(self) -> int:
        return self._max_pts

    @property
    def num_bars(self) -> int:
        return sum(1 for s in self._curves if s.is_bar)

    @property
    def num_pies(self) -> int:
        return sum(1 for s in self._curves if s.is_pie)

    @property
    def is_pie_only(self) -> bool:
        return all(s.is_pie for s in self._curves)

    def has_data(self) -> bool:
        return any(s.npts > 0 for s in self._curves)

    def add(self, series: Series) -> "CurveList":
        self._curves.append(series)
        return self

    def insert(self, index: int, series: Series) -> "CurveList":
        self._curves.insert(index, series)
        return self

    def remove(self, series: Series) -> "CurveList":
        self._curves.remove(series)
        return self

    def index_of(self, label: str) -> int:
        wanted = label.casefold()
        for i, series in enumerate(self._curves):
            if series.label.casefold() == wanted:
                return i
        return -1

    def index_of_tag(self, tag: str) -> int:
        wanted = tag.casefold()
        for i, series in enumerate(self._curves):
            if isinstance(series.tag, str) and series.tag.casefold() == wanted:
                return i
        return -1

    def sort(self, sort_type: SortType, index: int) -> "CurveList":
        if sort_type not in {"x", "y"}:
            raise ChartDataError(f"unsupported sort type: {sort_type!r}")

        def key(series: Series) -> float:
            if index < 0 or index >= series.npts:
                return -math.inf
            value = float(series.data.x[index] if sort_type == "x" else series.data.y[index])
            return value if np.isfinite(value) else -math.inf

        self._curves.sort(key=key)
        return self

    def copy(self) -> "CurveList":
        clone = CurveList([s.copy() for s in self._curves])
        clone._max_pts = self._max_pts
        return clone

    def get_range(self, ignore_initial: bool = False, context: PaneContext | None = None) -> AxisBounds:
        bounds = compute_range(self, ignore_initial, context)
        self._max_pts = bounds.max_pts
        return bounds

    def schedule(self, context: PaneContext) -> list[DrawOp]:
        return schedule_draw(self, context)

    def draw(self, canvas: np.ndarray, pane: "Pane", scale_factor: float) -> None:
        for op in self.schedule(pane.context):
            if op.point_index is None:
                op.series.draw(canvas, pane, op.position, scale_factor)
            else:
                op.series.draw_single_bar(canvas, pane, op.point_index, scale_factor)
