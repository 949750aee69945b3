from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

import logging
import math

from chartpane.context import PaneContext
from chartpane.scales import AxisBounds
from chartpane.series import SeriesExtent
from chartpane.stacking import StackValueResolver

if TYPE_CHECKING:
    from chartpane.series import Series


LOGGER = logging.getLogger(__name__)


@dataclass
class _Accumulator:
    vmin: float = math.inf
    vmax: float = -math.inf

    @property
    def has_data(self) -> bool:
        return self.vmin < math.inf and self.vmax > -math.inf

    def fold(self, vmin: float, vmax: float) -> None:
        if vmin < self.vmin:
            self.vmin = vmin
        if vmax > self.vmax:
            self.vmax = vmax


def _stack_extent(curves: Sequence["Series"], series: "Series", context: PaneContext) -> SeriesExtent:
    resolver = StackValueResolver(context)
    base_acc = _Accumulator()
    value_acc = _Accumulator()
    for i in range(series.npts):
        values = resolver.resolve(curves, series, i)
        if not values.is_valid:
            continue
        base_acc.fold(values.base, values.base)
        value_acc.fold(min(values.low, values.high), max(values.low, values.high))
    if series.is_bar and context.bar_base == "y":
        return SeriesExtent(xmin=value_acc.vmin, xmax=value_acc.vmax, ymin=base_acc.vmin, ymax=base_acc.vmax)
    return SeriesExtent(xmin=base_acc.vmin, xmax=base_acc.vmax, ymin=value_acc.vmin, ymax=value_acc.vmax)


def _include_zero(vmin: float, vmax: float) -> tuple[float, float]:
    # An empty value extent (inf sentinels) collapses to [0, 0].
    return min(vmin, 0.0), max(vmax, 0.0)


def series_extent(
    curves: Sequence["Series"],
    series: "Series",
    ignore_initial: bool,
    context: PaneContext,
) -> SeriesExtent:
    """Extent of one series after stacking, ordinal and bar adjustments."""
    if series.npts == 0:
        return SeriesExtent()
    if series.is_stacked(context):
        extent = _stack_extent(curves, series, context)
    else:
        extent = series.get_range(ignore_initial)
    xmin, xmax, ymin, ymax = extent.xmin, extent.xmax, extent.ymin, extent.ymax

    is_x_ord = context.is_x_ordinal()
    is_y_ord = context.is_y_ordinal(series.is_y2_axis)
    if is_y_ord:
        ymin, ymax = 1.0, float(series.npts)
    if is_x_ord:
        xmin, xmax = 1.0, float(series.npts)

    if series.is_bar:
        half_cluster = context.cluster_scale_width / 2.0
        if context.bar_base == "x":
            ymin, ymax = _include_zero(ymin, ymax)
            if xmin <= xmax and not is_x_ord:
                xmin -= half_cluster
                xmax += half_cluster
        else:
            xmin, xmax = _include_zero(xmin, xmax)
            if ymin <= ymax and not is_y_ord:
                ymin -= half_cluster
                ymax += half_cluster

    return SeriesExtent(xmin=xmin, xmax=xmax, ymin=ymin, ymax=ymax)


def compute_range(
    curves: Sequence["Series"],
    ignore_initial: bool = False,
    context: PaneContext | None = None,
) -> AxisBounds:
    """Fold every series extent into X, Y and Y2 bounds.

    Axes that received no data fall back to ``[0, 1]``, except that an empty Y
    (or Y2) axis borrows the bounds of the other value axis when it has data.
    """
    if context is None:
        context = PaneContext()
    x_acc = _Accumulator()
    y_acc = _Accumulator()
    y2_acc = _Accumulator()
    max_pts = 1

    for series in curves:
        extent = series_extent(curves, series, ignore_initial, context)
        if series.npts > max_pts:
            max_pts = series.npts
        # Axes are folded independently: leading zeros skipped by ignore_initial
        # can leave a series with X data but no Y data.
        if extent.has_y:
            value_acc = y2_acc if series.is_y2_axis else y_acc
            value_acc.fold(extent.ymin, extent.ymax)
        if extent.has_x:
            x_acc.fold(extent.xmin, extent.xmax)

    if not x_acc.has_data:
        LOGGER.debug("no X data in %d series; using default range", len(curves))
        x_acc = _Accumulator(0.0, 1.0)

    y_has, y2_has = y_acc.has_data, y2_acc.has_data
    if not y_has:
        if y2_has:
            LOGGER.debug("Y axis has no data; borrowing Y2 range")
            y_acc = _Accumulator(y2_acc.vmin, y2_acc.vmax)
        else:
            y_acc = _Accumulator(0.0, 1.0)
    if not y2_has:
        if y_has:
            LOGGER.debug("Y2 axis has no data; borrowing Y range")
        y2_acc = _Accumulator(y_acc.vmin, y_acc.vmax)

    return AxisBounds(
        xmin=x_acc.vmin,
        xmax=x_acc.vmax,
        ymin=y_acc.vmin,
        ymax=y_acc.vmax,
        y2min=y2_acc.vmin,
        y2max=y2_acc.vmax,
        max_pts=max_pts,
    )
