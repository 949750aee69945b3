from __future__ import annotations

from typing import TYPE_CHECKING

import logging

import numpy as np

from chartpane.raster import draw_filled_rect, draw_markers, draw_polyline
from chartpane.scales import map_to_pixels
from chartpane.stacking import resolve_stack_values

if TYPE_CHECKING:
    from chartpane.pane import Pane
    from chartpane.series import Series


LOGGER = logging.getLogger(__name__)


def _contiguous_true_runs(mask: np.ndarray) -> list[tuple[int, int]]:
    idx = np.flatnonzero(mask)
    if idx.size == 0:
        return []
    breaks = np.flatnonzero(np.diff(idx) > 1)
    starts = np.concatenate(([idx[0]], idx[breaks + 1]))
    ends = np.concatenate((idx[breaks] + 1, [idx[-1] + 1]))
    return [(int(s), int(e)) for s, e in zip(starts, ends, strict=True)]


def bar_slot(pane: "Pane", pos: int, *, overlay: bool) -> tuple[float, float]:
    """Offset and width of one bar inside its cluster, in scale units."""
    context = pane.context
    filled = context.cluster_scale_width * context.bar_fill_ratio
    if overlay or context.bar_type != "cluster":
        return (-filled / 2.0, filled)
    count = max(1, pane.curves.num_bars)
    width = filled / count
    return (-filled / 2.0 + pos * width, width)


def draw_bar(
    canvas: np.ndarray,
    series: "Series",
    pane: "Pane",
    index: int,
    *,
    pos: int,
    scale_factor: float,
    overlay: bool = False,
) -> None:
    context = pane.context
    values = resolve_stack_values(pane.curves, series, index, context)
    if not values.is_valid:
        return
    base = float(index + 1) if context.is_base_ordinal(series.is_y2_axis) else values.base
    offset, width = bar_slot(pane, pos, overlay=overlay)
    edge_a, edge_b = base + offset, base + offset + width
    transform = pane.active_transform
    if context.bar_base == "x":
        px, py = map_to_pixels(
            np.asarray([edge_a, edge_b]), np.asarray([values.low, values.high]), transform, is_y2=series.is_y2_axis
        )
    else:
        px, py = map_to_pixels(
            np.asarray([values.low, values.high]), np.asarray([edge_a, edge_b]), transform, is_y2=series.is_y2_axis
        )
    x0, x1 = int(px[0]), int(px[1])
    y0, y1 = int(py[0]), int(py[1])
    if x0 == x1:
        x1 = x0 + 1
    draw_filled_rect(canvas, x0, y0, x1, y1, series.style.color)


def draw_series(canvas: np.ndarray, series: "Series", pane: "Pane", pos: int, scale_factor: float) -> None:
    if series.npts == 0:
        return
    if series.is_pie:
        LOGGER.debug("raster renderer has no pie geometry; skipping series %r", series.label)
        return
    if series.is_bar:
        for i in range(series.npts):
            draw_bar(canvas, series, pane, i, pos=pos, scale_factor=scale_factor)
        return

    context = pane.context
    xs = series.data.x.copy()
    ys = series.data.y.copy()
    if context.is_x_ordinal():
        xs = np.arange(1, series.npts + 1, dtype=np.float64)
    if series.is_stacked(context):
        for i in range(series.npts):
            values = resolve_stack_values(pane.curves, series, i, context)
            ys[i] = values.high if values.is_valid else np.nan

    mask = np.isfinite(xs) & np.isfinite(ys)
    if not np.any(mask):
        return
    transform = pane.active_transform
    color = series.style.color
    if series.is_line:
        line_width = max(1, int(round(series.style.line_width * scale_factor)))
        for start, end in _contiguous_true_runs(mask):
            px, py = map_to_pixels(xs[start:end], ys[start:end], transform, is_y2=series.is_y2_axis)
            draw_polyline(canvas, px, py, color, width=line_width)
    marker_size = series.style.marker_size if series.is_line else max(2, series.style.marker_size)
    if marker_size > 0:
        px, py = map_to_pixels(xs[mask], ys[mask], transform, is_y2=series.is_y2_axis)
        draw_markers(canvas, px, py, color, size=max(1, int(round(marker_size * scale_factor))))
