from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

import math

from chartpane.context import PaneContext

if TYPE_CHECKING:
    from chartpane.series import Series


@dataclass(frozen=True)
class DrawOp:
    series: "Series"
    position: int
    # None draws the whole series; an index draws the single bar at that point.
    point_index: int | None = None


def max_point_count(curves: Sequence["Series"]) -> int:
    return max((s.npts for s in curves), default=1) or 1


def sorted_overlay_order(curves: Sequence["Series"], index: int, context: PaneContext) -> list["Series"]:
    """Bar series ordered by their value at ``index``, ascending; missing values first."""
    bars = [s for s in curves if s.is_bar]

    def key(series: "Series") -> float:
        value = series.value_at(index, context.bar_base)
        return value if math.isfinite(value) else -math.inf

    return sorted(bars, key=key)


def schedule_draw(curves: Sequence["Series"], context: PaneContext) -> list[DrawOp]:
    """Back-to-front draw operations for the collection.

    In sorted-overlay mode every ordinal position gets its own ascending bar
    order first. The remaining series follow in reverse collection order so the
    first series ends up on top; bars are numbered by cluster position as they
    are met.
    """
    ops: list[DrawOp] = []
    sorted_overlay = context.bar_type == "sorted_overlay"

    if sorted_overlay:
        for i in range(max_point_count(curves)):
            for series in sorted_overlay_order(curves, i, context):
                if i < series.npts:
                    ops.append(DrawOp(series=series, position=0, point_index=i))

    pos = sum(1 for s in curves if s.is_bar)
    for series in reversed(curves):
        if series.is_bar:
            pos -= 1
            if sorted_overlay:
                continue
        ops.append(DrawOp(series=series, position=pos))
    return ops
