from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

import math

from chartpane.context import PaneContext

if TYPE_CHECKING:
    from chartpane.series import Series


@dataclass(frozen=True)
class StackValues:
    base: float
    low: float
    high: float

    @property
    def is_valid(self) -> bool:
        return math.isfinite(self.base) and math.isfinite(self.low) and math.isfinite(self.high)


MISSING = StackValues(base=math.nan, low=math.nan, high=math.nan)


def resolve_stack_values(
    curves: Sequence["Series"],
    series: "Series",
    index: int,
    context: PaneContext,
) -> StackValues:
    """Base, low and high values of ``series`` at point ``index``.

    Stacked series accumulate the values of the series that precede them in
    ``curves`` at the same index. Bars keep separate positive and negative
    stacks; lines share one running sum. Preceding series that are too short,
    or missing a value at ``index``, add nothing.
    """
    bar_base = context.bar_base
    value = series.value_at(index, bar_base)
    base = series.base_value_at(index, bar_base)
    if not (math.isfinite(value) and math.isfinite(base)):
        return MISSING

    if not series.is_stacked(context):
        return StackValues(base=base, low=0.0, high=value)

    if series.is_line:
        return _resolve_line_stack(curves, series, index, context, base)
    return _resolve_bar_stack(curves, series, index, context, base)


def _resolve_bar_stack(
    curves: Sequence["Series"],
    series: "Series",
    index: int,
    context: PaneContext,
    base: float,
) -> StackValues:
    positive = 0.0
    negative = 0.0
    low = high = math.nan
    for other in curves:
        if not other.is_bar:
            continue
        cur = other.value_at(index, context.bar_base)
        if not math.isfinite(cur):
            continue
        if other is series:
            if cur >= 0:
                low, high = positive, positive + cur
            else:
                low, high = negative + cur, negative
        if cur >= 0:
            positive += cur
        else:
            negative += cur

    if not math.isfinite(low):
        # Target is not part of the collection; it stacks on nothing.
        cur = series.value_at(index, context.bar_base)
        low, high = (0.0, cur) if cur >= 0 else (cur, 0.0)
        positive, negative = max(cur, 0.0), min(cur, 0.0)

    if context.bar_type == "percent_stack":
        total = positive + abs(negative)
        if total == 0:
            return StackValues(base=base, low=0.0, high=0.0)
        low = low / total * 100.0
        high = high / total * 100.0
    return StackValues(base=base, low=low, high=high)


def _resolve_line_stack(
    curves: Sequence["Series"],
    series: "Series",
    index: int,
    context: PaneContext,
    base: float,
) -> StackValues:
    stack = 0.0
    for other in curves:
        if other is series:
            cur = series.value_at(index, context.bar_base)
            return StackValues(base=base, low=stack, high=stack + cur)
        if not other.is_line:
            continue
        cur = other.value_at(index, context.bar_base)
        if math.isfinite(cur):
            stack += cur
    cur = series.value_at(index, context.bar_base)
    return StackValues(base=base, low=0.0, high=cur)


class StackValueResolver:
    """Binds a pane context so callers can resolve many points in one pass."""

    def __init__(self, context: PaneContext) -> None:
        self.context = context

    def resolve(self, curves: Sequence["Series"], series: "Series", index: int) -> StackValues:
        return resolve_stack_values(curves, series, index, self.context)
