from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Literal, get_args

from chartpane.errors import ChartDataError


AxisType = Literal["linear", "ordinal", "text"]
BarType = Literal["cluster", "overlay", "stack", "percent_stack", "sorted_overlay"]
LineType = Literal["normal", "stack"]
BarBase = Literal["x", "y"]

_AXIS_TYPES = frozenset(get_args(AxisType))
_BAR_TYPES = frozenset(get_args(BarType))
_LINE_TYPES = frozenset(get_args(LineType))
_BAR_BASES = frozenset(get_args(BarBase))


def _check_choice(value: str, allowed: frozenset[str], label: str) -> str:
    if value not in allowed:
        raise ChartDataError(f"unsupported {label}: {value!r} (expected one of {sorted(allowed)})")
    return value


@dataclass(frozen=True)
class AxisSettings:
    type: AxisType = "linear"

    def __post_init__(self) -> None:
        _check_choice(self.type, _AXIS_TYPES, "axis type")

    @property
    def is_any_ordinal(self) -> bool:
        # Text axes place their labels at ordinal positions too.
        return self.type in {"ordinal", "text"}


@dataclass
class PaneContext:
    x_axis: AxisSettings = field(default_factory=AxisSettings)
    y_axis: AxisSettings = field(default_factory=AxisSettings)
    y2_axis: AxisSettings = field(default_factory=AxisSettings)
    bar_type: BarType = "cluster"
    line_type: LineType = "normal"
    bar_base: BarBase = "x"
    cluster_scale_width: float = 1.0
    bar_fill_ratio: float = 0.8

    def __post_init__(self) -> None:
        _check_choice(self.bar_type, _BAR_TYPES, "bar type")
        _check_choice(self.line_type, _LINE_TYPES, "line type")
        _check_choice(self.bar_base, _BAR_BASES, "bar base")
        if self.cluster_scale_width <= 0:
            raise ChartDataError("cluster_scale_width must be > 0")
        if not 0.0 < self.bar_fill_ratio <= 1.0:
            raise ChartDataError("bar_fill_ratio must be in (0, 1]")

    def set_axis_types(
        self,
        *,
        x: AxisType | None = None,
        y: AxisType | None = None,
        y2: AxisType | None = None,
    ) -> "PaneContext":
        if x is not None:
            self.x_axis = replace(self.x_axis, type=x)
        if y is not None:
            self.y_axis = replace(self.y_axis, type=y)
        if y2 is not None:
            self.y2_axis = replace(self.y2_axis, type=y2)
        return self

    def set_bar_type(self, bar_type: BarType) -> "PaneContext":
        self.bar_type = _check_choice(bar_type, _BAR_TYPES, "bar type")  # type: ignore[assignment]
        return self

    def set_line_type(self, line_type: LineType) -> "PaneContext":
        self.line_type = _check_choice(line_type, _LINE_TYPES, "line type")  # type: ignore[assignment]
        return self

    def set_bar_base(self, bar_base: BarBase) -> "PaneContext":
        self.bar_base = _check_choice(bar_base, _BAR_BASES, "bar base")  # type: ignore[assignment]
        return self

    def set_cluster_scale_width(self, width: float) -> "PaneContext":
        if width <= 0:
            raise ChartDataError("cluster_scale_width must be > 0")
        self.cluster_scale_width = float(width)
        return self

    def is_x_ordinal(self) -> bool:
        return self.x_axis.is_any_ordinal

    def is_y_ordinal(self, is_y2: bool) -> bool:
        axis = self.y2_axis if is_y2 else self.y_axis
        return axis.is_any_ordinal

    def is_base_ordinal(self, is_y2: bool) -> bool:
        if self.bar_base == "x":
            return self.is_x_ordinal()
        return self.is_y_ordinal(is_y2)

    @property
    def is_bar_stacked(self) -> bool:
        return self.bar_type in {"stack", "percent_stack"}

    @property
    def is_line_stacked(self) -> bool:
        return self.line_type == "stack"
