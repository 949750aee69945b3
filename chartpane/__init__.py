from chartpane.api import pane
from chartpane.context import AxisSettings, PaneContext
from chartpane.curves import CurveList
from chartpane.errors import ChartDataError
from chartpane.overlays import ArrowItem, BoxItem, GraphItem, ItemList, TextItem
from chartpane.pane import Pane
from chartpane.ranges import compute_range
from chartpane.scales import AxisBounds
from chartpane.scheduling import DrawOp, schedule_draw
from chartpane.series import Series, SeriesData, SeriesStyle
from chartpane.stacking import StackValueResolver, StackValues, resolve_stack_values

__all__ = [
    "ArrowItem",
    "AxisBounds",
    "AxisSettings",
    "BoxItem",
    "ChartDataError",
    "CurveList",
    "DrawOp",
    "GraphItem",
    "ItemList",
    "Pane",
    "PaneContext",
    "Series",
    "SeriesData",
    "SeriesStyle",
    "StackValueResolver",
    "StackValues",
    "TextItem",
    "compute_range",
    "pane",
    "resolve_stack_values",
    "schedule_draw",
]
