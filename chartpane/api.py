from __future__ import annotations

from chartpane.context import PaneContext
from chartpane.errors import ChartDataError
from chartpane.pane import Pane


DEFAULT_ASPECT_RATIO = 4.0 / 3.0
DEFAULT_SIZE = (640, 480)


def pane(
    width: int | None = None,
    height: int | None = None,
    *,
    aspect_ratio: float = DEFAULT_ASPECT_RATIO,
    context: PaneContext | None = None,
) -> Pane:
    if aspect_ratio <= 0:
        raise ChartDataError("aspect_ratio must be > 0")
    if width is None and height is None:
        width, height = DEFAULT_SIZE
    elif width is None and height is not None:
        if height <= 0:
            raise ChartDataError("height must be > 0")
        width = max(1, int(round(height * aspect_ratio)))
    elif width is not None and height is None:
        if width <= 0:
            raise ChartDataError("width must be > 0")
        height = max(1, int(round(width / aspect_ratio)))
    assert width is not None and height is not None
    return Pane(width=width, height=height, context=context if context is not None else PaneContext())
