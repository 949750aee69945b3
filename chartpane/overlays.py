from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import logging

import numpy as np

from chartpane.raster import (
    distance_to_segment,
    draw_arrow_head,
    draw_filled_rect,
    draw_rect_outline,
    draw_segment,
    draw_text,
    text_size,
)

if TYPE_CHECKING:
    from chartpane.pane import Pane


LOGGER = logging.getLogger(__name__)

RGBA = tuple[int, int, int, int]

# Pixel coordinates beyond this magnitude come from degenerate scales.
MAX_PIXEL_EXTENT = 100000


def _sane(*values: float) -> bool:
    return all(abs(v) < MAX_PIXEL_EXTENT for v in values)


@dataclass
class GraphItem(ABC):
    """Overlay anchored in axis coordinates; ``y`` is the top edge."""

    x: float = 0.0
    y: float = 1.0
    width: float = 1.0
    height: float = 1.0
    is_visible: bool = True
    is_y2_axis: bool = False
    tag: Any = None

    def pixel_rect(self, pane: "Pane") -> tuple[float, float, float, float]:
        transform = pane.active_transform
        left = float(transform.x_to_px(self.x))
        right = float(transform.x_to_px(self.x + self.width))
        top = float(transform.y_to_px(self.y, is_y2=self.is_y2_axis))
        bottom = float(transform.y_to_px(self.y - self.height, is_y2=self.is_y2_axis))
        return (min(left, right), min(top, bottom), max(left, right), max(top, bottom))

    @abstractmethod
    def draw(self, canvas: np.ndarray, pane: "Pane", scale_factor: float) -> None:
        raise NotImplementedError

    def point_in_box(self, pt: tuple[float, float], pane: "Pane") -> bool:
        left, top, right, bottom = self.pixel_rect(pane)
        return left <= pt[0] <= right and top <= pt[1] <= bottom

    def copy(self) -> "GraphItem":
        return copy.deepcopy(self)


@dataclass
class BoxItem(GraphItem):
    fill_color: RGBA | None = (255, 255, 255, 255)
    border_color: RGBA | None = (0, 0, 0, 255)
    border_width: float = 1.0

    def draw(self, canvas: np.ndarray, pane: "Pane", scale_factor: float) -> None:
        left, top, right, bottom = self.pixel_rect(pane)
        if not _sane(left, top, right, bottom):
            LOGGER.debug("skipping box %r: pixel rect out of range", self.tag)
            return
        x0, y0, x1, y1 = (int(round(v)) for v in (left, top, right, bottom))
        if self.fill_color is not None:
            draw_filled_rect(canvas, x0, y0, x1, y1, self.fill_color)
        if self.border_color is not None:
            width = max(1, int(round(self.border_width * scale_factor)))
            draw_rect_outline(canvas, x0, y0, x1, y1, self.border_color, width=width)


@dataclass
class ArrowItem(GraphItem):
    """Line from (x, y) to (x + width, y - height), head at the far end."""

    color: RGBA = (255, 0, 0, 255)
    line_width: float = 1.0
    head_size: float = 10.0
    is_arrow_head: bool = True

    @classmethod
    def between(cls, x1: float, y1: float, x2: float, y2: float, **kwargs: Any) -> "ArrowItem":
        return cls(x=x1, y=y1, width=x2 - x1, height=y1 - y2, **kwargs)

    def _pixel_ends(self, pane: "Pane") -> tuple[float, float, float, float]:
        transform = pane.active_transform
        return (
            float(transform.x_to_px(self.x)),
            float(transform.y_to_px(self.y, is_y2=self.is_y2_axis)),
            float(transform.x_to_px(self.x + self.width)),
            float(transform.y_to_px(self.y - self.height, is_y2=self.is_y2_axis)),
        )

    def draw(self, canvas: np.ndarray, pane: "Pane", scale_factor: float) -> None:
        ends = self._pixel_ends(pane)
        if not _sane(*ends):
            LOGGER.debug("skipping arrow %r: pixel coordinates out of range", self.tag)
            return
        tx, ty, hx, hy = (int(round(v)) for v in ends)
        width = max(1, int(round(self.line_width * scale_factor)))
        draw_segment(canvas, tx, ty, hx, hy, self.color, width=width)
        if self.is_arrow_head:
            draw_arrow_head(canvas, (tx, ty), (hx, hy), self.color, size=self.head_size * scale_factor, width=width)

    def point_in_box(self, pt: tuple[float, float], pane: "Pane") -> bool:
        tx, ty, hx, hy = self._pixel_ends(pane)
        tolerance = max(float(self.line_width), 3.0)
        return distance_to_segment(pt[0], pt[1], tx, ty, hx, hy) <= tolerance


@dataclass
class TextItem(GraphItem):
    """Text whose top-left corner sits at (x, y); width/height are ignored."""

    text: str = ""
    color: RGBA = (0, 0, 0, 255)
    font_size_px: float = 12.0

    def _pixel_box(self, pane: "Pane", scale_factor: float) -> tuple[int, int, int, int]:
        transform = pane.active_transform
        left = int(round(float(transform.x_to_px(self.x))))
        top = int(round(float(transform.y_to_px(self.y, is_y2=self.is_y2_axis))))
        w, h = text_size(self.text, font_size_px=self.font_size_px * scale_factor)
        return (left, top, w, h)

    def draw(self, canvas: np.ndarray, pane: "Pane", scale_factor: float) -> None:
        left, top, _, _ = self._pixel_box(pane, scale_factor)
        if not _sane(left, top):
            LOGGER.debug("skipping text %r: anchor out of range", self.text)
            return
        draw_text(canvas, left, top, self.text, self.color, font_size_px=self.font_size_px * scale_factor)

    def point_in_box(self, pt: tuple[float, float], pane: "Pane") -> bool:
        left, top, w, h = self._pixel_box(pane, pane.scale_factor())
        return left <= pt[0] <= left + w and top <= pt[1] <= top + h


class ItemList:
    """Overlay items drawn in list order; later items land on top."""

    def __init__(self, items: list[GraphItem] | None = None) -> None:
        self._items: list[GraphItem] = list(items) if items is not None else []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[GraphItem]:
        return iter(self._items)

    def __getitem__(self, index: int) -> GraphItem:
        return self._items[index]

    def __setitem__(self, index: int, item: GraphItem) -> None:
        self._items[index] = item

    def add(self, item: GraphItem) -> "ItemList":
        self._items.append(item)
        return self

    def remove(self, index: int) -> "ItemList":
        del self._items[index]
        return self

    def copy(self) -> "ItemList":
        return ItemList([item.copy() for item in self._items])

    def find_point(self, pt: tuple[float, float], pane: "Pane") -> tuple[bool, int]:
        for i, item in enumerate(self._items):
            if item.is_visible and item.point_in_box(pt, pane):
                return (True, i)
        return (False, -1)

    def draw(self, canvas: np.ndarray, pane: "Pane", scale_factor: float) -> None:
        for item in self._items:
            if item.is_visible:
                item.draw(canvas, pane, scale_factor)
