from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .canvas import Canvas
from .colors import ColorLike, parse_color
from .geometry import Rect
from .widget import Widget


@dataclass
class Box(Widget):
    """Rectangle that fills its area and centres an optional child inside its padding.

    A width or height of 0 takes the size of the outer bounds.
    """

    width: int = 0
    height: int = 0
    padding: int = 0
    color: Optional[ColorLike] = None
    child: Optional[Widget] = None

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0 or self.padding < 0:
            raise ValueError("box width, height and padding must be >= 0")
        if self.color is not None:
            self.color = parse_color(self.color)

    def _size(self, bounds: Rect) -> tuple[int, int]:
        return (self.width or bounds.width, self.height or bounds.height)

    def _inner(self, bounds: Rect) -> Rect:
        w, h = self._size(bounds)
        return Rect.of(max(0, w - 2 * self.padding), max(0, h - 2 * self.padding))

    def paint_bounds(self, bounds: Rect, frame_idx: int) -> Rect:
        return Rect.of(*self._size(bounds))

    def paint(self, canvas: Canvas, bounds: Rect, frame_idx: int) -> None:
        w, h = self._size(bounds)
        if self.color is not None:
            with canvas.saved():
                canvas.set_color(self.color)
                canvas.fill_rect(0, 0, w, h)
        if self.child is None:
            return
        inner = self._inner(bounds)
        cb = self.child.paint_bounds(inner, frame_idx)
        x = self.padding + int((inner.width - cb.width) / 2)
        y = self.padding + int((inner.height - cb.height) / 2)
        with canvas.saved():
            canvas.translate(x, y)
            self.child.paint(canvas, inner, frame_idx)

    def frame_count(self, bounds: Rect) -> int:
        if self.child is None:
            return 1
        return self.child.frame_count(self._inner(bounds))
