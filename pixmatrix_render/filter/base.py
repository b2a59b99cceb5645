from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from typing import Callable

from PIL import Image

from ..canvas import Canvas
from ..geometry import Rect
from ..widget import Widget


Effect = Callable[[Image.Image], Image.Image]


def paint_filtered(canvas: Canvas, child: Widget, bounds: Rect, frame_idx: int, effect: Effect) -> None:
    """Paint `child` into a tight offscreen canvas, run `effect` and draw the result centred."""
    cb = child.paint_bounds(bounds, frame_idx)
    offscreen = Canvas(cb.width, cb.height)
    child.paint(offscreen, Rect.of(cb.width, cb.height), frame_idx)
    result = effect(offscreen.image())
    dx = int((bounds.width - result.width) / 2)
    dy = int((bounds.height - result.height) / 2)
    canvas.draw_image(result, dx, dy)


@dataclass
class FilterWidget(Widget):
    """Wraps a child; bounds and frame count follow the child unless overridden."""

    child: Widget

    def paint_bounds(self, bounds: Rect, frame_idx: int) -> Rect:
        return self.child.paint_bounds(bounds, frame_idx)

    def frame_count(self, bounds: Rect) -> int:
        return self.child.frame_count(bounds)


@dataclass
class PixelFilter(FilterWidget):
    """Filter that maps the painted child image through `effect`."""

    @abstractmethod
    def effect(self, img: Image.Image) -> Image.Image:
        raise NotImplementedError

    def paint(self, canvas: Canvas, bounds: Rect, frame_idx: int) -> None:
        paint_filtered(canvas, self.child, bounds, frame_idx, self.effect)
