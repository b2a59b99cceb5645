from __future__ import annotations

from dataclasses import dataclass
import math

from PIL import Image

from .. import effects
from ..canvas import Canvas
from ..geometry import Rect
from .base import FilterWidget, PixelFilter


def _ceil(v: float) -> int:
    # Trig round-off (cos(90deg) is not exactly 0) must not add a pixel.
    return int(math.ceil(v - 1e-9))


@dataclass
class Rotate(FilterWidget):
    """Rotates the child by `angle` degrees about the centre of the outer bounds."""

    angle: float = 0.0

    def paint_bounds(self, bounds: Rect, frame_idx: int) -> Rect:
        cb = self.child.paint_bounds(bounds, frame_idx)
        rad = math.radians(self.angle)
        cos = abs(math.cos(rad))
        sin = abs(math.sin(rad))
        return Rect.of(
            _ceil(cb.width * cos + cb.height * sin),
            _ceil(cb.width * sin + cb.height * cos),
        )

    def paint(self, canvas: Canvas, bounds: Rect, frame_idx: int) -> None:
        cb = self.child.paint_bounds(bounds, frame_idx)
        with canvas.saved():
            canvas.translate(bounds.x0 + bounds.width / 2.0, bounds.y0 + bounds.height / 2.0)
            canvas.rotate(math.radians(self.angle))
            canvas.translate(-cb.width / 2.0, -cb.height / 2.0)
            self.child.paint(canvas, Rect.of(cb.width, cb.height), frame_idx)


@dataclass
class Shear(FilterWidget):
    """Shears the child by `x_angle` / `y_angle` degrees about the centre of the outer bounds."""

    x_angle: float = 0.0
    y_angle: float = 0.0

    def paint_bounds(self, bounds: Rect, frame_idx: int) -> Rect:
        cb = self.child.paint_bounds(bounds, frame_idx)
        w = float(cb.width)
        h = float(cb.height)
        if self.x_angle != 0:
            w += cb.height * abs(math.tan(math.radians(self.x_angle)))
        if self.y_angle != 0:
            h += cb.width * abs(math.tan(math.radians(self.y_angle)))
        return Rect.of(_ceil(w), _ceil(h))

    def paint(self, canvas: Canvas, bounds: Rect, frame_idx: int) -> None:
        cb = self.child.paint_bounds(bounds, frame_idx)
        sx = -math.tan(math.radians(self.x_angle)) if self.x_angle != 0 else 0.0
        sy = -math.tan(math.radians(self.y_angle)) if self.y_angle != 0 else 0.0
        with canvas.saved():
            canvas.translate(bounds.x0 + bounds.width / 2.0, bounds.y0 + bounds.height / 2.0)
            canvas.shear(sx, sy)
            canvas.translate(-cb.width / 2.0, -cb.height / 2.0)
            self.child.paint(canvas, Rect.of(cb.width, cb.height), frame_idx)


@dataclass
class FlipHorizontal(PixelFilter):
    def effect(self, img: Image.Image) -> Image.Image:
        return effects.flip_horizontal(img)


@dataclass
class FlipVertical(PixelFilter):
    def effect(self, img: Image.Image) -> Image.Image:
        return effects.flip_vertical(img)
