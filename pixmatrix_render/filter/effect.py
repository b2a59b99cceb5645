from __future__ import annotations

from dataclasses import dataclass
import math

from PIL import Image

from .. import effects
from ..canvas import Canvas
from ..geometry import Rect
from .base import FilterWidget, PixelFilter


@dataclass
class Blur(FilterWidget):
    """Gaussian blur; the bounds grow by three radii on every side so the blur is not clipped."""

    radius: float = 1.0

    def __post_init__(self) -> None:
        if self.radius < 0:
            raise ValueError("blur radius must be >= 0")

    def _padding(self) -> int:
        return int(math.ceil(self.radius * 3))

    def paint_bounds(self, bounds: Rect, frame_idx: int) -> Rect:
        cb = self.child.paint_bounds(bounds, frame_idx)
        pad = self._padding()
        return Rect.of(cb.width + 2 * pad, cb.height + 2 * pad)

    def paint(self, canvas: Canvas, bounds: Rect, frame_idx: int) -> None:
        cb = self.child.paint_bounds(bounds, frame_idx)
        pad = self._padding()
        offscreen = Canvas(cb.width + 2 * pad, cb.height + 2 * pad)
        with offscreen.saved():
            offscreen.translate(pad, pad)
            self.child.paint(offscreen, Rect.of(cb.width, cb.height), frame_idx)
        img = effects.blur(offscreen.image(), self.radius)
        canvas.draw_image(img, int((bounds.width - img.width) / 2), int((bounds.height - img.height) / 2))


@dataclass
class Sharpen(PixelFilter):
    def effect(self, img: Image.Image) -> Image.Image:
        return effects.sharpen(img)


@dataclass
class Emboss(PixelFilter):
    def effect(self, img: Image.Image) -> Image.Image:
        return effects.emboss(img)


@dataclass
class EdgeDetection(PixelFilter):
    radius: float = 1.0

    def effect(self, img: Image.Image) -> Image.Image:
        return effects.edge_detect(img, self.radius)
