from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np
from PIL import Image

from .canvas import Canvas
from .colors import ColorLike, parse_color, rotate_hue
from .geometry import EMPTY_RECT, Rect
from .widget import Widget, paint_widget


_LUMA = (0.299, 0.587, 0.114)


def _unset(value: Optional[float]) -> bool:
    return value is None or value < 0


@dataclass
class ColorTransform(Widget):
    """Applies color adjustments to a child widget.

    Adjustments run in a fixed order: invert, brightness, saturation, hue
    rotation, tint, opacity. `None` (or a negative value) leaves brightness,
    saturation and opacity at their neutral 1.0.
    """

    child: Optional[Widget] = None
    brightness: Optional[float] = None
    saturation: Optional[float] = None
    hue_rotate: float = 0.0
    opacity: Optional[float] = None
    invert: bool = False
    tint: Optional[ColorLike] = None

    def __post_init__(self) -> None:
        if self.tint is not None:
            self.tint = parse_color(self.tint)

    @property
    def active(self) -> bool:
        return (
            (not _unset(self.brightness) and self.brightness != 1.0)
            or (not _unset(self.saturation) and self.saturation != 1.0)
            or self.hue_rotate != 0
            or (not _unset(self.opacity) and self.opacity != 1.0)
            or self.invert
            or self.tint is not None
        )

    def paint_bounds(self, bounds: Rect, frame_idx: int) -> Rect:
        if self.child is None:
            return EMPTY_RECT
        return self.child.paint_bounds(bounds, frame_idx)

    def paint(self, canvas: Canvas, bounds: Rect, frame_idx: int) -> None:
        if self.child is None:
            return
        if not self.active:
            self.child.paint(canvas, bounds, frame_idx)
            return

        img = paint_widget(self.child, bounds, frame_idx)
        if img.width == 0 or img.height == 0:
            return
        canvas.draw_image(self.transform_image(img), 0, 0)

    def frame_count(self, bounds: Rect) -> int:
        if self.child is None:
            return 1
        return self.child.frame_count(bounds)

    def transform_image(self, img: Image.Image) -> Image.Image:
        px = np.asarray(img.convert("RGBA"), dtype=np.float64) / 255.0
        r, g, b, a = px[:, :, 0], px[:, :, 1], px[:, :, 2], px[:, :, 3]

        brightness = 1.0 if _unset(self.brightness) else float(self.brightness)
        saturation = 1.0 if _unset(self.saturation) else float(self.saturation)
        opacity = 1.0 if _unset(self.opacity) else float(self.opacity)

        if self.invert:
            r, g, b = 1.0 - r, 1.0 - g, 1.0 - b
        if brightness != 1.0:
            r, g, b = r * brightness, g * brightness, b * brightness
        if saturation != 1.0:
            gray = _LUMA[0] * r + _LUMA[1] * g + _LUMA[2] * b
            r = gray + saturation * (r - gray)
            g = gray + saturation * (g - gray)
            b = gray + saturation * (b - gray)
        if self.hue_rotate != 0:
            r, g, b = rotate_hue(r, g, b, self.hue_rotate)
        if self.tint is not None:
            tr, tg, tb = (c / 255.0 for c in self.tint[:3])
            r, g, b = r * tr, g * tg, b * tb
        if opacity != 1.0:
            a = a * opacity

        out = np.stack([_to_u8(r), _to_u8(g), _to_u8(b), _to_u8(a)], axis=-1)
        return Image.fromarray(out)


def _to_u8(channel: np.ndarray) -> np.ndarray:
    """Clamp [0, 1] floats to bytes, truncating toward zero."""
    scaled = np.floor(np.clip(channel, 0.0, 1.0) * 255.0 + 1e-9)
    return np.where(channel > 1.0, 255, scaled).astype(np.uint8)
