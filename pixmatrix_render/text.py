from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from PIL import Image, ImageDraw

from .canvas import Canvas
from .colors import WHITE, ColorLike, parse_color
from .fonts import DEFAULT_FONT, font_metrics, get_font
from .geometry import Rect
from .widget import Widget


MAX_WIDTH = 1000


@dataclass
class Text(Widget):
    """Single line of text, rasterised once on first use.

    `height` overrides the font's ascent + descent and `offset` shifts the
    baseline upward.
    """

    content: str
    font: str = DEFAULT_FONT
    height: int = 0
    offset: int = 0
    color: Optional[ColorLike] = None
    _img: Image.Image | None = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.color = WHITE if self.color is None else parse_color(self.color)

    def _ensure_img(self) -> Image.Image:
        if self._img is not None:
            return self._img
        face = get_font(self.font)
        width = min(MAX_WIDTH, int(face.getlength(self.content))) if self.content else 0
        ascent, descent = font_metrics(face)
        height = self.height or (ascent + descent)

        img = Image.new("RGBA", (width, height), (0, 0, 0, 0))
        if width > 0 and height > 0:
            baseline = height - descent - self.offset
            ImageDraw.Draw(img).text((0, baseline - ascent), self.content, font=face, fill=self.color)
        self._img = img
        return img

    def size(self) -> tuple[int, int]:
        img = self._ensure_img()
        return img.width, img.height

    def paint_bounds(self, bounds: Rect, frame_idx: int) -> Rect:
        return Rect.of(*self.size())

    def paint(self, canvas: Canvas, bounds: Rect, frame_idx: int) -> None:
        canvas.draw_image(self._ensure_img(), 0, 0)
