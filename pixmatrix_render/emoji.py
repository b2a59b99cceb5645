from __future__ import annotations

from dataclasses import dataclass, field
import threading
from typing import Mapping, Protocol

from PIL import Image

from .canvas import Canvas
from .errors import WidgetInitError
from .geometry import EMPTY_RECT, Rect
from .widget import Widget


class EmojiAtlas(Protocol):
    """Glyph source for emoji sequences; returns None for unknown sequences."""

    def lookup(self, sequence: str) -> Image.Image | None:
        ...


class DictEmojiAtlas:
    def __init__(self, glyphs: Mapping[str, Image.Image]) -> None:
        self._glyphs = {key: img.convert("RGBA") for key, img in glyphs.items()}

    def lookup(self, sequence: str) -> Image.Image | None:
        return self._glyphs.get(sequence)


_ATLAS_LOCK = threading.Lock()
_ATLAS: EmojiAtlas = DictEmojiAtlas({})


def set_emoji_atlas(atlas: EmojiAtlas) -> None:
    global _ATLAS
    with _ATLAS_LOCK:
        _ATLAS = atlas


def get_emoji_atlas() -> EmojiAtlas:
    with _ATLAS_LOCK:
        return _ATLAS


@dataclass
class Emoji(Widget):
    """Single emoji glyph scaled to `height` pixels, keeping its aspect ratio."""

    emoji: str
    height: int
    _img: Image.Image | None = field(default=None, init=False, repr=False, compare=False)

    def _ensure_img(self) -> Image.Image:
        if self._img is not None:
            return self._img
        if self.height <= 0:
            raise WidgetInitError(f"emoji height must be positive, got {self.height}")
        if not self.emoji:
            raise WidgetInitError("emoji string cannot be empty")
        glyph = get_emoji_atlas().lookup(self.emoji)
        if glyph is None:
            raise WidgetInitError(f"emoji {self.emoji!r} not found in emoji atlas")
        if glyph.width == 0 or glyph.height == 0:
            raise WidgetInitError(f"emoji {self.emoji!r} has a zero-sized glyph")
        width = max(1, int(round(glyph.width * self.height / glyph.height)))
        self._img = glyph.resize((width, self.height), resample=Image.Resampling.NEAREST)
        return self._img

    def size(self) -> tuple[int, int]:
        img = self._ensure_img()
        return img.width, img.height

    def paint_bounds(self, bounds: Rect, frame_idx: int) -> Rect:
        img = self._ensure_img()
        if img.width == 0 or img.height == 0:
            return EMPTY_RECT
        return Rect.of(img.width, img.height)

    def paint(self, canvas: Canvas, bounds: Rect, frame_idx: int) -> None:
        canvas.draw_image(self._ensure_img(), 0, 0)
