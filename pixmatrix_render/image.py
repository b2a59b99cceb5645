from __future__ import annotations

from dataclasses import dataclass, field
import io
from typing import Union

from PIL import Image as PILImage
from PIL import ImageSequence, UnidentifiedImageError

from .canvas import Canvas
from .errors import WidgetInitError
from .geometry import Rect
from .widget import Widget


ImageSource = Union[bytes, PILImage.Image]


@dataclass
class Image(Widget):
    """Draws a decoded raster image; animated sources yield one frame per image frame.

    Giving only one of `width` / `height` scales the other to keep the aspect ratio.
    """

    src: ImageSource
    width: int = 0
    height: int = 0
    _frames: list[PILImage.Image] | None = field(default=None, init=False, repr=False, compare=False)

    def _ensure_frames(self) -> list[PILImage.Image]:
        if self._frames is not None:
            return self._frames
        frames = [self._scale(frame) for frame in _decode(self.src)]
        if not frames:
            raise WidgetInitError("image source contains no frames")
        self._frames = frames
        return frames

    def _scale(self, frame: PILImage.Image) -> PILImage.Image:
        if self.width < 0 or self.height < 0:
            raise WidgetInitError("image width and height must be >= 0")
        if self.width == 0 and self.height == 0:
            return frame
        if frame.width == 0 or frame.height == 0:
            raise WidgetInitError(f"cannot scale a zero-sized image frame ({frame.width}x{frame.height})")
        w, h = self.width, self.height
        if w == 0:
            w = max(1, int(round(frame.width * h / frame.height)))
        elif h == 0:
            h = max(1, int(round(frame.height * w / frame.width)))
        if (w, h) == frame.size:
            return frame
        return frame.resize((w, h), resample=PILImage.Resampling.NEAREST)

    def size(self) -> tuple[int, int]:
        first = self._ensure_frames()[0]
        return first.width, first.height

    def paint_bounds(self, bounds: Rect, frame_idx: int) -> Rect:
        return Rect.of(*self.size())

    def paint(self, canvas: Canvas, bounds: Rect, frame_idx: int) -> None:
        frames = self._ensure_frames()
        canvas.draw_image(frames[frame_idx % len(frames)], 0, 0)

    def frame_count(self, bounds: Rect) -> int:
        return len(self._ensure_frames())


def _decode(src: ImageSource) -> list[PILImage.Image]:
    if isinstance(src, PILImage.Image):
        return [src.convert("RGBA")]
    if not src:
        raise WidgetInitError("image source is empty")
    try:
        with PILImage.open(io.BytesIO(src)) as opened:
            return [frame.convert("RGBA") for frame in ImageSequence.Iterator(opened)]
    except (UnidentifiedImageError, OSError) as exc:
        raise WidgetInitError(f"decoding image: {exc}") from exc
