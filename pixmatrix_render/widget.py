from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
import logging

from PIL import Image

from .canvas import Canvas
from .colors import BLACK
from .geometry import Rect


LOGGER = logging.getLogger(__name__)

DEFAULT_FRAME_WIDTH = 64
DEFAULT_FRAME_HEIGHT = 32
DEFAULT_DELAY_MS = 50
DEFAULT_MAX_FRAME_COUNT = 2000


class Widget(ABC):
    """Paintable, frame-indexed drawable unit.

    Widgets paint in local coordinates anchored at (0, 0). Any canvas state a
    widget changes must be restored before `paint` returns.
    """

    @abstractmethod
    def paint_bounds(self, bounds: Rect, frame_idx: int) -> Rect:
        raise NotImplementedError

    @abstractmethod
    def paint(self, canvas: Canvas, bounds: Rect, frame_idx: int) -> None:
        raise NotImplementedError

    def frame_count(self, bounds: Rect) -> int:
        return 1


@dataclass(frozen=True)
class DisplaySpec:
    width: int = DEFAULT_FRAME_WIDTH
    height: int = DEFAULT_FRAME_HEIGHT
    is_2x: bool = False

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("display dimensions must be > 0")

    @property
    def scaled_width(self) -> int:
        return self.width * 2 if self.is_2x else self.width

    @property
    def scaled_height(self) -> int:
        return self.height * 2 if self.is_2x else self.height

    def bounds(self) -> Rect:
        return Rect.of(self.scaled_width, self.scaled_height)


DEFAULT_DISPLAY = DisplaySpec()


@dataclass(frozen=True)
class Root:
    """Top-level widget plus the hints used when encoding its frames."""

    child: Widget
    delay: int = DEFAULT_DELAY_MS
    max_age: int = 0
    show_full_animation: bool = False
    max_frame_count: int = DEFAULT_MAX_FRAME_COUNT

    def paint(self, solid_background: bool = True, display: DisplaySpec = DEFAULT_DISPLAY) -> list[Image.Image]:
        bounds = display.bounds()
        num_frames = self.child.frame_count(bounds)
        if 0 < self.max_frame_count < num_frames:
            LOGGER.debug("Root frame count capped; requested=%d max=%d", num_frames, self.max_frame_count)
            num_frames = self.max_frame_count

        frames: list[Image.Image] = []
        for frame_idx in range(num_frames):
            canvas = Canvas(bounds.width, bounds.height)
            if solid_background:
                canvas.clear(BLACK)
            self.child.paint(canvas, bounds, frame_idx)
            frames.append(canvas.image())
        return frames


def paint_roots(
    *roots: Root,
    solid_background: bool = True,
    display: DisplaySpec = DEFAULT_DISPLAY,
) -> list[Image.Image]:
    frames: list[Image.Image] = []
    for root in roots:
        frames.extend(root.paint(solid_background=solid_background, display=display))
    return frames


def paint_widget(widget: Widget, bounds: Rect, frame_idx: int) -> Image.Image:
    """Paint one frame of `widget` onto a transparent canvas sized to its paint bounds."""
    pb = widget.paint_bounds(bounds, frame_idx)
    canvas = Canvas(pb.width, pb.height)
    widget.paint(canvas, bounds, frame_idx)
    return canvas.image()
