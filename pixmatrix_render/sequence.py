from __future__ import annotations

from dataclasses import dataclass, field

from .canvas import Canvas
from .geometry import EMPTY_RECT, Rect
from .widget import Widget


@dataclass
class Sequence(Widget):
    """Plays each child for its own frame count, one after another.

    Child `i` owns the global frames starting at the sum of the frame counts of
    the children before it. Indices past the last child paint nothing.
    """

    children: list[Widget] = field(default_factory=list)

    def frame_count(self, bounds: Rect) -> int:
        return sum(child.frame_count(bounds) for child in self.children)

    def locate(self, bounds: Rect, frame_idx: int) -> tuple[Widget, int] | None:
        """Owning child and its local frame index, or None when out of range."""
        offset = 0
        for child in self.children:
            count = child.frame_count(bounds)
            if frame_idx < offset + count:
                return child, frame_idx - offset
            offset += count
        return None

    def paint_bounds(self, bounds: Rect, frame_idx: int) -> Rect:
        located = self.locate(bounds, frame_idx)
        if located is None:
            return EMPTY_RECT
        child, local_idx = located
        return child.paint_bounds(bounds, local_idx)

    def paint(self, canvas: Canvas, bounds: Rect, frame_idx: int) -> None:
        located = self.locate(bounds, frame_idx)
        if located is None:
            return
        child, local_idx = located
        with canvas.saved():
            child.paint(canvas, bounds, local_idx)
