from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import Sequence

from ..canvas import Canvas
from ..geometry import Rect
from ..widget import Widget
from .keyframes import Keyframe, find_keyframes, interpolate_transforms, process_keyframes
from .transforms import DEFAULT_ORIGIN, FillMode, Origin, Rounding


LOGGER = logging.getLogger(__name__)


class Direction(Enum):
    NORMAL = "normal"
    REVERSE = "reverse"
    ALTERNATE = "alternate"
    ALTERNATE_REVERSE = "alternate-reverse"

    def frame_progress(self, progress: float) -> float:
        if self is Direction.REVERSE:
            return 1.0 - progress
        if self is Direction.ALTERNATE:
            return progress * 2.0 if progress <= 0.5 else 2.0 - progress * 2.0
        if self is Direction.ALTERNATE_REVERSE:
            return 1.0 - progress * 2.0 if progress <= 0.5 else progress * 2.0 - 1.0
        return progress


@dataclass
class Transformation(Widget):
    """Animates a child through keyframed transforms over `duration` frames.

    Transforms are applied about `origin` within a `width` x `height` area,
    where 0 means the outer bounds. With `wait_for_child` the animation holds
    its fill state until the child has played all of its frames.
    """

    child: Widget
    keyframes: Sequence[Keyframe]
    duration: int
    delay: int = 0
    width: int = 0
    height: int = 0
    origin: Origin = DEFAULT_ORIGIN
    direction: Direction | str = Direction.NORMAL
    fill_mode: FillMode = FillMode.FORWARDS
    rounding: Rounding = Rounding.ROUND
    wait_for_child: bool = False
    _frames: list[Keyframe] = field(default_factory=list, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.duration < 1:
            raise ValueError("transformation duration must be at least one frame")
        if self.delay < 0:
            raise ValueError("transformation delay must be >= 0")
        self.direction = Direction(self.direction)
        self.keyframes = tuple(self.keyframes)
        self._frames = process_keyframes(self.keyframes)

    def _area(self, bounds: Rect) -> Rect:
        return Rect.of(self.width or bounds.width, self.height or bounds.height)

    def paint_bounds(self, bounds: Rect, frame_idx: int) -> Rect:
        return self._area(bounds)

    def frame_count(self, bounds: Rect) -> int:
        count = self.delay + self.duration
        if self.wait_for_child:
            count = max(count, self.child.frame_count(bounds))
        return count

    def progress(self, frame_idx: int) -> float:
        if frame_idx < self.delay:
            progress = 0.0
        elif frame_idx >= self.delay + self.duration:
            progress = self.fill_mode.value
        elif self.duration == 1:
            progress = 1.0
        else:
            progress = (frame_idx - self.delay) / (self.duration - 1)
        return self.direction.frame_progress(progress)

    def paint(self, canvas: Canvas, bounds: Rect, frame_idx: int) -> None:
        area = self._area(bounds)
        start, end, local = find_keyframes(self._frames, self.progress(frame_idx))
        transforms = interpolate_transforms(start.transforms, end.transforms, local)
        origin = self.origin.transform(area)

        with canvas.saved():
            for transform in transforms:
                transform.apply(canvas, origin, self.rounding)
            self.child.paint(canvas, area, frame_idx)
