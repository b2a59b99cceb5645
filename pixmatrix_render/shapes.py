from __future__ import annotations

from dataclasses import dataclass, field
import math
from typing import Sequence

from .canvas import Canvas
from .colors import ColorLike, parse_color
from .geometry import EMPTY_RECT, Point, Rect
from .widget import Widget


_CARDINALS = (0.0, math.pi / 2.0, math.pi, 3.0 * math.pi / 2.0)


def _normalize_angle(angle: float) -> float:
    angle = math.fmod(angle, 2.0 * math.pi)
    if angle < 0:
        angle += 2.0 * math.pi
    return angle


def _extent_rect(min_x: float, max_x: float, min_y: float, max_y: float) -> Rect:
    return Rect.of(int(math.ceil(max_x - min_x)), int(math.ceil(max_y - min_y)))


@dataclass
class Arc(Widget):
    """Arc centred at (x, y); angles are in radians."""

    x: float
    y: float
    radius: float
    start_angle: float
    end_angle: float
    color: ColorLike
    width: float

    def __post_init__(self) -> None:
        self.color = parse_color(self.color)

    def _extent(self) -> tuple[float, float, float, float]:
        x1 = self.x + self.radius * math.cos(self.start_angle)
        y1 = self.y + self.radius * math.sin(self.start_angle)
        x2 = self.x + self.radius * math.cos(self.end_angle)
        y2 = self.y + self.radius * math.sin(self.end_angle)
        min_x, max_x = min(x1, x2), max(x1, x2)
        min_y, max_y = min(y1, y2), max(y1, y2)

        start = _normalize_angle(self.start_angle)
        end = _normalize_angle(self.end_angle)
        full_turn = abs(self.end_angle - self.start_angle) >= 2.0 * math.pi
        for angle in _CARDINALS:
            if full_turn:
                swept = True
            elif start <= end:
                swept = start <= angle <= end
            else:
                # Sweep wraps through 0.
                swept = angle >= start or angle <= end
            if not swept:
                continue
            cx = self.x + self.radius * math.cos(angle)
            cy = self.y + self.radius * math.sin(angle)
            min_x, max_x = min(min_x, cx), max(max_x, cx)
            min_y, max_y = min(min_y, cy), max(max_y, cy)

        half = self.width / 2.0
        return min_x - half, max_x + half, min_y - half, max_y + half

    def paint_bounds(self, bounds: Rect, frame_idx: int) -> Rect:
        return _extent_rect(*self._extent())

    def paint(self, canvas: Canvas, bounds: Rect, frame_idx: int) -> None:
        min_x, _, min_y, _ = self._extent()
        with canvas.saved():
            canvas.translate(-min_x, -min_y)
            canvas.set_color(self.color)
            canvas.set_line_width(self.width)
            canvas.stroke_arc(self.x, self.y, self.radius, self.start_angle, self.end_angle)


@dataclass
class Line(Widget):
    x1: float
    y1: float
    x2: float
    y2: float
    color: ColorLike
    width: float = 1.0

    def __post_init__(self) -> None:
        self.color = parse_color(self.color)

    def _extent(self) -> tuple[float, float, float, float]:
        half = self.width / 2.0
        return (
            min(self.x1, self.x2) - half,
            max(self.x1, self.x2) + half,
            min(self.y1, self.y2) - half,
            max(self.y1, self.y2) + half,
        )

    def paint_bounds(self, bounds: Rect, frame_idx: int) -> Rect:
        return _extent_rect(*self._extent())

    def paint(self, canvas: Canvas, bounds: Rect, frame_idx: int) -> None:
        min_x, _, min_y, _ = self._extent()
        with canvas.saved():
            canvas.translate(-min_x, -min_y)
            canvas.set_color(self.color)
            canvas.set_line_width(self.width)
            canvas.stroke_line(self.x1, self.y1, self.x2, self.y2)


@dataclass
class Polygon(Widget):
    """Closed polygon, filled by default and outlined when `stroke_width` > 0."""

    vertices: Sequence[Point | tuple[float, float]]
    color: ColorLike
    stroke_width: float = 0.0
    _points: list[tuple[float, float]] = field(default_factory=list, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.color = parse_color(self.color)
        self._points = [(p.x, p.y) if isinstance(p, Point) else (float(p[0]), float(p[1])) for p in self.vertices]

    def _extent(self) -> tuple[float, float, float, float] | None:
        if not self._points:
            return None
        xs = [p[0] for p in self._points]
        ys = [p[1] for p in self._points]
        half = self.stroke_width / 2.0 if self.stroke_width > 0 else 0.0
        return min(xs) - half, max(xs) + half, min(ys) - half, max(ys) + half

    def paint_bounds(self, bounds: Rect, frame_idx: int) -> Rect:
        extent = self._extent()
        if extent is None:
            return EMPTY_RECT
        return _extent_rect(*extent)

    def paint(self, canvas: Canvas, bounds: Rect, frame_idx: int) -> None:
        extent = self._extent()
        if extent is None:
            return
        min_x, _, min_y, _ = extent
        with canvas.saved():
            canvas.translate(-min_x, -min_y)
            canvas.set_color(self.color)
            if self.stroke_width > 0:
                canvas.set_line_width(self.stroke_width)
                canvas.stroke_polyline(self._points, closed=True)
            else:
                canvas.fill_polygon(self._points)
