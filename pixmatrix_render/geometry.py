from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    x0: int
    y0: int
    x1: int
    y1: int

    @classmethod
    def of(cls, width: int, height: int) -> "Rect":
        return cls(0, 0, int(width), int(height))

    @property
    def width(self) -> int:
        return max(0, self.x1 - self.x0)

    @property
    def height(self) -> int:
        return max(0, self.y1 - self.y0)

    @property
    def empty(self) -> bool:
        return self.width == 0 or self.height == 0


EMPTY_RECT = Rect(0, 0, 0, 0)


@dataclass(frozen=True)
class Point:
    x: float
    y: float
