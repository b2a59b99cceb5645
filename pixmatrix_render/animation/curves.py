from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
import re


class Curve(ABC):
    @abstractmethod
    def transform(self, t: float) -> float:
        raise NotImplementedError


@dataclass(frozen=True)
class LinearCurve(Curve):
    def transform(self, t: float) -> float:
        return t


@dataclass(frozen=True)
class CubicBezier(Curve):
    """CSS-style timing curve through (0, 0), (a, b), (c, d), (1, 1)."""

    a: float
    b: float
    c: float
    d: float

    def __post_init__(self) -> None:
        if not (0.0 <= self.a <= 1.0 and 0.0 <= self.c <= 1.0):
            raise ValueError("cubic-bezier x control points must be within [0, 1]")

    @staticmethod
    def _sample(p1: float, p2: float, s: float) -> float:
        inv = 1.0 - s
        return 3.0 * inv * inv * s * p1 + 3.0 * inv * s * s * p2 + s * s * s

    @staticmethod
    def _slope(p1: float, p2: float, s: float) -> float:
        inv = 1.0 - s
        return 3.0 * inv * inv * p1 + 6.0 * inv * s * (p2 - p1) + 3.0 * s * s * (1.0 - p2)

    def _solve_x(self, x: float) -> float:
        s = x
        for _ in range(8):
            err = self._sample(self.a, self.c, s) - x
            if abs(err) < 1e-7:
                return s
            slope = self._slope(self.a, self.c, s)
            if abs(slope) < 1e-6:
                break
            s -= err / slope

        lo, hi = 0.0, 1.0
        s = x
        for _ in range(64):
            value = self._sample(self.a, self.c, s)
            if abs(value - x) < 1e-7:
                break
            if value < x:
                lo = s
            else:
                hi = s
            s = (lo + hi) / 2.0
        return s

    def transform(self, t: float) -> float:
        if t <= 0.0:
            return 0.0
        if t >= 1.0:
            return 1.0
        return self._sample(self.b, self.d, self._solve_x(t))


LINEAR = LinearCurve()
EASE_IN = CubicBezier(0.42, 0.0, 1.0, 1.0)
EASE_OUT = CubicBezier(0.0, 0.0, 0.58, 1.0)
EASE_IN_OUT = CubicBezier(0.42, 0.0, 0.58, 1.0)

_NAMED = {
    "linear": LINEAR,
    "ease_in": EASE_IN,
    "ease_out": EASE_OUT,
    "ease_in_out": EASE_IN_OUT,
}

_BEZIER_RE = re.compile(r"^cubic-bezier\(\s*([^,]+),\s*([^,]+),\s*([^,]+),\s*([^,)]+)\s*\)$")


def parse_curve(value: str) -> Curve:
    name = value.strip()
    if name in _NAMED:
        return _NAMED[name]
    match = _BEZIER_RE.match(name)
    if match is None:
        raise ValueError(f"unknown curve {value!r}")
    try:
        a, b, c, d = (float(part) for part in match.groups())
    except ValueError as exc:
        raise ValueError(f"invalid cubic-bezier arguments in {value!r}") from exc
    return CubicBezier(a, b, c, d)
