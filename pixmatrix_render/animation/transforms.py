from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
import math

from ..canvas import Canvas
from ..errors import InterpolationError
from ..geometry import Rect


def lerp(a: float, b: float, progress: float) -> float:
    return a + (b - a) * progress


@dataclass(frozen=True)
class Vec2f:
    x: float = 0.0
    y: float = 0.0

    def lerp(self, other: "Vec2f", progress: float) -> "Vec2f":
        return Vec2f(lerp(self.x, other.x, progress), lerp(self.y, other.y, progress))


@dataclass(frozen=True)
class Origin:
    """Anchor for rotate/scale/shear, as fractions of the target bounds."""

    x: float = 0.5
    y: float = 0.5

    def transform(self, bounds: Rect) -> Vec2f:
        return Vec2f(self.x * bounds.width, self.y * bounds.height)


DEFAULT_ORIGIN = Origin()


def _round_half_away(v: float) -> float:
    return float(math.copysign(math.floor(abs(v) + 0.5), v))


class Rounding(Enum):
    ROUND = "round"
    FLOOR = "floor"
    CEIL = "ceil"
    NONE = "none"

    def apply(self, v: float) -> float:
        if self is Rounding.ROUND:
            return _round_half_away(v)
        if self is Rounding.FLOOR:
            return float(math.floor(v))
        if self is Rounding.CEIL:
            return float(math.ceil(v))
        return v


class FillMode(Enum):
    FORWARDS = 1.0
    BACKWARDS = 0.0


def _check_progress(other: object, progress: float) -> None:
    if not isinstance(other, Transform):
        raise InterpolationError(f"cannot interpolate towards {type(other).__name__}")
    if not math.isfinite(progress) or progress < 0.0 or progress > 1.0:
        raise InterpolationError(f"progress must be within [0, 1], got {progress!r}")


class Transform(ABC):
    @abstractmethod
    def apply(self, canvas: Canvas, origin: Vec2f, rounding: Rounding) -> None:
        raise NotImplementedError

    @abstractmethod
    def interpolate(self, other: "Transform", progress: float) -> tuple["Transform", bool]:
        """Blend towards `other`; a different variant yields (identity, False)."""
        raise NotImplementedError

    @classmethod
    @abstractmethod
    def identity(cls) -> "Transform":
        raise NotImplementedError


@dataclass(frozen=True)
class Translate(Transform):
    x: float = 0.0
    y: float = 0.0

    def apply(self, canvas: Canvas, origin: Vec2f, rounding: Rounding) -> None:
        canvas.translate(rounding.apply(self.x), rounding.apply(self.y))

    def interpolate(self, other: Transform, progress: float) -> tuple[Transform, bool]:
        _check_progress(other, progress)
        if isinstance(other, Translate):
            return Translate(lerp(self.x, other.x, progress), lerp(self.y, other.y, progress)), True
        return Translate.identity(), False

    @classmethod
    def identity(cls) -> "Translate":
        return cls(0.0, 0.0)


@dataclass(frozen=True)
class Rotate(Transform):
    """Rotation in degrees about the origin."""

    angle: float = 0.0

    def apply(self, canvas: Canvas, origin: Vec2f, rounding: Rounding) -> None:
        canvas.rotate_about(math.radians(self.angle), origin.x, origin.y)

    def interpolate(self, other: Transform, progress: float) -> tuple[Transform, bool]:
        _check_progress(other, progress)
        if isinstance(other, Rotate):
            return Rotate(lerp(self.angle, other.angle, progress)), True
        return Rotate.identity(), False

    @classmethod
    def identity(cls) -> "Rotate":
        return cls(0.0)


@dataclass(frozen=True)
class Scale(Transform):
    x: float = 1.0
    y: float = 1.0

    def apply(self, canvas: Canvas, origin: Vec2f, rounding: Rounding) -> None:
        canvas.scale_about(self.x, self.y, origin.x, origin.y)

    def interpolate(self, other: Transform, progress: float) -> tuple[Transform, bool]:
        _check_progress(other, progress)
        if isinstance(other, Scale):
            return Scale(lerp(self.x, other.x, progress), lerp(self.y, other.y, progress)), True
        return Scale.identity(), False

    @classmethod
    def identity(cls) -> "Scale":
        return cls(1.0, 1.0)


@dataclass(frozen=True)
class Shear(Transform):
    """Shear about the origin; the shear factor is each angle converted to radians."""

    x_angle: float = 0.0
    y_angle: float = 0.0

    def apply(self, canvas: Canvas, origin: Vec2f, rounding: Rounding) -> None:
        canvas.shear_about(
            math.radians(self.x_angle),
            math.radians(self.y_angle),
            origin.x,
            origin.y,
        )

    def interpolate(self, other: Transform, progress: float) -> tuple[Transform, bool]:
        _check_progress(other, progress)
        if isinstance(other, Shear):
            return (
                Shear(lerp(self.x_angle, other.x_angle, progress), lerp(self.y_angle, other.y_angle, progress)),
                True,
            )
        return Shear.identity(), False

    @classmethod
    def identity(cls) -> "Shear":
        return cls(0.0, 0.0)
