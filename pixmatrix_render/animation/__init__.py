from .curves import EASE_IN, EASE_IN_OUT, EASE_OUT, LINEAR, CubicBezier, Curve, LinearCurve, parse_curve
from .keyframes import Keyframe, find_keyframes, interpolate_transforms, process_keyframes
from .transformation import Direction, Transformation
from .transforms import (
    DEFAULT_ORIGIN,
    FillMode,
    Origin,
    Rotate,
    Rounding,
    Scale,
    Shear,
    Transform,
    Translate,
    Vec2f,
    lerp,
)

__all__ = [
    "CubicBezier",
    "Curve",
    "DEFAULT_ORIGIN",
    "Direction",
    "EASE_IN",
    "EASE_IN_OUT",
    "EASE_OUT",
    "FillMode",
    "Keyframe",
    "LINEAR",
    "LinearCurve",
    "Origin",
    "Rotate",
    "Rounding",
    "Scale",
    "Shear",
    "Transform",
    "Transformation",
    "Translate",
    "Vec2f",
    "find_keyframes",
    "interpolate_transforms",
    "lerp",
    "parse_curve",
    "process_keyframes",
]
