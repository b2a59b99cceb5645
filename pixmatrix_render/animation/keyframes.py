from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Sequence

from .curves import LINEAR, Curve
from .transforms import Transform


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Keyframe:
    """Transforms reached at `percentage` (0.0 to 1.0) of the animation."""

    percentage: float
    transforms: tuple[Transform, ...] = field(default_factory=tuple)
    curve: Curve = LINEAR

    def __post_init__(self) -> None:
        if not 0.0 <= self.percentage <= 1.0:
            raise ValueError(f"keyframe percentage must be within [0, 1], got {self.percentage!r}")
        object.__setattr__(self, "transforms", tuple(self.transforms))


def process_keyframes(keyframes: Sequence[Keyframe]) -> list[Keyframe]:
    """Sort by percentage and make sure the 0% and 100% frames exist."""
    ordered = sorted(keyframes, key=lambda kf: kf.percentage)
    if not ordered or ordered[0].percentage > 0.0:
        ordered.insert(0, Keyframe(0.0))
    if ordered[-1].percentage < 1.0:
        ordered.append(Keyframe(1.0))
    return ordered


def interpolate_transforms(
    lhs: Sequence[Transform],
    rhs: Sequence[Transform],
    progress: float,
) -> list[Transform]:
    result: list[Transform] = []
    for idx in range(max(len(lhs), len(rhs))):
        left = lhs[idx] if idx < len(lhs) else type(rhs[idx]).identity()
        right = rhs[idx] if idx < len(rhs) else type(lhs[idx]).identity()
        value, ok = left.interpolate(right, progress)
        if not ok:
            LOGGER.debug(
                "Skipping transform pair at index %d; %s cannot blend into %s",
                idx,
                type(left).__name__,
                type(right).__name__,
            )
        result.append(value)
    return result


def find_keyframes(keyframes: Sequence[Keyframe], progress: float) -> tuple[Keyframe, Keyframe, float]:
    """Pick the keyframe pair around `progress` and the eased progress between them."""
    for start, end in zip(keyframes, keyframes[1:]):
        if start.percentage <= progress <= end.percentage:
            span = end.percentage - start.percentage
            local = 0.0 if span <= 0 else (progress - start.percentage) / span
            return start, end, min(1.0, max(0.0, start.curve.transform(local)))
    last = keyframes[-1]
    return last, last, 1.0
