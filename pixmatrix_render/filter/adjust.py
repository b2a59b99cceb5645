from __future__ import annotations

from dataclasses import dataclass

from PIL import Image

from .. import effects
from .base import PixelFilter


@dataclass
class Brightness(PixelFilter):
    """`change` of -1 turns the child black, 0 leaves it unchanged."""

    change: float = 0.0

    def effect(self, img: Image.Image) -> Image.Image:
        return effects.brightness(img, self.change)


@dataclass
class Contrast(PixelFilter):
    factor: float = 1.0

    def effect(self, img: Image.Image) -> Image.Image:
        return effects.contrast(img, self.factor)


@dataclass
class Gamma(PixelFilter):
    gamma: float = 1.0

    def __post_init__(self) -> None:
        if self.gamma <= 0:
            raise ValueError("gamma must be > 0")

    def effect(self, img: Image.Image) -> Image.Image:
        return effects.gamma(img, self.gamma)


@dataclass
class Hue(PixelFilter):
    """Rotates hue by whole degrees."""

    change: float = 0.0

    def effect(self, img: Image.Image) -> Image.Image:
        return effects.hue(img, int(self.change))


@dataclass
class Saturation(PixelFilter):
    change: float = 0.0

    def effect(self, img: Image.Image) -> Image.Image:
        return effects.saturation(img, self.change)


@dataclass
class Grayscale(PixelFilter):
    def effect(self, img: Image.Image) -> Image.Image:
        return effects.grayscale(img)


@dataclass
class Sepia(PixelFilter):
    def effect(self, img: Image.Image) -> Image.Image:
        return effects.sepia(img)


@dataclass
class Invert(PixelFilter):
    def effect(self, img: Image.Image) -> Image.Image:
        return effects.invert(img)


@dataclass
class Threshold(PixelFilter):
    level: float = 128.0

    def effect(self, img: Image.Image) -> Image.Image:
        return effects.threshold(img, min(255, max(0, int(self.level))))
