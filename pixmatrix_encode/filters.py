from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence

import numpy as np
from PIL import Image
import torch

from pixmatrix_render import effects
from pixmatrix_render.widget import DEFAULT_FRAME_HEIGHT, DEFAULT_FRAME_WIDTH, DisplaySpec

from .errors import FilterChainError, UnknownColorFilterError


ImageFilter = Callable[[Image.Image], Image.Image]
Matrix3 = tuple[tuple[float, float, float], tuple[float, float, float], tuple[float, float, float]]


def _to_tensor(img: Image.Image) -> torch.Tensor:
    rgba = img if img.mode == "RGBA" else img.convert("RGBA")
    return torch.from_numpy(np.asarray(rgba, dtype=np.uint8).copy())


def _from_tensor(tensor_h_w_4: torch.Tensor) -> Image.Image:
    return Image.fromarray(tensor_h_w_4.contiguous().numpy())


def chain(*filters: Optional[ImageFilter]) -> ImageFilter:
    """Compose filters left to right; `None` entries are skipped."""

    def apply(img: Image.Image) -> Image.Image:
        for position, f in enumerate(filters):
            if f is None:
                continue
            try:
                img = f(img)
            except Exception as exc:
                raise FilterChainError(position, exc) from exc
        return img

    return apply


def magnify(factor: int) -> ImageFilter:
    """Nearest-neighbour upscale by an integer factor; factors <= 1 are a no-op."""

    def apply(img: Image.Image) -> Image.Image:
        if factor <= 1:
            return img
        px = _to_tensor(img)
        if px.shape[0] == 0 or px.shape[1] == 0:
            return Image.new("RGBA", (img.width * factor, img.height * factor))
        out = px.repeat_interleave(factor, dim=0).repeat_interleave(factor, dim=1)
        return _from_tensor(out)

    return apply


def color_matrix(matrix: Sequence[Sequence[float]]) -> ImageFilter:
    """Per-pixel 3x3 matrix over RGB, clamped and truncated to bytes; alpha is kept."""
    weights = torch.tensor(matrix, dtype=torch.float32)
    if tuple(weights.shape) != (3, 3):
        raise ValueError(f"color matrix must be 3x3, got {tuple(weights.shape)}")
    if not torch.isfinite(weights).all():
        raise ValueError("color matrix must contain only finite values")

    def apply(img: Image.Image) -> Image.Image:
        px = _to_tensor(img)
        if px.numel() == 0:
            return img.convert("RGBA")
        rgb = torch.matmul(px[:, :, :3].to(torch.float32), weights.transpose(0, 1))
        out = px.clone()
        out[:, :, :3] = torch.clamp(rgb, 0, 255).to(torch.uint8)
        return _from_tensor(out)

    return apply


def blur(radius: float) -> ImageFilter:
    return lambda img: effects.blur(img, radius)


def sharpen() -> ImageFilter:
    return effects.sharpen


def emboss() -> ImageFilter:
    return effects.emboss


def edge_detect(radius: float = 1.0) -> ImageFilter:
    return lambda img: effects.edge_detect(img, radius)


def threshold(level: int) -> ImageFilter:
    return lambda img: effects.threshold(img, level)


def brightness(change: float) -> ImageFilter:
    return lambda img: effects.brightness(img, change)


def contrast(factor: float) -> ImageFilter:
    return lambda img: effects.contrast(img, factor)


def gamma(value: float) -> ImageFilter:
    if value <= 0:
        raise ValueError("gamma must be > 0")
    return lambda img: effects.gamma(img, value)


def hue(degrees: float) -> ImageFilter:
    return lambda img: effects.hue(img, degrees)


def saturation(change: float) -> ImageFilter:
    return lambda img: effects.saturation(img, change)


def grayscale() -> ImageFilter:
    return effects.grayscale


def sepia() -> ImageFilter:
    return effects.sepia


def invert() -> ImageFilter:
    return effects.invert


def flip_horizontal() -> ImageFilter:
    return effects.flip_horizontal


def flip_vertical() -> ImageFilter:
    return effects.flip_vertical


class ColorFilterType(Enum):
    NONE = "none"
    DIMMED = "dimmed"
    REDSHIFT = "redshift"
    WARM = "warm"
    SUNSET = "sunset"
    SEPIA = "sepia"
    VINTAGE = "vintage"
    DUSK = "dusk"
    COOL = "cool"
    BW = "bw"
    ICE = "ice"
    MOONLIGHT = "moonlight"
    NEON = "neon"
    PASTEL = "pastel"

    @property
    def matrix(self) -> Matrix3:
        return _COLOR_FILTERS[self][0]

    @property
    def description(self) -> str:
        return _COLOR_FILTERS[self][1]


_COLOR_FILTERS: dict[ColorFilterType, tuple[Matrix3, str]] = {
    ColorFilterType.NONE: (
        ((1, 0, 0), (0, 1, 0), (0, 0, 1)),
        "No transformation",
    ),
    ColorFilterType.DIMMED: (
        ((0.25, 0, 0), (0, 0.25, 0), (0, 0, 0.25)),
        "Darkens image uniformly while preserving hue",
    ),
    ColorFilterType.REDSHIFT: (
        ((1.2066, 0.3380, 0.0383), (-0.0164, 0.8985, 0.0098), (-0.0156, -0.0500, 0.4201)),
        "Chromatic adaptation towards a warm (~3400K) white point",
    ),
    ColorFilterType.WARM: (
        ((1.1, 0.05, 0.0), (0.0, 1.0, 0.0), (0.05, 0.0, 0.9)),
        "Adds a subtle warm, orange/yellow hue",
    ),
    ColorFilterType.SUNSET: (
        ((1.2, 0.2, 0.0), (0.1, 1.0, 0.1), (0.0, 0.1, 0.6)),
        "Deep pink and orange of a setting sun",
    ),
    ColorFilterType.SEPIA: (
        ((0.393, 0.769, 0.189), (0.349, 0.686, 0.168), (0.272, 0.534, 0.131)),
        "Warm antique brown tone of aged photographs",
    ),
    ColorFilterType.VINTAGE: (
        ((1.0, 0.6, 0.2), (0.3, 0.9, 0.2), (0.2, 0.4, 0.6)),
        "Muted brown and green nostalgic tones",
    ),
    ColorFilterType.DUSK: (
        ((1.1, 0.0, 0.2), (0.0, 0.8, 0.1), (0.0, 0.1, 0.6)),
        "Fades brightness and adds a reddish cast",
    ),
    ColorFilterType.COOL: (
        ((0.9, 0.0, 0.2), (0.0, 1.0, 0.0), (-0.1, 0.0, 1.1)),
        "Adds a cool blue tint",
    ),
    ColorFilterType.BW: (
        ((0.299, 0.587, 0.114), (0.299, 0.587, 0.114), (0.299, 0.587, 0.114)),
        "Perceptual grayscale using luminance weights",
    ),
    ColorFilterType.ICE: (
        ((0.8, 0.9, 1.0), (0.8, 0.9, 1.0), (1.0, 1.0, 1.2)),
        "Pale desaturation with a bluish cast",
    ),
    ColorFilterType.MOONLIGHT: (
        ((0.6, 0.2, 0.4), (0.2, 0.7, 0.2), (0.3, 0.3, 0.9)),
        "Dim blue-gray night lighting",
    ),
    ColorFilterType.NEON: (
        ((0.9, 0.0, 1.1), (0.0, 1.0, 0.6), (0.2, 0.5, 1.3)),
        "Boosted contrast with magenta-blue highlights",
    ),
    ColorFilterType.PASTEL: (
        ((1.2, 0.1, 0.1), (0.1, 1.2, 0.1), (0.1, 0.1, 1.2)),
        "Softened tones with a gentle highlight boost",
    ),
}


def supported_color_filters() -> list[str]:
    return sorted(t.value for t in ColorFilterType)


def validate_color_filter(name: str | ColorFilterType | None) -> ColorFilterType:
    """Resolve a filter name; an empty or missing name means `none`."""
    if isinstance(name, ColorFilterType):
        return name
    if not name:
        return ColorFilterType.NONE
    try:
        return ColorFilterType(name)
    except ValueError:
        raise UnknownColorFilterError(name, supported_color_filters()) from None


def from_filter_type(filter_type: ColorFilterType | str) -> ImageFilter | None:
    """Color matrix filter for `filter_type`, or None for `none`."""
    resolved = validate_color_filter(filter_type)
    if resolved is ColorFilterType.NONE:
        return None
    return color_matrix(resolved.matrix)


@dataclass(frozen=True)
class RenderFilters:
    """Caller-facing output knobs: integer magnification, a color filter and 2x rendering."""

    magnify: int = 1
    color_filter: ColorFilterType | str = ColorFilterType.NONE
    output_2x: bool = False

    def __post_init__(self) -> None:
        if self.magnify < 1:
            raise ValueError(f"magnify must be >= 1, got {self.magnify}")
        object.__setattr__(self, "color_filter", validate_color_filter(self.color_filter))

    def display(self, width: int = DEFAULT_FRAME_WIDTH, height: int = DEFAULT_FRAME_HEIGHT) -> DisplaySpec:
        return DisplaySpec(width=width, height=height, is_2x=self.output_2x)

    def build_chain(self) -> list[ImageFilter] | None:
        filters: list[ImageFilter] = []
        if self.magnify > 1:
            filters.append(magnify(self.magnify))
        color = from_filter_type(self.color_filter)
        if color is not None:
            filters.append(color)
        return filters or None

    def __str__(self) -> str:
        return f"Magnify={self.magnify}, ColorFilter={self.color_filter.value!r}, Output2x={self.output_2x}"
