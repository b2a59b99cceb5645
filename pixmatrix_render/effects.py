"""Whole-image pixel effects shared by the filter widgets and the encode filters.

Every function takes an image and returns a new RGBA image; the input is never
modified.
"""

from __future__ import annotations

import numpy as np
from PIL import Image, ImageEnhance, ImageFilter, ImageOps

from .colors import rotate_hue


_SEPIA = np.array(
    [
        [0.393, 0.769, 0.189],
        [0.349, 0.686, 0.168],
        [0.272, 0.534, 0.131],
    ],
    dtype=np.float64,
)

# 5x5 Laplacian used for edge detection with a radius above one.
_EDGE_5X5 = (
    -1, -1, -1, -1, -1,
    -1, -1, -1, -1, -1,
    -1, -1, 24, -1, -1,
    -1, -1, -1, -1, -1,
    -1, -1, -1, -1, -1,
)


def _rgba(img: Image.Image) -> Image.Image:
    return img if img.mode == "RGBA" else img.convert("RGBA")


def _on_rgb(img: Image.Image, op) -> Image.Image:
    """Run `op` on the RGB channels and put the original alpha back."""
    src = _rgba(img)
    out = op(src.convert("RGB")).convert("RGBA")
    out.putalpha(src.getchannel("A"))
    return out


def _apply_lut(img: Image.Image, lut: np.ndarray) -> Image.Image:
    src = _rgba(img)
    px = np.asarray(src, dtype=np.uint8).copy()
    px[:, :, :3] = lut[px[:, :, :3]]
    return Image.fromarray(px)


def blur(img: Image.Image, radius: float) -> Image.Image:
    if radius <= 0:
        return _rgba(img).copy()
    return _rgba(img).filter(ImageFilter.GaussianBlur(radius))


def sharpen(img: Image.Image) -> Image.Image:
    return _on_rgb(img, lambda rgb: rgb.filter(ImageFilter.SHARPEN))


def emboss(img: Image.Image) -> Image.Image:
    return _on_rgb(img, lambda rgb: rgb.filter(ImageFilter.EMBOSS))


def edge_detect(img: Image.Image, radius: float = 1.0) -> Image.Image:
    if radius > 1:
        kernel = ImageFilter.Kernel((5, 5), _EDGE_5X5, scale=1)
        return _on_rgb(img, lambda rgb: rgb.filter(kernel))
    return _on_rgb(img, lambda rgb: rgb.filter(ImageFilter.FIND_EDGES))


def threshold(img: Image.Image, level: int) -> Image.Image:
    """Pixels whose luminance is at least `level` become white, the rest black."""
    src = _rgba(img)
    px = np.asarray(src, dtype=np.uint8).copy()
    luma = np.asarray(src.convert("L"), dtype=np.uint8)
    on = (luma >= int(level))[:, :, None]
    px[:, :, :3] = np.where(on, 255, 0).astype(np.uint8)
    return Image.fromarray(px)


def brightness(img: Image.Image, change: float) -> Image.Image:
    """Scale RGB by `1 + change`; `change` of -1 is black, 0 is unchanged."""
    levels = np.arange(256, dtype=np.float64) * (1.0 + change)
    return _apply_lut(img, np.clip(np.rint(levels), 0, 255).astype(np.uint8))


def contrast(img: Image.Image, factor: float) -> Image.Image:
    return _on_rgb(img, lambda rgb: ImageEnhance.Contrast(rgb).enhance(factor))


def gamma(img: Image.Image, value: float) -> Image.Image:
    if value <= 0:
        raise ValueError("gamma must be > 0")
    levels = 255.0 * np.power(np.arange(256, dtype=np.float64) / 255.0, 1.0 / value)
    return _apply_lut(img, np.clip(np.rint(levels), 0, 255).astype(np.uint8))


def hue(img: Image.Image, degrees: float) -> Image.Image:
    src = _rgba(img)
    if degrees % 360 == 0:
        return src.copy()
    px = np.asarray(src, dtype=np.float64) / 255.0
    r, g, b = rotate_hue(px[:, :, 0], px[:, :, 1], px[:, :, 2], degrees)
    out = np.asarray(src, dtype=np.uint8).copy()
    out[:, :, :3] = np.clip(np.rint(np.stack([r, g, b], axis=-1) * 255.0), 0, 255).astype(np.uint8)
    return Image.fromarray(out)


def saturation(img: Image.Image, change: float) -> Image.Image:
    """Adjust saturation; `change` of -1 is fully desaturated, 0 is unchanged."""
    return _on_rgb(img, lambda rgb: ImageEnhance.Color(rgb).enhance(max(0.0, 1.0 + change)))


def grayscale(img: Image.Image) -> Image.Image:
    return _on_rgb(img, lambda rgb: ImageOps.grayscale(rgb))


def sepia(img: Image.Image) -> Image.Image:
    src = _rgba(img)
    px = np.asarray(src, dtype=np.uint8).copy()
    rgb = px[:, :, :3].astype(np.float64) @ _SEPIA.T
    px[:, :, :3] = np.clip(rgb, 0, 255).astype(np.uint8)
    return Image.fromarray(px)


def invert(img: Image.Image) -> Image.Image:
    src = _rgba(img)
    px = np.asarray(src, dtype=np.uint8).copy()
    px[:, :, :3] = 255 - px[:, :, :3]
    return Image.fromarray(px)


def flip_horizontal(img: Image.Image) -> Image.Image:
    return ImageOps.mirror(_rgba(img))


def flip_vertical(img: Image.Image) -> Image.Image:
    return ImageOps.flip(_rgba(img))
