from __future__ import annotations

from typing import Sequence, Union

import numpy as np


RGBA = tuple[int, int, int, int]
ColorLike = Union[str, Sequence[int]]

BLACK: RGBA = (0, 0, 0, 255)
WHITE: RGBA = (255, 255, 255, 255)
TRANSPARENT: RGBA = (0, 0, 0, 0)


def parse_color(value: ColorLike) -> RGBA:
    """Accepts `#rgb`, `#rgba`, `#rrggbb`, `#rrggbbaa` or a 3/4-tuple of 0..255 ints."""
    if isinstance(value, str):
        raw = value.strip()
        if raw.startswith("#"):
            raw = raw[1:]
        if len(raw) in (3, 4):
            raw = "".join(ch * 2 for ch in raw)
        if len(raw) not in (6, 8):
            raise ValueError(f"color must be #RGB, #RGBA, #RRGGBB or #RRGGBBAA, got `{value}`")
        try:
            channels = [int(raw[i : i + 2], 16) for i in range(0, len(raw), 2)]
        except ValueError as exc:
            raise ValueError(f"invalid hex color `{value}`") from exc
        if len(channels) == 3:
            channels.append(255)
        return (channels[0], channels[1], channels[2], channels[3])

    channels = [int(c) for c in value]
    if len(channels) == 3:
        channels.append(255)
    if len(channels) != 4:
        raise ValueError(f"color tuple must have 3 or 4 channels, got {len(channels)}")
    if any(c < 0 or c > 255 for c in channels):
        raise ValueError(f"color channels must be within 0..255, got {tuple(channels)}")
    return (channels[0], channels[1], channels[2], channels[3])


def rgb_to_hsl(r: np.ndarray, g: np.ndarray, b: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """RGB in [0, 1] to hue in degrees [0, 360), saturation and lightness in [0, 1]."""
    mx = np.maximum(np.maximum(r, g), b)
    mn = np.minimum(np.minimum(r, g), b)
    light = (mx + mn) / 2.0
    d = mx - mn
    chromatic = d > 0
    safe_d = np.where(chromatic, d, 1.0)

    lo_den = mx + mn
    hi_den = 2.0 - mx - mn
    sat = np.where(
        light > 0.5,
        d / np.where(hi_den == 0, 1.0, hi_den),
        d / np.where(lo_den == 0, 1.0, lo_den),
    )
    sat = np.where(chromatic, sat, 0.0)

    hue = np.where(
        mx == r,
        (g - b) / safe_d + np.where(g < b, 6.0, 0.0),
        np.where(mx == g, (b - r) / safe_d + 2.0, (r - g) / safe_d + 4.0),
    )
    hue = np.where(chromatic, hue * 60.0, 0.0)
    return hue, sat, light


def hsl_to_rgb(h: np.ndarray, s: np.ndarray, l: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    q = np.where(l < 0.5, l * (1.0 + s), l + s - l * s)
    p = 2.0 * l - q
    r = _hue_to_channel(p, q, h + 120.0)
    g = _hue_to_channel(p, q, h)
    b = _hue_to_channel(p, q, h - 120.0)
    achromatic = s == 0
    return np.where(achromatic, l, r), np.where(achromatic, l, g), np.where(achromatic, l, b)


def rotate_hue(
    r: np.ndarray, g: np.ndarray, b: np.ndarray, degrees: float
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    h, s, l = rgb_to_hsl(r, g, b)
    h = np.mod(h + degrees, 360.0)
    return hsl_to_rgb(h, s, l)


def _hue_to_channel(p: np.ndarray, q: np.ndarray, t: np.ndarray) -> np.ndarray:
    t = np.mod(t, 360.0)
    return np.select(
        [t < 60.0, t < 180.0, t < 240.0],
        [p + (q - p) * t / 60.0, q, p + (q - p) * (240.0 - t) / 60.0],
        default=p,
    )
