from __future__ import annotations

from abc import ABC, abstractmethod
import io
import logging
import os
from typing import Sequence

from PIL import Image, features

from .config import default_settings
from .errors import CodecUnavailableError


LOGGER = logging.getLogger(__name__)

# (method, quality) for each lossless WebP compression level, fastest to smallest.
_WEBP_LOSSLESS_PRESETS = (
    (0, 0),
    (1, 20),
    (2, 25),
    (3, 30),
    (3, 50),
    (4, 50),
    (4, 75),
    (4, 90),
    (5, 90),
    (6, 100),
)


class Codec(ABC):
    """Serialises frames with per-frame durations (ms) into one animated image."""

    name = "codec"

    @abstractmethod
    def encode(self, frames: Sequence[Image.Image], durations_ms: Sequence[int]) -> bytes:
        raise NotImplementedError


def _check_frames(frames: Sequence[Image.Image], durations_ms: Sequence[int]) -> None:
    if len(frames) != len(durations_ms):
        raise ValueError(f"got {len(frames)} frames but {len(durations_ms)} durations")


class WebPCodec(Codec):
    name = "webp"

    def __init__(self, level: int | None = None) -> None:
        self.level = default_settings().webp_level if level is None else int(level)
        if not 0 <= self.level < len(_WEBP_LOSSLESS_PRESETS):
            raise ValueError(f"webp level must be within [0, 9], got {self.level}")

    def encode(self, frames: Sequence[Image.Image], durations_ms: Sequence[int]) -> bytes:
        _check_frames(frames, durations_ms)
        if not frames:
            return b""
        if not features.check("webp"):
            raise CodecUnavailableError("Pillow was built without WebP support")
        method, quality = _WEBP_LOSSLESS_PRESETS[self.level]
        rgba = [f.convert("RGBA") for f in frames]
        buf = io.BytesIO()
        rgba[0].save(
            buf,
            format="WEBP",
            save_all=True,
            append_images=rgba[1:],
            duration=list(durations_ms),
            loop=0,
            lossless=True,
            method=method,
            quality=quality,
        )
        return buf.getvalue()


class GIFCodec(Codec):
    """Palette animation; each frame gets its own median-cut palette."""

    name = "gif"

    def __init__(self, colors: int | None = None) -> None:
        self.colors = default_settings().gif_colors if colors is None else int(colors)
        if not 2 <= self.colors <= 256:
            raise ValueError(f"gif colors must be within [2, 256], got {self.colors}")

    def encode(self, frames: Sequence[Image.Image], durations_ms: Sequence[int]) -> bytes:
        _check_frames(frames, durations_ms)
        if not frames:
            return b""
        paletted = [
            f.convert("RGB").quantize(colors=self.colors, method=Image.Quantize.MEDIANCUT) for f in frames
        ]
        buf = io.BytesIO()
        paletted[0].save(
            buf,
            format="GIF",
            save_all=True,
            append_images=paletted[1:],
            duration=list(durations_ms),
            loop=0,
            optimize=False,
        )
        return buf.getvalue()


class AVIFCodec(Codec):
    """Lossless 4:4:4 AVIF; speed 0 is the slowest and smallest."""

    name = "avif"

    def __init__(self, speed: int | None = None, quality: int | None = None) -> None:
        settings = default_settings()
        self.speed = settings.avif_speed if speed is None else int(speed)
        self.quality = settings.avif_quality if quality is None else int(quality)
        if not 0 <= self.speed <= 10:
            raise ValueError(f"avif speed must be within [0, 10], got {self.speed}")
        if not 0 <= self.quality <= 100:
            raise ValueError(f"avif quality must be within [0, 100], got {self.quality}")

    @staticmethod
    def available() -> bool:
        return bool(features.check("avif"))

    def encode(self, frames: Sequence[Image.Image], durations_ms: Sequence[int]) -> bytes:
        _check_frames(frames, durations_ms)
        if not frames:
            return b""
        if not self.available():
            raise CodecUnavailableError("Pillow was built without AVIF support")
        rgba = [f.convert("RGBA") for f in frames]
        buf = io.BytesIO()
        rgba[0].save(
            buf,
            format="AVIF",
            save_all=len(rgba) > 1,
            append_images=rgba[1:],
            duration=list(durations_ms),
            quality=self.quality,
            speed=self.speed,
            subsampling="4:4:4",
            max_threads=os.cpu_count() or 1,
        )
        LOGGER.debug("Encoded %d AVIF frames; speed=%d quality=%d", len(rgba), self.speed, self.quality)
        return buf.getvalue()
