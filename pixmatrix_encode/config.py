from __future__ import annotations

from dataclasses import dataclass, replace
import logging
import os
import threading


LOGGER = logging.getLogger(__name__)

WEBP_LEVEL_RANGE = (0, 9)
AVIF_SPEED_RANGE = (0, 10)
AVIF_QUALITY_RANGE = (0, 100)
GIF_COLORS_RANGE = (2, 256)


@dataclass(frozen=True)
class EncoderSettings:
    """Codec knobs shared by every Screens encode call in the process."""

    webp_level: int = 6
    avif_speed: int = 0
    avif_quality: int = 100
    gif_colors: int = 256

    def __post_init__(self) -> None:
        _check_range("webp_level", self.webp_level, WEBP_LEVEL_RANGE)
        _check_range("avif_speed", self.avif_speed, AVIF_SPEED_RANGE)
        _check_range("avif_quality", self.avif_quality, AVIF_QUALITY_RANGE)
        _check_range("gif_colors", self.gif_colors, GIF_COLORS_RANGE)

    @classmethod
    def from_env(cls) -> "EncoderSettings":
        defaults = cls()
        return cls(
            webp_level=_env_int("PIXMATRIX_WEBP_LEVEL", defaults.webp_level, WEBP_LEVEL_RANGE),
            avif_speed=_env_int("PIXMATRIX_AVIF_SPEED", defaults.avif_speed, AVIF_SPEED_RANGE),
            avif_quality=_env_int("PIXMATRIX_AVIF_QUALITY", defaults.avif_quality, AVIF_QUALITY_RANGE),
            gif_colors=_env_int("PIXMATRIX_GIF_COLORS", defaults.gif_colors, GIF_COLORS_RANGE),
        )


def _check_range(name: str, value: int, bounds: tuple[int, int]) -> None:
    lo, hi = bounds
    if not lo <= value <= hi:
        raise ValueError(f"{name} must be within [{lo}, {hi}], got {value}")


def _env_int(env_var: str, default: int, bounds: tuple[int, int]) -> int:
    raw = os.getenv(env_var, "").strip()
    if raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        LOGGER.warning("ignoring %s=%r: not an integer; using %d", env_var, raw, default)
        return default
    lo, hi = bounds
    if not lo <= value <= hi:
        LOGGER.warning("ignoring %s=%d: outside [%d, %d]; using %d", env_var, value, lo, hi, default)
        return default
    return value


_SETTINGS_LOCK = threading.Lock()
_SETTINGS: EncoderSettings | None = None


def default_settings() -> EncoderSettings:
    global _SETTINGS
    with _SETTINGS_LOCK:
        if _SETTINGS is None:
            _SETTINGS = EncoderSettings.from_env()
        return _SETTINGS


def set_default_settings(settings: EncoderSettings | None) -> None:
    """Replace the process default; None re-reads the environment on next use."""
    global _SETTINGS
    with _SETTINGS_LOCK:
        _SETTINGS = settings


def set_webp_level(level: int) -> None:
    lo, hi = WEBP_LEVEL_RANGE
    if not lo <= level <= hi:
        LOGGER.warning("invalid WebP compression level %d; must be within [%d, %d]", level, lo, hi)
        return
    current = default_settings()
    set_default_settings(replace(current, webp_level=level))
