from __future__ import annotations

from pathlib import Path
import threading

from PIL import ImageFont

from .errors import UnknownFontError


FontFace = ImageFont.FreeTypeFont | ImageFont.ImageFont

DEFAULT_FONT = "default"

_FONT_LOCK = threading.Lock()
_FONT_CACHE: dict[str, FontFace] = {}
_FONT_SOURCES: dict[str, tuple[Path, float]] = {}


def register_font(name: str, path: str | Path, size_px: float = 8.0) -> None:
    """Make a TrueType/OpenType or Pillow bitmap (.pil) font available under `name`."""
    if not name:
        raise ValueError("font name must not be empty")
    if size_px <= 0:
        raise ValueError("font size must be > 0")
    with _FONT_LOCK:
        _FONT_SOURCES[name] = (Path(path), float(size_px))
        _FONT_CACHE.pop(name, None)


def font_names() -> list[str]:
    with _FONT_LOCK:
        return sorted({DEFAULT_FONT, *_FONT_SOURCES})


def get_font(name: str) -> FontFace:
    with _FONT_LOCK:
        cached = _FONT_CACHE.get(name)
        if cached is not None:
            return cached
        face = _load(name)
        _FONT_CACHE[name] = face
        return face


def _load(name: str) -> FontFace:
    if name == DEFAULT_FONT and name not in _FONT_SOURCES:
        return ImageFont.load_default()
    source = _FONT_SOURCES.get(name)
    if source is None:
        raise UnknownFontError(name)
    path, size_px = source
    if path.suffix.lower() == ".pil":
        return ImageFont.load(str(path))
    return ImageFont.truetype(str(path), size=max(1, int(round(size_px))))


def font_metrics(face: FontFace) -> tuple[int, int]:
    """Ascent and descent in pixels; bitmap fonts report their glyph box instead."""
    if isinstance(face, ImageFont.FreeTypeFont):
        ascent, descent = face.getmetrics()
        return int(max(1, ascent)), int(max(0, descent))
    _, top, _, bottom = face.getbbox("Ag")
    return int(max(1, bottom - top)), 0
