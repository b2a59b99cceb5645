from __future__ import annotations

import dataclasses
from enum import Enum
import hashlib
import json
import logging
from typing import Any, Optional, Sequence

from PIL import Image

from pixmatrix_render.widget import DEFAULT_DELAY_MS, DEFAULT_DISPLAY, DisplaySpec, Root, paint_roots

from .budget import budget_durations
from .codecs import AVIFCodec, Codec, GIFCodec, WebPCodec
from .errors import FilterChainError
from .filters import ImageFilter


LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_AGE_SECONDS = 0


class Screens:
    """Frames of one render (from roots or literal images) plus their timing hints.

    Painting happens once, on the first `render` call, and is cached on the
    instance. Instances are not safe for concurrent use.
    """

    def __init__(
        self,
        roots: Sequence[Root] = (),
        images: Sequence[Image.Image] | None = None,
        delay: int = DEFAULT_DELAY_MS,
        max_age: int = DEFAULT_MAX_AGE_SECONDS,
        show_full_animation: bool = False,
        display: DisplaySpec = DEFAULT_DISPLAY,
    ) -> None:
        self.roots = list(roots)
        self.images: list[Image.Image] | None = list(images) if images is not None else None
        self.delay = delay
        self.max_age = max_age
        self.show_full_animation = show_full_animation
        self.display = display
        self._from_images = images is not None and not self.roots

    @classmethod
    def from_roots(cls, roots: Sequence[Root], display: DisplaySpec = DEFAULT_DISPLAY) -> "Screens":
        screens = cls(roots=roots, display=display)
        if screens.roots:
            first = screens.roots[0]
            if first.delay > 0:
                screens.delay = first.delay
            if first.max_age > 0:
                screens.max_age = first.max_age
            screens.show_full_animation = first.show_full_animation
        return screens

    @classmethod
    def from_images(cls, *images: Image.Image) -> "Screens":
        return cls(images=images)

    def empty(self) -> bool:
        return not self.roots and not self.images

    def render(self, *filters: Optional[ImageFilter]) -> list[Image.Image]:
        if self.images is None:
            self.images = paint_roots(*self.roots, solid_background=True, display=self.display)
            LOGGER.debug("Painted %d frames from %d roots", len(self.images), len(self.roots))
        if not self.images:
            return []
        if not filters:
            return self.images

        out: list[Image.Image] = []
        for im in self.images:
            for position, f in enumerate(filters):
                if f is None:
                    continue
                try:
                    im = f(im)
                except FilterChainError:
                    raise
                except Exception as exc:
                    raise FilterChainError(position, exc) from exc
            out.append(im)
        return out

    def encode(self, codec: Codec, max_duration: int = 0, *filters: Optional[ImageFilter]) -> bytes:
        frames = self.render(*filters)
        if not frames:
            return b""
        if self.show_full_animation:
            max_duration = 0
        durations = budget_durations(len(frames), self.delay, max_duration)
        LOGGER.debug("Encoding %d frames with %s", len(durations), codec.name)
        return codec.encode(frames[: len(durations)], durations)

    def encode_webp(self, max_duration: int = 0, *filters: Optional[ImageFilter]) -> bytes:
        return self.encode(WebPCodec(), max_duration, *filters)

    def encode_gif(self, max_duration: int = 0, *filters: Optional[ImageFilter]) -> bytes:
        return self.encode(GIFCodec(), max_duration, *filters)

    def encode_avif(self, max_duration: int = 0, *filters: Optional[ImageFilter]) -> bytes:
        return self.encode(AVIFCodec(), max_duration, *filters)

    def hash(self) -> bytes:
        """SHA-256 over the render tree and timing, without painting anything."""
        hashable: dict[str, Any] = {
            "roots": self.roots,
            "images": None,
            "delay": self.delay,
            "max_age": self.max_age,
        }
        if not self.roots:
            hashable["images"] = self.images if self._from_images else None
        payload = json.dumps(_canonical(hashable), sort_keys=True, separators=(",", ":"))
        return hashlib.sha256(payload.encode("utf-8")).digest()


def _canonical(value: Any) -> Any:
    if value is None or isinstance(value, (bool, int, str)):
        return value
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, Enum):
        return _canonical(value.value)
    if isinstance(value, (bytes, bytearray)):
        return {"type": "bytes", "sha256": hashlib.sha256(bytes(value)).hexdigest()}
    if isinstance(value, Image.Image):
        return {
            "type": "image",
            "mode": value.mode,
            "size": list(value.size),
            "sha256": hashlib.sha256(value.tobytes()).hexdigest(),
        }
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        out: dict[str, Any] = {"type": type(value).__name__}
        for f in dataclasses.fields(value):
            if f.name.startswith("_"):
                continue
            out[f.name] = _canonical(getattr(value, f.name))
        return out
    if isinstance(value, dict):
        return {str(k): _canonical(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_canonical(v) for v in value]
    raise TypeError(f"cannot hash value of type {type(value).__name__}")
