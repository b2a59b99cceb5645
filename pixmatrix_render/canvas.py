from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
import math
from typing import Iterator, Sequence

import numpy as np
from PIL import Image, ImageDraw

from .colors import RGBA, WHITE


_EPS = 1e-9

# Affine matrices are stored as 3x3 float64 arrays; points map as M @ (x, y, 1).
_IDENTITY = np.eye(3, dtype=np.float64)


@dataclass
class _State:
    matrix: np.ndarray
    color: RGBA
    line_width: float


def _translation(dx: float, dy: float) -> np.ndarray:
    m = np.eye(3, dtype=np.float64)
    m[0, 2] = dx
    m[1, 2] = dy
    return m


def _rotation(angle: float) -> np.ndarray:
    c = math.cos(angle)
    s = math.sin(angle)
    return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]], dtype=np.float64)


def _scaling(sx: float, sy: float) -> np.ndarray:
    return np.array([[sx, 0.0, 0.0], [0.0, sy, 0.0], [0.0, 0.0, 1.0]], dtype=np.float64)


def _shearing(sx: float, sy: float) -> np.ndarray:
    return np.array([[1.0, sx, 0.0], [sy, 1.0, 0.0], [0.0, 0.0, 1.0]], dtype=np.float64)


class Canvas:
    """RGBA raster with a gg-style transform stack.

    Transform calls post-multiply the current matrix, so the most recent call is
    the first one applied to user-space coordinates.
    """

    def __init__(self, width: int, height: int, background: RGBA | None = None) -> None:
        if width < 0 or height < 0:
            raise ValueError("canvas dimensions must be >= 0")
        self.width = int(width)
        self.height = int(height)
        self.pixels = np.zeros((self.height, self.width, 4), dtype=np.uint8)
        self._state = _State(matrix=_IDENTITY.copy(), color=WHITE, line_width=1.0)
        self._stack: list[_State] = []
        if background is not None:
            self.clear(background)

    @classmethod
    def from_image(cls, img: Image.Image) -> "Canvas":
        canvas = cls(img.width, img.height)
        if img.width > 0 and img.height > 0:
            canvas.pixels[:, :, :] = np.asarray(img.convert("RGBA"), dtype=np.uint8)
        return canvas

    # -- state -----------------------------------------------------------------

    @property
    def matrix(self) -> np.ndarray:
        return self._state.matrix

    @property
    def color(self) -> RGBA:
        return self._state.color

    @property
    def line_width(self) -> float:
        return self._state.line_width

    def push(self) -> None:
        self._stack.append(
            _State(
                matrix=self._state.matrix.copy(),
                color=self._state.color,
                line_width=self._state.line_width,
            )
        )

    def pop(self) -> None:
        if not self._stack:
            raise RuntimeError("canvas state stack is empty")
        self._state = self._stack.pop()

    @contextmanager
    def saved(self) -> Iterator["Canvas"]:
        self.push()
        try:
            yield self
        finally:
            self.pop()

    def set_color(self, color: RGBA) -> None:
        self._state.color = (int(color[0]), int(color[1]), int(color[2]), int(color[3]))

    def set_line_width(self, width: float) -> None:
        self._state.line_width = float(width)

    # -- transforms ------------------------------------------------------------

    def _concat(self, m: np.ndarray) -> None:
        self._state.matrix = self._state.matrix @ m

    def translate(self, dx: float, dy: float) -> None:
        self._concat(_translation(dx, dy))

    def rotate(self, angle: float) -> None:
        self._concat(_rotation(angle))

    def rotate_about(self, angle: float, x: float, y: float) -> None:
        self.translate(x, y)
        self.rotate(angle)
        self.translate(-x, -y)

    def scale(self, sx: float, sy: float) -> None:
        self._concat(_scaling(sx, sy))

    def scale_about(self, sx: float, sy: float, x: float, y: float) -> None:
        self.translate(x, y)
        self.scale(sx, sy)
        self.translate(-x, -y)

    def shear(self, sx: float, sy: float) -> None:
        self._concat(_shearing(sx, sy))

    def shear_about(self, sx: float, sy: float, x: float, y: float) -> None:
        self.translate(x, y)
        self.shear(sx, sy)
        self.translate(-x, -y)

    def transform_point(self, x: float, y: float) -> tuple[float, float]:
        m = self._state.matrix
        return (
            float(m[0, 0] * x + m[0, 1] * y + m[0, 2]),
            float(m[1, 0] * x + m[1, 1] * y + m[1, 2]),
        )

    def _integer_offset(self, x: float, y: float) -> tuple[int, int] | None:
        """Device offset for (x, y) when the current transform is an integral translation."""
        m = self._state.matrix
        if abs(m[0, 0] - 1.0) > _EPS or abs(m[1, 1] - 1.0) > _EPS:
            return None
        if abs(m[0, 1]) > _EPS or abs(m[1, 0]) > _EPS:
            return None
        tx = m[0, 2] + x
        ty = m[1, 2] + y
        if abs(tx - round(tx)) > _EPS or abs(ty - round(ty)) > _EPS:
            return None
        return int(round(tx)), int(round(ty))

    def _device_scale(self) -> float:
        m = self._state.matrix
        return math.sqrt(abs(m[0, 0] * m[1, 1] - m[0, 1] * m[1, 0]))

    # -- drawing ---------------------------------------------------------------

    def clear(self, color: RGBA) -> None:
        self.pixels[:, :, :] = np.asarray(color, dtype=np.uint8)

    def set_pixel(self, x: float, y: float) -> None:
        tx, ty = self.transform_point(x, y)
        ix = int(math.floor(tx))
        iy = int(math.floor(ty))
        if 0 <= ix < self.width and 0 <= iy < self.height:
            self.pixels[iy, ix] = np.asarray(self._state.color, dtype=np.uint8)

    def fill_rect(self, x: float, y: float, width: float, height: float) -> None:
        if width <= 0 or height <= 0:
            return
        offset = self._integer_offset(x, y)
        if offset is not None and float(width).is_integer() and float(height).is_integer():
            x0, y0 = offset
            x1 = min(self.width, x0 + int(width))
            y1 = min(self.height, y0 + int(height))
            x0 = max(0, x0)
            y0 = max(0, y0)
            if x1 <= x0 or y1 <= y0:
                return
            coverage = np.ones((y1 - y0, x1 - x0), dtype=np.float32)
            _blend_color(self.pixels[y0:y1, x0:x1], coverage, self._state.color)
            return
        self.fill_polygon([(x, y), (x + width, y), (x + width, y + height), (x, y + height)])

    def fill_polygon(self, points: Sequence[tuple[float, float]]) -> None:
        if len(points) < 3 or self.width == 0 or self.height == 0:
            return
        device = [self.transform_point(px, py) for px, py in points]
        mask = Image.new("L", (self.width, self.height), 0)
        ImageDraw.Draw(mask).polygon(device, fill=255)
        self._blend_mask(mask)

    def stroke_polyline(self, points: Sequence[tuple[float, float]], closed: bool = False) -> None:
        if len(points) < 2 or self.width == 0 or self.height == 0:
            return
        device = [self.transform_point(px, py) for px, py in points]
        if closed:
            device.append(device[0])
        width = max(1, int(round(self._state.line_width * self._device_scale())))
        mask = Image.new("L", (self.width, self.height), 0)
        ImageDraw.Draw(mask).line(device, fill=255, width=width, joint="curve")
        self._blend_mask(mask)

    def stroke_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self.stroke_polyline([(x1, y1), (x2, y2)])

    def stroke_arc(self, cx: float, cy: float, radius: float, start: float, end: float) -> None:
        sweep = end - start
        segments = max(8, int(math.ceil(abs(sweep) * max(radius, 1.0) / 2.0)))
        points = [
            (
                cx + radius * math.cos(start + sweep * i / segments),
                cy + radius * math.sin(start + sweep * i / segments),
            )
            for i in range(segments + 1)
        ]
        self.stroke_polyline(points)

    def draw_image(self, img: Image.Image, x: float = 0, y: float = 0) -> None:
        if img.width == 0 or img.height == 0 or self.width == 0 or self.height == 0:
            return
        src = img if img.mode == "RGBA" else img.convert("RGBA")
        offset = self._integer_offset(x, y)
        if offset is not None:
            _composite(self.pixels, np.asarray(src, dtype=np.uint8), offset[0], offset[1])
            return

        m = self._state.matrix @ _translation(x, y)
        # A collapsed transform covers no pixels.
        if abs(np.linalg.det(m[:2, :2])) < _EPS:
            return
        inv = np.linalg.inv(m)
        resampled = src.transform(
            (self.width, self.height),
            Image.Transform.AFFINE,
            data=(inv[0, 0], inv[0, 1], inv[0, 2], inv[1, 0], inv[1, 1], inv[1, 2]),
            resample=Image.Resampling.NEAREST,
            fillcolor=(0, 0, 0, 0),
        )
        _composite(self.pixels, np.asarray(resampled, dtype=np.uint8), 0, 0)

    def image(self) -> Image.Image:
        if self.width == 0 or self.height == 0:
            return Image.new("RGBA", (self.width, self.height))
        return Image.fromarray(self.pixels.copy())

    def _blend_mask(self, mask: Image.Image) -> None:
        cov = np.asarray(mask, dtype=np.float32) / 255.0
        ys, xs = np.nonzero(cov)
        if ys.size == 0:
            return
        y0, y1 = int(ys.min()), int(ys.max()) + 1
        x0, x1 = int(xs.min()), int(xs.max()) + 1
        _blend_color(self.pixels[y0:y1, x0:x1], cov[y0:y1, x0:x1], self._state.color)


def _blend_color(patch: np.ndarray, coverage: np.ndarray, color: RGBA) -> None:
    src = np.empty(coverage.shape + (4,), dtype=np.float32)
    src[:, :, :3] = np.asarray(color[:3], dtype=np.float32)
    src[:, :, 3] = coverage * float(color[3])
    _source_over(patch, src)


def _composite(dst: np.ndarray, src: np.ndarray, x: int, y: int) -> None:
    h, w, _ = src.shape
    x0 = max(0, x)
    y0 = max(0, y)
    x1 = min(dst.shape[1], x + w)
    y1 = min(dst.shape[0], y + h)
    if x1 <= x0 or y1 <= y0:
        return
    patch = src[y0 - y : y1 - y, x0 - x : x1 - x].astype(np.float32)
    _source_over(dst[y0:y1, x0:x1], patch)


def _source_over(patch: np.ndarray, src: np.ndarray) -> None:
    """Straight-alpha source-over of float `src` (0..255 channels) onto uint8 `patch` in place."""
    src_alpha = src[:, :, 3] / 255.0
    touched = src_alpha > 0
    if not np.any(touched):
        return
    dst_rgb = patch[:, :, :3].astype(np.float32)
    dst_alpha = patch[:, :, 3].astype(np.float32) / 255.0

    out_alpha = src_alpha + dst_alpha * (1.0 - src_alpha)
    out_rgb_num = src[:, :, :3] * src_alpha[:, :, None] + dst_rgb * (dst_alpha * (1.0 - src_alpha))[:, :, None]
    safe_alpha = np.where(out_alpha > 1e-6, out_alpha, 1.0)
    out_rgb = out_rgb_num / safe_alpha[:, :, None]

    rgb = np.clip(np.rint(out_rgb), 0, 255).astype(np.uint8)
    alpha = np.clip(np.rint(out_alpha * 255.0), 0, 255).astype(np.uint8)
    patch[:, :, :3] = np.where(touched[:, :, None], rgb, patch[:, :, :3])
    patch[:, :, 3] = np.where(touched, alpha, patch[:, :, 3])
