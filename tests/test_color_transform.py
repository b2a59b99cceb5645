from __future__ import annotations

import unittest

import numpy as np
from PIL import Image

from pixmatrix_render.box import Box
from pixmatrix_render.color_transform import ColorTransform
from pixmatrix_render.geometry import EMPTY_RECT, Rect
from pixmatrix_render.image import Image as ImageWidget
from pixmatrix_render.widget import Root


BOUNDS = Rect.of(64, 32)


def _gradient() -> Image.Image:
    px = np.zeros((4, 4, 4), dtype=np.uint8)
    px[:, :, 0] = np.arange(16, dtype=np.uint8).reshape(4, 4) * 16
    px[:, :, 1] = 200
    px[:, :, 2] = 40
    px[:, :, 3] = 255
    return Image.fromarray(px)


def _pixel(widget, x: int = 0, y: int = 0) -> tuple[int, int, int, int]:
    return Root(widget).paint(solid_background=False)[0].getpixel((x, y))


class ColorTransformTests(unittest.TestCase):
    def test_pass_through_is_byte_identical(self) -> None:
        child = ImageWidget(_gradient())
        direct = Root(child).paint()[0]
        wrapped = Root(ColorTransform(child=child)).paint()[0]
        self.assertEqual(direct.tobytes(), wrapped.tobytes())

    def test_negative_values_mean_unset(self) -> None:
        ct = ColorTransform(child=Box(color="#fff"), brightness=-1, saturation=-1, opacity=-1)
        self.assertFalse(ct.active)

    def test_neutral_values_are_inactive(self) -> None:
        self.assertFalse(ColorTransform(child=Box(), brightness=1.0, saturation=1.0, opacity=1.0).active)
        self.assertTrue(ColorTransform(child=Box(), invert=True).active)

    def test_invert(self) -> None:
        self.assertEqual(_pixel(ColorTransform(child=Box(color="#ff8000"), invert=True)), (0, 127, 255, 255))

    def test_brightness_scales_and_clamps(self) -> None:
        self.assertEqual(_pixel(ColorTransform(child=Box(color="#804020"), brightness=0.5)), (64, 32, 16, 255))
        self.assertEqual(_pixel(ColorTransform(child=Box(color="#804020"), brightness=4.0)), (255, 255, 128, 255))

    def test_zero_saturation_is_grayscale(self) -> None:
        r, g, b, a = _pixel(ColorTransform(child=Box(color="#ff0000"), saturation=0.0))
        self.assertEqual((r, g, b), (76, 76, 76))
        self.assertEqual(a, 255)

    def test_hue_rotation_moves_red_to_green(self) -> None:
        r, g, b, _ = _pixel(ColorTransform(child=Box(color="#ff0000"), hue_rotate=120))
        self.assertLessEqual(r, 1)
        self.assertGreaterEqual(g, 254)
        self.assertLessEqual(b, 1)

    def test_tint_multiplies(self) -> None:
        self.assertEqual(_pixel(ColorTransform(child=Box(color="#ffffff"), tint="#00ff00")), (0, 255, 0, 255))

    def test_opacity_scales_alpha_only(self) -> None:
        self.assertEqual(_pixel(ColorTransform(child=Box(color="#ffffff"), opacity=0.0))[3], 0)
        r, g, b, a = ColorTransform(opacity=0.5).transform_image(Image.new("RGBA", (1, 1), (10, 20, 30, 255))).getpixel((0, 0))
        self.assertEqual((r, g, b), (10, 20, 30))
        self.assertEqual(a, 127)

    def test_without_child(self) -> None:
        ct = ColorTransform(invert=True)
        self.assertEqual(ct.paint_bounds(BOUNDS, 0), EMPTY_RECT)
        self.assertEqual(ct.frame_count(BOUNDS), 1)

    def test_frame_count_follows_child(self) -> None:
        frames = [Image.new("RGBA", (2, 2), (i, 0, 0, 255)) for i in range(3)]
        self.assertEqual(ColorTransform(child=_AnimatedImage(frames), invert=True).frame_count(BOUNDS), 3)


class _AnimatedImage(ImageWidget):
    def __init__(self, frames: list[Image.Image]) -> None:
        super().__init__(frames[0])
        self._frames = frames


if __name__ == "__main__":
    unittest.main()
