from __future__ import annotations

import math
import unittest

import numpy as np
from PIL import Image

from pixmatrix_render import effects
from pixmatrix_render.box import Box
from pixmatrix_render.filter import (
    Blur,
    Brightness,
    Contrast,
    EdgeDetection,
    Emboss,
    FilterWidget,
    FlipHorizontal,
    FlipVertical,
    Gamma,
    Grayscale,
    Hue,
    Invert,
    PixelFilter,
    Rotate,
    Saturation,
    Sepia,
    Sharpen,
    Shear,
    Threshold,
)
from pixmatrix_render.geometry import Rect
from pixmatrix_render.image import Image as ImageWidget
from pixmatrix_render.widget import Root, paint_widget


BOUNDS = Rect.of(64, 32)


def _split() -> Image.Image:
    """4x2 image: left half red, right half blue."""
    px = np.zeros((2, 4, 4), dtype=np.uint8)
    px[:, :2] = (255, 0, 0, 255)
    px[:, 2:] = (0, 0, 255, 255)
    return Image.fromarray(px)


class FilterBoundsTests(unittest.TestCase):
    def test_blur_pads_three_radii(self) -> None:
        blur = Blur(child=Box(width=10, height=4, color="#fff"), radius=1.5)
        self.assertEqual(blur.paint_bounds(BOUNDS, 0), Rect.of(20, 14))

    def test_rotate_bounds(self) -> None:
        child = Box(width=10, height=4, color="#fff")
        self.assertEqual(Rotate(child=child, angle=90).paint_bounds(BOUNDS, 0), Rect.of(4, 10))
        expected = int(math.ceil(14 * math.cos(math.radians(45))))
        self.assertEqual(Rotate(child=child, angle=45).paint_bounds(BOUNDS, 0), Rect.of(expected, expected))

    def test_shear_bounds(self) -> None:
        child = Box(width=10, height=4, color="#fff")
        self.assertEqual(Shear(child=child, x_angle=45).paint_bounds(BOUNDS, 0), Rect.of(14, 4))
        self.assertEqual(Shear(child=child, y_angle=45).paint_bounds(BOUNDS, 0), Rect.of(10, 14))

    def test_pixel_filters_keep_child_bounds_and_frames(self) -> None:
        child = Box(width=3, height=2, color="#fff")
        for widget in (Brightness(child=child, change=0.2), Invert(child=child), Sharpen(child=child)):
            with self.subTest(widget=type(widget).__name__):
                self.assertEqual(widget.paint_bounds(BOUNDS, 0), Rect.of(3, 2))
                self.assertEqual(widget.frame_count(BOUNDS), 1)


class FilterPaintTests(unittest.TestCase):
    def test_invert_widget(self) -> None:
        img = paint_widget(Invert(child=Box(width=2, height=2, color="#ff0000")), Rect.of(2, 2), 0)
        self.assertEqual(img.getpixel((0, 0)), (0, 255, 255, 255))

    def test_result_is_centred_in_outer_bounds(self) -> None:
        frame = Root(Invert(child=Box(width=2, height=2, color="#000"))).paint()[0]
        self.assertEqual(frame.getpixel((31, 15)), (255, 255, 255, 255))
        self.assertEqual(frame.getpixel((32, 16)), (255, 255, 255, 255))
        self.assertEqual(frame.getpixel((30, 15)), (0, 0, 0, 255))

    def test_flip_widgets(self) -> None:
        flipped = paint_widget(FlipHorizontal(child=ImageWidget(_split())), Rect.of(4, 2), 0)
        self.assertEqual(flipped.getpixel((0, 0)), (0, 0, 255, 255))
        flipped = paint_widget(FlipVertical(child=ImageWidget(_split())), Rect.of(4, 2), 0)
        self.assertEqual(flipped.getpixel((0, 0)), (255, 0, 0, 255))

    def test_rotate_widget_paints_child(self) -> None:
        widget = Rotate(child=Box(width=4, height=4, color="#00ff00"), angle=90)
        img = paint_widget(widget, Rect.of(4, 4), 0)
        self.assertEqual(img.getpixel((1, 1)), (0, 255, 0, 255))

    def test_blur_spreads_into_padding(self) -> None:
        img = paint_widget(Blur(child=Box(width=2, height=2, color="#fff"), radius=1), Rect.of(8, 8), 0)
        self.assertEqual(img.size, (8, 8))
        self.assertGreater(img.getpixel((2, 3))[3], 0)

    def test_every_filter_widget_paints(self) -> None:
        child = ImageWidget(_split())
        widgets = [
            Brightness(child=child, change=-0.5),
            Contrast(child=child, factor=1.5),
            Gamma(child=child, gamma=2.2),
            Hue(child=child, change=90),
            Saturation(child=child, change=-1),
            Grayscale(child=child),
            Sepia(child=child),
            Sharpen(child=child),
            Emboss(child=child),
            EdgeDetection(child=child, radius=2),
            Threshold(child=child, level=100),
            Shear(child=child, x_angle=10, y_angle=5),
        ]
        for widget in widgets:
            with self.subTest(widget=type(widget).__name__):
                img = paint_widget(widget, BOUNDS, 0)
                self.assertEqual(img.mode, "RGBA")

    def test_filter_bases_are_abstract(self) -> None:
        for base in (FilterWidget, PixelFilter):
            with self.subTest(base=base.__name__):
                with self.assertRaises(TypeError):
                    base(child=Box())

    def test_only_pixel_filters_define_an_effect(self) -> None:
        for widget_type in (Blur, Rotate, Shear):
            with self.subTest(widget=widget_type.__name__):
                self.assertFalse(hasattr(widget_type, "effect"))
        self.assertTrue(issubclass(Invert, PixelFilter))

    def test_gamma_rejects_non_positive(self) -> None:
        with self.assertRaises(ValueError):
            Gamma(child=Box(), gamma=0)


class EffectTests(unittest.TestCase):
    def test_brightness_minus_one_is_black(self) -> None:
        out = effects.brightness(Image.new("RGBA", (1, 1), (200, 100, 50, 255)), -1.0)
        self.assertEqual(out.getpixel((0, 0)), (0, 0, 0, 255))

    def test_gamma_one_is_identity(self) -> None:
        src = _split()
        self.assertEqual(effects.gamma(src, 1.0).tobytes(), src.tobytes())

    def test_threshold_is_binary(self) -> None:
        out = effects.threshold(Image.new("RGBA", (1, 1), (200, 200, 200, 80)), 128)
        self.assertEqual(out.getpixel((0, 0)), (255, 255, 255, 80))

    def test_invert_keeps_alpha(self) -> None:
        out = effects.invert(Image.new("RGBA", (1, 1), (10, 20, 30, 40)))
        self.assertEqual(out.getpixel((0, 0)), (245, 235, 225, 40))

    def test_full_desaturation_is_gray(self) -> None:
        r, g, b, _ = effects.saturation(Image.new("RGBA", (1, 1), (255, 0, 0, 255)), -1.0).getpixel((0, 0))
        self.assertEqual(r, g)
        self.assertEqual(g, b)

    def test_hue_full_turn_is_identity(self) -> None:
        src = _split()
        self.assertEqual(effects.hue(src, 360).tobytes(), src.tobytes())

    def test_sharpen_keeps_alpha_channel(self) -> None:
        src = Image.new("RGBA", (3, 3), (100, 100, 100, 90))
        self.assertEqual(effects.sharpen(src).getchannel("A").tobytes(), src.getchannel("A").tobytes())


if __name__ == "__main__":
    unittest.main()
