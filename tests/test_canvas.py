from __future__ import annotations

import math
import unittest

import numpy as np
from PIL import Image

from pixmatrix_render.canvas import Canvas
from pixmatrix_render.colors import BLACK, parse_color


RED = (255, 0, 0, 255)


class CanvasTests(unittest.TestCase):
    def test_new_canvas_is_transparent(self) -> None:
        canvas = Canvas(3, 2)
        self.assertEqual(canvas.pixels.shape, (2, 3, 4))
        self.assertFalse(canvas.pixels.any())

    def test_background_fills_every_pixel(self) -> None:
        canvas = Canvas(2, 2, background=BLACK)
        self.assertTrue((canvas.pixels == np.array(BLACK, dtype=np.uint8)).all())

    def test_negative_size_rejected(self) -> None:
        with self.assertRaises(ValueError):
            Canvas(-1, 4)

    def test_fill_rect_respects_translation(self) -> None:
        canvas = Canvas(4, 4)
        canvas.set_color(RED)
        canvas.translate(1, 1)
        canvas.fill_rect(0, 0, 2, 2)
        self.assertEqual(tuple(canvas.pixels[1, 1]), RED)
        self.assertEqual(tuple(canvas.pixels[2, 2]), RED)
        self.assertEqual(int(canvas.pixels[0, 0, 3]), 0)
        self.assertEqual(int(canvas.pixels[3, 3, 3]), 0)

    def test_fill_rect_clips_to_canvas(self) -> None:
        canvas = Canvas(2, 2)
        canvas.set_color(RED)
        canvas.fill_rect(-5, -5, 100, 100)
        self.assertTrue((canvas.pixels == np.array(RED, dtype=np.uint8)).all())

    def test_saved_restores_matrix_and_color(self) -> None:
        canvas = Canvas(4, 4)
        with canvas.saved():
            canvas.translate(2, 3)
            canvas.set_color(RED)
            self.assertEqual(canvas.transform_point(0, 0), (2.0, 3.0))
        self.assertEqual(canvas.transform_point(0, 0), (0.0, 0.0))
        self.assertNotEqual(canvas.color, RED)

    def test_pop_without_push_raises(self) -> None:
        with self.assertRaises(RuntimeError):
            Canvas(1, 1).pop()

    def test_transforms_post_multiply(self) -> None:
        canvas = Canvas(10, 10)
        canvas.translate(2, 3)
        canvas.scale(2, 2)
        self.assertEqual(canvas.transform_point(1, 1), (4.0, 5.0))

    def test_rotate_about_keeps_pivot_fixed(self) -> None:
        canvas = Canvas(10, 10)
        canvas.rotate_about(math.pi / 2, 5, 5)
        x, y = canvas.transform_point(5, 5)
        self.assertAlmostEqual(x, 5.0)
        self.assertAlmostEqual(y, 5.0)
        x, y = canvas.transform_point(6, 5)
        self.assertAlmostEqual(x, 5.0)
        self.assertAlmostEqual(y, 6.0)

    def test_draw_image_composites_at_offset(self) -> None:
        canvas = Canvas(3, 3, background=BLACK)
        canvas.draw_image(Image.new("RGBA", (1, 1), RED), 2, 1)
        self.assertEqual(tuple(canvas.pixels[1, 2]), RED)
        self.assertEqual(tuple(canvas.pixels[0, 0]), BLACK)

    def test_transparent_source_leaves_destination_untouched(self) -> None:
        canvas = Canvas(2, 2, background=parse_color("#123456"))
        before = canvas.pixels.copy()
        canvas.draw_image(Image.new("RGBA", (2, 2), (255, 255, 255, 0)), 0, 0)
        np.testing.assert_array_equal(canvas.pixels, before)

    def test_half_alpha_blends_over_opaque(self) -> None:
        canvas = Canvas(1, 1, background=BLACK)
        canvas.draw_image(Image.new("RGBA", (1, 1), (255, 255, 255, 128)), 0, 0)
        r, g, b, a = (int(v) for v in canvas.pixels[0, 0])
        self.assertEqual(a, 255)
        self.assertEqual(r, g)
        self.assertEqual(g, b)
        self.assertIn(r, (127, 128))

    def test_draw_image_with_rotation_resamples(self) -> None:
        canvas = Canvas(4, 4)
        canvas.rotate_about(math.pi, 2, 2)
        canvas.draw_image(Image.new("RGBA", (1, 1), RED), 0, 0)
        self.assertEqual(tuple(canvas.pixels[3, 3]), RED)
        self.assertEqual(int(canvas.pixels[0, 0, 3]), 0)

    def test_draw_image_with_collapsed_transform_draws_nothing(self) -> None:
        canvas = Canvas(4, 4)
        canvas.scale_about(0, 0, 2, 2)
        canvas.draw_image(Image.new("RGBA", (2, 2), RED), 0, 0)
        self.assertFalse(canvas.pixels.any())

    def test_fill_polygon_covers_interior(self) -> None:
        canvas = Canvas(6, 6)
        canvas.set_color(RED)
        canvas.fill_polygon([(0, 0), (6, 0), (6, 6), (0, 6)])
        self.assertEqual(tuple(canvas.pixels[3, 3]), RED)

    def test_image_of_empty_canvas(self) -> None:
        img = Canvas(0, 5).image()
        self.assertEqual(img.size, (0, 5))
        self.assertEqual(img.mode, "RGBA")

    def test_from_image_round_trips_pixels(self) -> None:
        src = Image.new("RGBA", (2, 1), RED)
        self.assertEqual(Canvas.from_image(src).image().tobytes(), src.tobytes())


if __name__ == "__main__":
    unittest.main()
