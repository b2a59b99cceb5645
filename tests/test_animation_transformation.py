from __future__ import annotations

from dataclasses import dataclass
import unittest

from PIL import Image as PILImage

from pixmatrix_render.animation import (
    EASE_IN,
    Direction,
    FillMode,
    Keyframe,
    Origin,
    Rounding,
    Scale,
    Transformation,
    Translate,
)
from pixmatrix_render.box import Box
from pixmatrix_render.canvas import Canvas
from pixmatrix_render.geometry import Rect
from pixmatrix_render.image import Image
from pixmatrix_render.widget import Root, Widget


BOUNDS = Rect.of(64, 32)
RED = (255, 0, 0, 255)


@dataclass
class _FixedFramesWidget(Widget):
    frames: int

    def paint_bounds(self, bounds: Rect, frame_idx: int) -> Rect:
        return Rect.of(1, 1)

    def paint(self, canvas: Canvas, bounds: Rect, frame_idx: int) -> None:
        canvas.set_color(RED)
        canvas.fill_rect(0, 0, 1, 1)

    def frame_count(self, bounds: Rect) -> int:
        return self.frames


def _slide(duration: int = 5, **kwargs) -> Transformation:
    return Transformation(
        child=Box(width=1, height=1, color=RED),
        keyframes=[Keyframe(0.0, [Translate(0, 0)]), Keyframe(1.0, [Translate(8, 0)])],
        duration=duration,
        **kwargs,
    )


def _red_column(frame) -> int:
    for x in range(frame.width):
        if frame.getpixel((x, 0)) == RED:
            return x
    return -1


class TransformationTests(unittest.TestCase):
    def test_frame_count_is_delay_plus_duration(self) -> None:
        self.assertEqual(_slide(duration=5, delay=3).frame_count(BOUNDS), 8)

    def test_wait_for_child_extends_frame_count(self) -> None:
        anim = Transformation(child=_FixedFramesWidget(20), keyframes=[], duration=5, wait_for_child=True)
        self.assertEqual(anim.frame_count(BOUNDS), 20)
        anim = Transformation(child=_FixedFramesWidget(2), keyframes=[], duration=5, wait_for_child=True)
        self.assertEqual(anim.frame_count(BOUNDS), 5)

    def test_progress_through_delay_active_and_fill(self) -> None:
        anim = _slide(duration=5, delay=2)
        self.assertEqual([anim.progress(i) for i in range(8)], [0.0, 0.0, 0.0, 0.25, 0.5, 0.75, 1.0, 1.0])

    def test_backwards_fill_returns_to_start(self) -> None:
        anim = _slide(duration=3, fill_mode=FillMode.BACKWARDS)
        self.assertEqual(anim.progress(10), 0.0)

    def test_single_frame_duration_is_complete(self) -> None:
        self.assertEqual(_slide(duration=1).progress(0), 1.0)

    def test_directions(self) -> None:
        self.assertEqual(_slide(duration=5, direction="reverse").progress(0), 1.0)
        alternate = _slide(duration=5, direction=Direction.ALTERNATE)
        self.assertEqual([alternate.progress(i) for i in range(5)], [0.0, 0.5, 1.0, 0.5, 0.0])
        alt_reverse = _slide(duration=5, direction="alternate-reverse")
        self.assertEqual([alt_reverse.progress(i) for i in range(5)], [1.0, 0.5, 0.0, 0.5, 1.0])

    def test_unknown_direction_rejected(self) -> None:
        with self.assertRaises(ValueError):
            _slide(direction="sideways")

    def test_zero_duration_rejected(self) -> None:
        with self.assertRaises(ValueError):
            _slide(duration=0)

    def test_translation_moves_child_across_frames(self) -> None:
        frames = Root(_slide(duration=5)).paint()
        self.assertEqual(len(frames), 5)
        self.assertEqual([_red_column(f) for f in frames], [0, 2, 4, 6, 8])

    def test_bounds_default_to_outer_bounds(self) -> None:
        self.assertEqual(_slide().paint_bounds(BOUNDS, 0), BOUNDS)
        self.assertEqual(_slide(width=10, height=4).paint_bounds(BOUNDS, 0), Rect.of(10, 4))

    def test_curve_eases_between_keyframes(self) -> None:
        anim = Transformation(
            child=Box(width=1, height=1, color=RED),
            keyframes=[Keyframe(0.0, [Translate(0, 0)], curve=EASE_IN), Keyframe(1.0, [Translate(40, 0)])],
            duration=5,
            rounding=Rounding.FLOOR,
            origin=Origin(0, 0),
        )
        canvas = Canvas(64, 1)
        anim.paint(canvas, BOUNDS, 1)
        self.assertLess(_red_column(canvas.image()), 10)

    def test_zoom_from_zero_scale_paints_every_frame(self) -> None:
        anim = Transformation(
            child=Image(PILImage.new("RGBA", (4, 4), RED)),
            keyframes=[Keyframe(0.0, [Scale(0, 0)]), Keyframe(1.0, [Scale(1, 1)])],
            duration=5,
        )
        frames = Root(anim).paint()
        self.assertEqual(len(frames), 5)
        self.assertNotIn(RED, [frames[0].getpixel((x, y)) for x in range(64) for y in range(32)])
        self.assertEqual(frames[-1].getpixel((0, 0)), RED)

    def test_paint_restores_canvas_state(self) -> None:
        canvas = Canvas(64, 32)
        _slide().paint(canvas, BOUNDS, 3)
        self.assertEqual(canvas.transform_point(0, 0), (0.0, 0.0))


if __name__ == "__main__":
    unittest.main()
