from __future__ import annotations

import io
import unittest

from PIL import Image

from pixmatrix_encode.codecs import AVIFCodec, GIFCodec, WebPCodec


def _frames(count: int) -> list[Image.Image]:
    return [Image.new("RGBA", (8, 4), (50 * i, 255 - 50 * i, 0, 255)) for i in range(count)]


class WebPCodecTests(unittest.TestCase):
    def test_lossless_animation(self) -> None:
        frames = _frames(3)
        data = WebPCodec(level=6).encode(frames, [50, 50, 20])
        with Image.open(io.BytesIO(data)) as decoded:
            self.assertEqual(decoded.n_frames, 3)
            decoded.seek(1)
            self.assertEqual(decoded.convert("RGBA").getpixel((0, 0)), frames[1].getpixel((0, 0)))

    def test_level_out_of_range(self) -> None:
        with self.assertRaises(ValueError):
            WebPCodec(level=10)

    def test_mismatched_durations(self) -> None:
        with self.assertRaises(ValueError):
            WebPCodec().encode(_frames(2), [50])

    def test_no_frames(self) -> None:
        self.assertEqual(WebPCodec().encode([], []), b"")


class GIFCodecTests(unittest.TestCase):
    def test_durations_are_milliseconds(self) -> None:
        data = GIFCodec().encode(_frames(2), [50, 120])
        with Image.open(io.BytesIO(data)) as decoded:
            self.assertEqual(decoded.n_frames, 2)
            self.assertEqual(decoded.info["duration"], 50)
            decoded.seek(1)
            self.assertEqual(decoded.info["duration"], 120)

    def test_palette_size_validated(self) -> None:
        with self.assertRaises(ValueError):
            GIFCodec(colors=1)


@unittest.skipUnless(AVIFCodec.available(), "Pillow built without AVIF support")
class AVIFCodecTests(unittest.TestCase):
    def test_encodes_animation(self) -> None:
        data = AVIFCodec(speed=10).encode(_frames(2), [50, 50])
        with Image.open(io.BytesIO(data)) as decoded:
            self.assertEqual(decoded.format, "AVIF")
            self.assertEqual(decoded.n_frames, 2)


class AVIFCodecValidationTests(unittest.TestCase):
    def test_speed_out_of_range(self) -> None:
        with self.assertRaises(ValueError):
            AVIFCodec(speed=11)


if __name__ == "__main__":
    unittest.main()
