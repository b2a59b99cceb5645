from __future__ import annotations

import logging
from pathlib import Path

from pixmatrix_encode import RenderFilters, Screens, chain
from pixmatrix_render import Box, ColorTransform, Root, Sequence, Text
from pixmatrix_render.animation import EASE_IN_OUT, Keyframe, Rotate, Scale, Transformation, Translate


def _badge() -> Transformation:
    badge = Box(width=20, height=12, color="#1e6fd9", child=Text("hi", color="#ffffff"))
    return Transformation(
        child=badge,
        keyframes=[
            Keyframe(0.0, [Translate(-20, 0), Scale(1, 1)], curve=EASE_IN_OUT),
            Keyframe(0.5, [Translate(0, 0), Scale(1.5, 1.5)], curve=EASE_IN_OUT),
            Keyframe(1.0, [Translate(20, 0), Scale(1, 1)]),
        ],
        duration=40,
        direction="alternate",
    )


def _spinner() -> Transformation:
    return Transformation(
        child=Box(width=8, height=8, color="#ffb000"),
        keyframes=[Keyframe(0.0, [Rotate(0)]), Keyframe(1.0, [Rotate(360)])],
        duration=20,
    )


def main() -> None:
    logging.basicConfig(level=logging.DEBUG)
    out_dir = Path(__file__).resolve().parent / "out"
    out_dir.mkdir(parents=True, exist_ok=True)

    root = Root(Sequence([_badge(), ColorTransform(child=_spinner(), hue_rotate=90)]), delay=40)
    filters = RenderFilters(magnify=2, color_filter="warm")
    screens = Screens.from_roots([root])

    steps = filters.build_chain() or []
    (out_dir / "badge.webp").write_bytes(screens.encode_webp(0, chain(*steps)))
    (out_dir / "badge.gif").write_bytes(screens.encode_gif(2000, chain(*steps)))
    print(f"wrote {len(screens.render())} frames to {out_dir} (hash={screens.hash().hex()[:12]})")


if __name__ == "__main__":
    main()
