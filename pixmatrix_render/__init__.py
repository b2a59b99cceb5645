from pixmatrix_render.box import Box
from pixmatrix_render.canvas import Canvas
from pixmatrix_render.color_transform import ColorTransform
from pixmatrix_render.colors import BLACK, TRANSPARENT, WHITE, parse_color
from pixmatrix_render.emoji import DictEmojiAtlas, Emoji, EmojiAtlas, get_emoji_atlas, set_emoji_atlas
from pixmatrix_render.errors import InterpolationError, RenderError, UnknownFontError, WidgetInitError
from pixmatrix_render.fonts import DEFAULT_FONT, font_names, get_font, register_font
from pixmatrix_render.geometry import EMPTY_RECT, Rect
from pixmatrix_render.image import Image
from pixmatrix_render.sequence import Sequence
from pixmatrix_render.shapes import Arc, Line, Polygon
from pixmatrix_render.text import Text
from pixmatrix_render.widget import DEFAULT_DISPLAY, DisplaySpec, Root, Widget, paint_roots, paint_widget

__all__ = [
    "Arc",
    "BLACK",
    "Box",
    "Canvas",
    "ColorTransform",
    "DEFAULT_DISPLAY",
    "DEFAULT_FONT",
    "DictEmojiAtlas",
    "DisplaySpec",
    "EMPTY_RECT",
    "Emoji",
    "EmojiAtlas",
    "Image",
    "InterpolationError",
    "Line",
    "Polygon",
    "Rect",
    "RenderError",
    "Root",
    "Sequence",
    "TRANSPARENT",
    "Text",
    "UnknownFontError",
    "WHITE",
    "Widget",
    "WidgetInitError",
    "font_names",
    "get_emoji_atlas",
    "get_font",
    "paint_roots",
    "paint_widget",
    "parse_color",
    "register_font",
    "set_emoji_atlas",
]
