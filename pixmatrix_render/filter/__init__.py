from .adjust import Brightness, Contrast, Gamma, Grayscale, Hue, Invert, Saturation, Sepia, Threshold
from .base import Effect, FilterWidget, PixelFilter, paint_filtered
from .effect import Blur, EdgeDetection, Emboss, Sharpen
from .geometry import FlipHorizontal, FlipVertical, Rotate, Shear

__all__ = [
    "Blur",
    "Brightness",
    "Contrast",
    "EdgeDetection",
    "Effect",
    "Emboss",
    "FilterWidget",
    "FlipHorizontal",
    "FlipVertical",
    "Gamma",
    "Grayscale",
    "Hue",
    "Invert",
    "PixelFilter",
    "Rotate",
    "Saturation",
    "Sepia",
    "Sharpen",
    "Shear",
    "Threshold",
    "paint_filtered",
]
