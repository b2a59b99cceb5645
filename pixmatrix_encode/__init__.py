from pixmatrix_encode.budget import budget_durations
from pixmatrix_encode.codecs import AVIFCodec, Codec, GIFCodec, WebPCodec
from pixmatrix_encode.config import EncoderSettings, default_settings, set_default_settings, set_webp_level
from pixmatrix_encode.errors import CodecUnavailableError, EncodeError, FilterChainError, UnknownColorFilterError
from pixmatrix_encode.filters import (
    ColorFilterType,
    ImageFilter,
    RenderFilters,
    chain,
    color_matrix,
    from_filter_type,
    magnify,
    supported_color_filters,
    validate_color_filter,
)
from pixmatrix_encode.screens import DEFAULT_MAX_AGE_SECONDS, Screens

__all__ = [
    "AVIFCodec",
    "Codec",
    "CodecUnavailableError",
    "ColorFilterType",
    "DEFAULT_MAX_AGE_SECONDS",
    "EncodeError",
    "EncoderSettings",
    "FilterChainError",
    "GIFCodec",
    "ImageFilter",
    "RenderFilters",
    "Screens",
    "UnknownColorFilterError",
    "WebPCodec",
    "budget_durations",
    "chain",
    "color_matrix",
    "default_settings",
    "from_filter_type",
    "magnify",
    "set_default_settings",
    "set_webp_level",
    "supported_color_filters",
    "validate_color_filter",
]
