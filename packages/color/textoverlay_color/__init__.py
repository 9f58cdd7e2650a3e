"""Color helpers for text overlays: literal conversion and dominant color sampling."""

from .codec import set_alpha, to_hex
from .models import ImageLoadError, LineColors, PixelBuffer
from .sampler import (
    DEFAULT_RENDITION_WIDTH,
    ImageLoader,
    UrlImageLoader,
    count_colors,
    dominant_colors,
    get_line_colors,
    get_line_colors_sync,
    rank_colors,
    rendition_url,
)

__all__ = [
    "DEFAULT_RENDITION_WIDTH",
    "ImageLoadError",
    "ImageLoader",
    "LineColors",
    "PixelBuffer",
    "UrlImageLoader",
    "count_colors",
    "dominant_colors",
    "get_line_colors",
    "get_line_colors_sync",
    "rank_colors",
    "rendition_url",
    "set_alpha",
    "to_hex",
]
