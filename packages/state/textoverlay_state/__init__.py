"""Derived state for the text overlay views."""

from .models import TextOverlayOptions
from .selectors import (
    DEFAULT_OPTIONS,
    get_texts,
    get_texts_for_visible_canvases,
    get_window_text_overlay_options,
)

__all__ = [
    "DEFAULT_OPTIONS",
    "TextOverlayOptions",
    "get_texts",
    "get_texts_for_visible_canvases",
    "get_window_text_overlay_options",
]
