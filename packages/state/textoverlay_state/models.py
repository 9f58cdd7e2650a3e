"""Typed models for per-window text overlay options."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

# Host configuration uses camelCase keys.
CAMEL_CASE_KEYS = {
    "use_auto_colors": "useAutoColors",
    "text_color": "textColor",
    "bg_color": "bgColor",
}


@dataclass(frozen=True)
class TextOverlayOptions:
    # Enable the text selection and display feature
    enabled: bool = True
    # Default opacity of text overlay
    opacity: float = 1.0
    # Make text selectable by default
    selectable: bool = False
    # Show text overlay by default
    visible: bool = False
    # Try to automatically determine the text and background color
    use_auto_colors: bool = True
    # Color of rendered text, fallback when auto-detection is enabled and fails
    text_color: str = "#000000"
    # Color of line background, fallback when auto-detection is enabled and fails
    bg_color: str = "#ffffff"

    @classmethod
    def field_names(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    def to_dict(self) -> dict[str, Any]:
        return {CAMEL_CASE_KEYS.get(name, name): getattr(self, name) for name in self.field_names()}
