"""Typed models for pixel sampling results."""

from __future__ import annotations

from dataclasses import dataclass


class ImageLoadError(RuntimeError):
    """Raised when an image rendition cannot be fetched or decoded."""


@dataclass(frozen=True)
class PixelBuffer:
    width: int
    height: int
    data: bytes

    @property
    def pixel_count(self) -> int:
        return len(self.data) // 4


@dataclass(frozen=True)
class LineColors:
    text_color: str | None
    bg_color: str | None
