"""Dominant text/background color detection from IIIF image renditions."""

from __future__ import annotations

import asyncio
import http.client
import logging
import os
import ssl
import urllib.request
from io import BytesIO
from typing import Protocol

import certifi
import numpy as np
from PIL import Image

from .models import ImageLoadError, LineColors, PixelBuffer

logger = logging.getLogger("textoverlay.color")

DEFAULT_RENDITION_WIDTH = 200
DEFAULT_USER_AGENT = "textoverlay/0.1"


class ImageLoader(Protocol):
    async def load(self, url: str) -> PixelBuffer: ...


def build_ssl_context() -> ssl.SSLContext:
    """Create TLS context for image fetches with explicit CA handling."""
    if os.environ.get("TEXTOVERLAY_ALLOW_INSECURE_TLS", "").strip() == "1":
        return ssl._create_unverified_context()

    ca_bundle = os.environ.get("TEXTOVERLAY_CA_BUNDLE", "").strip()
    if ca_bundle:
        return ssl.create_default_context(cafile=ca_bundle)

    return ssl.create_default_context(cafile=certifi.where())


class UrlImageLoader:
    """Fetches an image over HTTP(S) and decodes it to RGBA with Pillow."""

    def __init__(self, timeout_s: int = 30, user_agent: str = DEFAULT_USER_AGENT) -> None:
        self.timeout_s = timeout_s
        self.user_agent = user_agent

    def _fetch(self, url: str) -> bytes:
        request = urllib.request.Request(url, headers={"User-Agent": self.user_agent, "Accept": "image/*"})
        try:
            with urllib.request.urlopen(request, timeout=self.timeout_s, context=build_ssl_context()) as response:
                return response.read()
        except (OSError, ValueError, http.client.HTTPException) as exc:
            raise ImageLoadError(f"failed to fetch {url}: {exc}") from exc

    @staticmethod
    def _decode(url: str, payload: bytes) -> PixelBuffer:
        try:
            with Image.open(BytesIO(payload)) as image:
                rgba = image.convert("RGBA")
        except (OSError, ValueError, Image.DecompressionBombError) as exc:
            raise ImageLoadError(f"failed to decode {url}: {exc}") from exc
        return PixelBuffer(width=rgba.width, height=rgba.height, data=rgba.tobytes())

    def load_blocking(self, url: str) -> PixelBuffer:
        return self._decode(url, self._fetch(url))

    async def load(self, url: str) -> PixelBuffer:
        return await asyncio.to_thread(self.load_blocking, url)


def rendition_url(image_service: str, width: int = DEFAULT_RENDITION_WIDTH) -> str:
    # Assumes a level 2 image service; sizes advertised in info.json are not consulted.
    return f"{image_service.rstrip('/')}/full/{width},/0/default.jpg"


def count_colors(data: bytes) -> dict[str, int]:
    """Count RGB occurrences in an interleaved RGBA buffer, keyed ``rgb(r,g,b)``.

    Keys are returned in order of first occurrence; a trailing partial pixel is ignored.
    """
    usable = len(data) - len(data) % 4
    if usable == 0:
        return {}

    pixels = np.frombuffer(data, dtype=np.uint8, count=usable).reshape((-1, 4))[:, :3]
    unique, first_index, counts = np.unique(pixels, axis=0, return_index=True, return_counts=True)

    table: dict[str, int] = {}
    for idx in np.argsort(first_index, kind="stable"):
        r, g, b = (int(v) for v in unique[idx])
        table[f"rgb({r},{g},{b})"] = int(counts[idx])
    return table


def rank_colors(table: dict[str, int]) -> list[str]:
    return [key for key, _count in sorted(table.items(), key=lambda kv: -kv[1])]


def dominant_colors(data: bytes) -> LineColors:
    # Most frequent color is the text, the runner-up the background. Near-identical
    # shades are not merged, so noisy scans can split the vote.
    ranked = rank_colors(count_colors(data))
    text_color = ranked[0] if ranked else None
    bg_color = ranked[1] if len(ranked) > 1 else None
    return LineColors(text_color=text_color, bg_color=bg_color)


async def get_line_colors(
    image_service: str,
    loader: ImageLoader | None = None,
    width: int = DEFAULT_RENDITION_WIDTH,
) -> LineColors:
    """Determine foreground and background color of a text line image."""
    loader = loader or UrlImageLoader()
    url = rendition_url(image_service, width)
    buffer = await loader.load(url)
    colors = dominant_colors(buffer.data)
    logger.debug(
        "line colors for %s: text=%s bg=%s (%dx%d)",
        url,
        colors.text_color,
        colors.bg_color,
        buffer.width,
        buffer.height,
        extra={
            "event": "line_colors",
            "url": url,
            "text_color": colors.text_color,
            "bg_color": colors.bg_color,
            "pixels": buffer.pixel_count,
        },
    )
    return colors


def get_line_colors_sync(
    image_service: str,
    loader: ImageLoader | None = None,
    width: int = DEFAULT_RENDITION_WIDTH,
) -> LineColors:
    return asyncio.run(get_line_colors(image_service, loader=loader, width=width))
