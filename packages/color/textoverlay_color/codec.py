"""Conversions between hex and rgb()/rgba() color literals."""

from __future__ import annotations

import logging
import re

logger = logging.getLogger("textoverlay.color")

_HEX_DIGITS = re.compile(r"^[0-9a-fA-F]+$")
_LAST_COMPONENT = re.compile(r"[^,]+(?=\))")
_FUNCTIONAL_BODY = re.compile(r"rgba?\((.+)\)")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _format_opacity(opacity: float) -> str:
    if isinstance(opacity, float) and opacity.is_integer():
        return str(int(opacity))
    return str(opacity)


def _expand_hex(color: str) -> str | None:
    digits = color[1:]
    if len(digits) == 3:
        digits = "".join(d * 2 for d in digits)
    if len(digits) != 6 or not _HEX_DIGITS.match(digits):
        return None
    return digits


def set_alpha(color: str, opacity: float) -> str:
    """Change the alpha channel of a color.

    Hex input (``#rgb`` or ``#rrggbb``) is converted to ``rgba(r, g, b, opacity)``.
    ``rgba(...)`` input has its last component replaced and ``rgb(...)`` input
    gains a fourth component. Anything else is logged and returned unchanged.
    """
    value = _format_opacity(opacity)

    if color.startswith("#"):
        digits = _expand_hex(color)
        if digits is not None:
            r, g, b = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
            return f"rgba({r}, {g}, {b}, {value})"
    elif color.startswith("rgba"):
        return _LAST_COMPONENT.sub(value, color, count=1)
    elif color.startswith("rgb"):
        renamed = re.sub(r"^rgb", "rgba", color)
        return re.sub(r"\)$", f", {value})", renamed)

    logger.warning("Unsupported color: %s", color, extra={"event": "unsupported_color", "color": color})
    return color


def _parse_channel(component: str) -> int:
    # Only leading digits count: "12.5" is 12 and "1e2" is 1.
    match = _LEADING_INT.match(component)
    if match is None:
        raise ValueError(f"not a number: {component.strip()!r}")
    channel = int(match.group(1))
    if not 0 <= channel <= 255:
        raise ValueError(f"channel out of range: {channel}")
    return channel


def to_hex(color: str | None) -> str | None:
    """Convert a ``rgb(...)`` or ``rgba(...)`` string to ``#rrggbb``.

    Non-functional input (including ``None`` and hex strings) is returned as-is.
    """
    if not color or not color.startswith("rgb"):
        return color

    match = _FUNCTIONAL_BODY.search(color)
    components = match.group(1).split(",")[:3] if match else []
    try:
        if len(components) != 3:
            raise ValueError("expected three channels")
        channels = [_parse_channel(c) for c in components]
    except ValueError as exc:
        logger.warning("Malformed color %s: %s", color, exc, extra={"event": "malformed_color", "color": color})
        return color

    return "#" + "".join(f"{c:02x}" for c in channels)
