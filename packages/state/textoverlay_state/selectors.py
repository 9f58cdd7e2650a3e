"""Projections of host viewer state into the shapes overlay views consume.

All functions take the relevant state fragments as arguments; nothing here
reaches into a global store.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Iterable, Mapping

from .models import CAMEL_CASE_KEYS, TextOverlayOptions

logger = logging.getLogger("textoverlay.state")

DEFAULT_OPTIONS = TextOverlayOptions()

_FIELD_BY_KEY: dict[str, str] = {name: name for name in TextOverlayOptions.field_names()}
_FIELD_BY_KEY.update({camel: name for name, camel in CAMEL_CASE_KEYS.items()})


def get_window_text_overlay_options(window_config: Mapping[str, Any] | None) -> TextOverlayOptions:
    """Overlay a window's ``textOverlay`` settings onto the defaults (shallow merge)."""
    overrides = (window_config or {}).get("textOverlay") or {}
    if not isinstance(overrides, Mapping):
        logger.debug(
            "ignoring non-mapping textOverlay setting of type %s",
            type(overrides).__name__,
            extra={"event": "invalid_overrides"},
        )
        overrides = {}

    changes: dict[str, Any] = {}
    for key, value in overrides.items():
        name = _FIELD_BY_KEY.get(key)
        if name is None:
            logger.debug("ignoring unknown text overlay option %r", key, extra={"event": "unknown_option", "option": key})
            continue
        changes[name] = value
    return replace(DEFAULT_OPTIONS, **changes)


def get_texts(plugin_state: Mapping[str, Any] | None) -> Mapping[str, Any] | None:
    """Loaded text records keyed by canvas id, or ``None`` before anything is loaded."""
    if plugin_state is None:
        return None
    return plugin_state.get("texts")


def _canvas_id(canvas: Any) -> str | None:
    if isinstance(canvas, str):
        return canvas
    if isinstance(canvas, Mapping):
        return canvas.get("id")
    return getattr(canvas, "id", None)


def get_texts_for_visible_canvases(
    visible_canvases: Iterable[Any] | None,
    texts: Mapping[str, Any] | None,
) -> list[Any] | None:
    if texts is None or visible_canvases is None:
        return None
    # Canvases without an id never match a loaded text.
    ids = [cid for cid in (_canvas_id(c) for c in visible_canvases) if cid is not None]
    return [texts[target_id] for target_id in ids if target_id in texts]
