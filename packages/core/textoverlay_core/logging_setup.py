"""JSON line logging for the ``textoverlay`` logger tree.

Library modules log to children of ``textoverlay`` (``textoverlay.color``,
``textoverlay.state``) and attach structured fields through ``extra``. The file
handler writes one JSON object per record carrying those fields.
"""

from __future__ import annotations

import json
import logging
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .config import PluginConfig, config_path

LOGGER_NAME = "textoverlay"
LOG_FILE_NAME = "textoverlay.log"

# Structured fields the color and state modules pass via ``extra``.
RECORD_FIELDS = ("event", "url", "color", "text_color", "bg_color", "pixels", "option")


def log_dir(directory: Path | None = None) -> Path:
    path = directory or (config_path().parent / "logs")
    path.mkdir(parents=True, exist_ok=True)
    return path


class JsonLineFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict[str, Any] = {
            "ts_utc": created.isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        payload.update({name: getattr(record, name) for name in RECORD_FIELDS if hasattr(record, name)})
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def _file_handler(cfg: PluginConfig, directory: Path | None) -> logging.Handler:
    handler = logging.handlers.TimedRotatingFileHandler(
        filename=str(log_dir(directory) / LOG_FILE_NAME),
        when="midnight",
        backupCount=cfg.logging.keep_log_files,
        encoding="utf-8",
    )
    handler.setFormatter(JsonLineFormatter())
    return handler


def configure_logging(
    cfg: PluginConfig | None = None,
    console: bool = True,
    directory: Path | None = None,
) -> logging.Logger:
    """Attach handlers to the package logger once, using the logging section of ``cfg``."""
    logger = get_logger()
    if logger.handlers:
        return logger

    cfg = cfg or PluginConfig()
    logger.setLevel(cfg.log_level)
    logger.addHandler(_file_handler(cfg, directory))

    if console:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(logging.Formatter("%(levelname)s %(name)s %(message)s"))
        logger.addHandler(stream_handler)

    logger.debug("logging configured at %s", cfg.logging.level, extra={"event": "logging_configured"})
    return logger


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)
