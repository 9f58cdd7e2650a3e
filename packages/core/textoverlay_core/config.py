"""Persistent settings schema and load/save helpers."""

from __future__ import annotations

import json
import logging
import os
import platform
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from textoverlay_color.sampler import DEFAULT_RENDITION_WIDTH, DEFAULT_USER_AGENT


CONFIG_VERSION = 1
_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class SamplerConfig:
    rendition_width: int = DEFAULT_RENDITION_WIDTH
    timeout_s: int = 30
    user_agent: str = DEFAULT_USER_AGENT


@dataclass
class LoggingConfig:
    keep_log_files: int = 7
    level: str = "INFO"


@dataclass
class PluginConfig:
    config_version: int = CONFIG_VERSION
    sampler: SamplerConfig = field(default_factory=SamplerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def log_level(self) -> int:
        return getattr(logging, self.logging.level)


def config_path() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "TextOverlay" / "config.json"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "TextOverlay" / "config.json"
    return Path.home() / ".config" / "textoverlay" / "config.json"


def _merge(dataclass_type, raw: dict[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    for k, v in (raw or {}).items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _normalize_sampler(cfg: PluginConfig) -> None:
    cfg.sampler.rendition_width = max(16, min(2000, int(cfg.sampler.rendition_width)))
    cfg.sampler.timeout_s = max(1, min(300, int(cfg.sampler.timeout_s)))
    if not cfg.sampler.user_agent:
        cfg.sampler.user_agent = DEFAULT_USER_AGENT


def _normalize_logging(cfg: PluginConfig) -> None:
    cfg.logging.keep_log_files = max(2, int(cfg.logging.keep_log_files))
    level = str(cfg.logging.level).upper()
    cfg.logging.level = level if level in _LEVELS else "INFO"


def load_config(path: Path | None = None) -> PluginConfig:
    path = path or config_path()
    if not path.exists():
        return PluginConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return PluginConfig()
    if not isinstance(raw, dict):
        return PluginConfig()

    cfg = PluginConfig(
        config_version=int(raw.get("config_version", CONFIG_VERSION)),
        sampler=_merge(SamplerConfig, raw.get("sampler", {})),
        logging=_merge(LoggingConfig, raw.get("logging", {})),
    )

    _normalize_sampler(cfg)
    _normalize_logging(cfg)
    return cfg


def save_config(cfg: PluginConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path
