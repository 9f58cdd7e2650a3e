"""Core services for settings and logging."""

from .config import LoggingConfig, PluginConfig, SamplerConfig, config_path, load_config, save_config
from .logging_setup import configure_logging, get_logger

__all__ = [
    "LoggingConfig",
    "PluginConfig",
    "SamplerConfig",
    "config_path",
    "configure_logging",
    "get_logger",
    "load_config",
    "save_config",
]
