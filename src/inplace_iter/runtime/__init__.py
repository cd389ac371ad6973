"""Telemetry and configuration shared by the iteration core."""

from .config import IterationConfig, configure, get_config, load_config, reset_config

__all__ = [
    "IterationConfig",
    "configure",
    "get_config",
    "load_config",
    "reset_config",
]
