"""Process-wide iteration settings read from ``INPLACE_ITER_*`` variables."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from .telemetry import ENV_PREFIX, env, record_event


@dataclass(frozen=True, slots=True)
class IterationConfig:
    """Defaults applied when a cursor is built without explicit options."""

    # Stale-handle detection, on unless INPLACE_ITER_LIFETIME_GUARD=0.
    lifetime_guard: bool = True


_ACTIVE: Optional[IterationConfig] = None


def _strict_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off", ""}:
        return False
    raise ValueError(f"{ENV_PREFIX}{name} must be a boolean flag, got '{raw}'")


def load_config() -> IterationConfig:
    # A typo here would silently change safety mode, so it is rejected.
    return IterationConfig(lifetime_guard=_strict_flag("LIFETIME_GUARD", True))


def get_config() -> IterationConfig:
    global _ACTIVE
    if _ACTIVE is None:
        _ACTIVE = load_config()
    return _ACTIVE


def configure(**overrides: object) -> IterationConfig:
    """Replace the active config, starting from the environment.

    Cursors already open keep the guard they were built with.
    """

    global _ACTIVE
    _ACTIVE = replace(load_config(), **overrides)
    record_event(
        "config.update",
        level="debug",
        data={"lifetime_guard": _ACTIVE.lifetime_guard},
    )
    return _ACTIVE


def reset_config() -> None:
    global _ACTIVE
    _ACTIVE = None


__all__ = ["IterationConfig", "configure", "get_config", "load_config", "reset_config"]
