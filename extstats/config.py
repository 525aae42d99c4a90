from __future__ import annotations

import dataclasses as dc
import logging
import os
import typing as t

from .errors import ExtStatsError
from .topk import DEFAULT_TOP_COUNT

ENV_PREFIX = "EXTSTATS_"

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off", "")


def _env_flag(env: t.Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(ENV_PREFIX + name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ExtStatsError(f"{ENV_PREFIX}{name} must be a boolean, got {raw!r}")


def _env_int(env: t.Mapping[str, str], name: str, default: int, minimum: int = 1) -> int:
    raw = env.get(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise ExtStatsError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}")
    if value < minimum:
        raise ExtStatsError(f"{ENV_PREFIX}{name} must be >= {minimum}, got {value}")
    return value


def _env_level(env: t.Mapping[str, str], default: str) -> str:
    raw = env.get(ENV_PREFIX + "LOG_LEVEL")
    if raw is None or not raw.strip():
        return default
    level = raw.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ExtStatsError(f"{ENV_PREFIX}LOG_LEVEL: unknown level {raw!r}")
    return level


@dc.dataclass
class Settings:
    targets: list[str] = dc.field(default_factory=list)
    walk: bool = False
    top_count: int = DEFAULT_TOP_COUNT
    tab_size: int = 3
    use_delims: bool = False      # wrap trace names in the kind's prefix/suffix
    pause: bool = True            # wait for Enter before exiting (interactive only)
    refresh_interval: float = 0.05
    debug: bool = False           # post-mortem debugger on fatal errors
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, env: t.Mapping[str, str] | None = None, **overrides: t.Any) -> "Settings":
        """Build settings from EXTSTATS_* environment variables, then apply overrides."""
        env = os.environ if env is None else env
        settings = cls(
            top_count=_env_int(env, "TOP", DEFAULT_TOP_COUNT),
            use_delims=_env_flag(env, "DELIMS", False),
            pause=not _env_flag(env, "NO_PAUSE", False),
            debug=_env_flag(env, "DEBUG", False),
            log_level=_env_level(env, "WARNING"),
        )
        return dc.replace(settings, **overrides)
