"""Runtime settings read from TYPEMETER_* environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_TICK_MS = 1000


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    user_id: str = "local"
    tick_interval_ms: int = DEFAULT_TICK_MS
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        home = env.get("TYPEMETER_HOME")
        data_dir = Path(home).expanduser() if home else Path.home() / ".typemeter"
        user_id = env.get("TYPEMETER_USER", "").strip() or "local"
        log_level = env.get("TYPEMETER_LOG_LEVEL", "INFO").strip().upper() or "INFO"
        if not isinstance(logging.getLevelName(log_level), int):
            logger.warning("Unknown log level %r, using INFO", log_level)
            log_level = "INFO"
        return cls(
            data_dir=data_dir,
            user_id=user_id,
            tick_interval_ms=_positive_int(env, "TYPEMETER_TICK_MS", DEFAULT_TICK_MS),
            log_level=log_level,
        )


def _positive_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("%s=%r is not an integer, using %d", name, raw, default)
        return default
    if value <= 0:
        logger.warning("%s must be positive, using %d", name, default)
        return default
    return value
