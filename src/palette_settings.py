"""Environment-driven defaults for the command line front end."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    target_count: int = 12
    similarity_threshold: float = 30.0
    seed: Optional[int] = None
    log_level: str = "WARNING"


def _number(env: Mapping[str, str], key: str, cast, default):
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning("ignoring %s=%r: not a valid %s", key, raw, cast.__name__)
        return default


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ
    return Settings(
        target_count=_number(env, "PALETTE_TARGET_COUNT", int, 12),
        similarity_threshold=_number(env, "PALETTE_SIMILARITY", float, 30.0),
        seed=_number(env, "PALETTE_SEED", int, None),
        log_level=env.get("PALETTE_LOG_LEVEL", "WARNING").upper(),
    )
