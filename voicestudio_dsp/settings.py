"""Environment-driven service settings.

Everything is read from environment variables so the same image runs
locally and in deployment without config files:

- DSP_LOG_LEVEL           logging level name (default INFO)
- DSP_OUTPUT_DIR          where rendered WAVs are written (default: temp dir)
- DSP_CORS_ORIGINS        comma separated origins allowed to call the API
- DSP_MAX_UPLOAD_SECONDS  longest decoded upload accepted (default 600)
"""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from functools import lru_cache
from typing import List

DEFAULT_CORS_ORIGINS = "http://localhost:3000"


@dataclass(frozen=True)
class Settings:
    log_level: str
    output_dir: str
    cors_origins: List[str]
    max_upload_seconds: float


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def load_settings() -> Settings:
    origins = os.getenv("DSP_CORS_ORIGINS") or DEFAULT_CORS_ORIGINS
    return Settings(
        log_level=(os.getenv("DSP_LOG_LEVEL") or "INFO").upper(),
        output_dir=os.getenv("DSP_OUTPUT_DIR") or tempfile.gettempdir(),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        max_upload_seconds=_float_env("DSP_MAX_UPLOAD_SECONDS", 600.0),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
