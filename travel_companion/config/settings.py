"""Runtime settings resolved from the environment."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field

_TRUTHY = {"1", "true", "yes", "on"}
_DEFAULT_DB_PATH = Path("data") / "travel_companion.sqlite3"


def _is_enabled(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


def _db_path() -> Path:
    raw = os.getenv("TRIP_PERSISTENCE_DB", "").strip()
    return Path(raw) if raw else _DEFAULT_DB_PATH


def _cors_origins() -> list[str]:
    raw = os.getenv("CORS_ORIGINS", "*")
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or ["*"]


class AppSettings(BaseModel):
    persistence_enabled: bool = Field(default=True)
    persistence_db: Path = Field(default=_DEFAULT_DB_PATH)
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    enable_docs: bool = Field(default=False)
    log_trace_prefix: str = Field(default="")


def resolve_settings() -> AppSettings:
    return AppSettings(
        persistence_enabled=_is_enabled(os.getenv("TRIP_PERSISTENCE_ENABLED"), default=True),
        persistence_db=_db_path(),
        cors_origins=_cors_origins(),
        enable_docs=_is_enabled(os.getenv("ENABLE_DOCS")),
        log_trace_prefix=os.getenv("LOG_TRACE_PREFIX", "").strip(),
    )


__all__ = ["AppSettings", "resolve_settings"]
