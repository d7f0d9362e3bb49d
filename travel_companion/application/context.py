"""Application context for dependency injection."""

from __future__ import annotations

import datetime as dt
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from travel_companion.config.settings import AppSettings, resolve_settings
from travel_companion.domain.models import utc_now
from travel_companion.infrastructure.logging import get_logger
from travel_companion.persistence.repository import get_trip_repository, get_user_repository


@dataclass
class AppContext:
    trip_repo: Any
    user_repo: Any
    logger: Any = None
    clock: Callable[[], dt.datetime] = utc_now
    settings: AppSettings = field(default_factory=AppSettings)


def make_app_context(settings: Optional[AppSettings] = None) -> AppContext:
    settings = settings or resolve_settings()
    return AppContext(
        trip_repo=get_trip_repository(settings),
        user_repo=get_user_repository(settings),
        logger=get_logger(prefix=settings.log_trace_prefix),
        settings=settings,
    )


_context: Optional[AppContext] = None
_context_lock = threading.Lock()


def get_app_context() -> AppContext:
    global _context
    if _context is None:
        with _context_lock:
            if _context is None:
                _context = make_app_context()
    return _context


def reset_app_context() -> None:
    global _context
    with _context_lock:
        _context = None


__all__ = ["AppContext", "get_app_context", "make_app_context", "reset_app_context"]
