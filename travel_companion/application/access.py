"""Trip loading under the access policy, plus save-and-log helpers.

A trip the caller cannot view is reported as missing so its existence is not
disclosed. A visible trip where the caller lacks the needed role is Forbidden.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

from travel_companion.application.context import AppContext
from travel_companion.domain.exceptions import DomainError, NotFound
from travel_companion.domain.permissions import TripOperation, can_perform, require_permission
from travel_companion.domain.trip import Trip


def load_trip(
    ctx: AppContext,
    trip_id: str,
    user_id: Optional[str],
    operation: TripOperation = TripOperation.VIEW,
) -> Trip:
    trip = ctx.trip_repo.find_by_id(trip_id)
    if trip is None or not can_perform(trip, user_id, TripOperation.VIEW):
        raise NotFound("Trip not found")
    if operation != TripOperation.VIEW:
        require_permission(trip, user_id, operation)
    return trip


def commit(ctx: AppContext, operation: str, trip: Trip, *, actor_id: Optional[str], **extra) -> Trip:
    saved = ctx.trip_repo.save(trip)
    if ctx.logger is not None:
        ctx.logger.transition(operation, trip_id=trip.id, actor_id=actor_id, **extra)
    return saved


@contextmanager
def logged_operation(ctx: AppContext, operation: str, **extra) -> Iterator[None]:
    """Log rejections and failures of ``operation`` and re-raise them unchanged."""
    try:
        yield
    except DomainError as exc:
        if ctx.logger is not None:
            ctx.logger.rejected(operation, kind=type(exc).__name__, reason=exc.message, **extra)
        raise
    except Exception as exc:
        if ctx.logger is not None:
            ctx.logger.error(operation, f"{type(exc).__name__}: {exc}", **extra)
        raise


__all__ = ["commit", "load_trip", "logged_operation"]
