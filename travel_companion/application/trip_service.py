"""Trip lifecycle use cases."""

from __future__ import annotations

import datetime as dt
from typing import Optional

from travel_companion.application.access import commit, load_trip, logged_operation
from travel_companion.application.context import AppContext
from travel_companion.domain.enums import TripStatus, TripStatusFilter, TripVisibility
from travel_companion.domain.permissions import TripOperation, require_permission
from travel_companion.domain.trip import Trip


def create_trip(
    *,
    ctx: AppContext,
    user_id: str,
    name: str,
    start_date: dt.date,
    end_date: dt.date,
    visibility: TripVisibility = TripVisibility.PRIVATE,
) -> Trip:
    with logged_operation(ctx, "create_trip"):
        trip = Trip.create(
            user_id=user_id,
            name=name,
            start_date=start_date,
            end_date=end_date,
            visibility=visibility,
            created_at=ctx.clock(),
        )
        return commit(ctx, "create_trip", trip, actor_id=user_id)


def get_trip(*, ctx: AppContext, trip_id: str, user_id: Optional[str]) -> Trip:
    return load_trip(ctx, trip_id, user_id)


def list_trips(
    *,
    ctx: AppContext,
    user_id: str,
    status_filter: TripStatusFilter = TripStatusFilter.ACTIVE,
) -> list[Trip]:
    trips = ctx.trip_repo.find_by_user_id(user_id)
    if status_filter == TripStatusFilter.ALL:
        return trips
    wanted = TripStatus(status_filter.value)
    return [trip for trip in trips if trip.status == wanted]


def update_trip(
    *,
    ctx: AppContext,
    trip_id: str,
    user_id: str,
    name: Optional[str] = None,
    start_date: Optional[dt.date] = None,
    end_date: Optional[dt.date] = None,
    visibility: Optional[TripVisibility] = None,
) -> Trip:
    """Apply the requested detail changes; fields left as ``None`` keep their value."""
    with logged_operation(ctx, "update_trip", trip_id=trip_id):
        trip = load_trip(ctx, trip_id, user_id)
        edits_details = any(value is not None for value in (name, start_date, end_date))
        if not edits_details and visibility is None:
            return trip
        if edits_details:
            require_permission(trip, user_id, TripOperation.EDIT_DETAILS)
        if visibility is not None:
            require_permission(trip, user_id, TripOperation.CHANGE_VISIBILITY)

        updated = trip.update_details(
            name=name if name is not None else trip.name,
            start_date=start_date or trip.start_date,
            end_date=end_date or trip.end_date,
            visibility=visibility,
        )
        return commit(ctx, "update_trip", updated, actor_id=user_id)


def delete_trip(*, ctx: AppContext, trip_id: str, user_id: str) -> None:
    with logged_operation(ctx, "delete_trip", trip_id=trip_id):
        trip = load_trip(ctx, trip_id, user_id, TripOperation.DELETE)
        ctx.trip_repo.delete_by_id(trip.id)
        if ctx.logger is not None:
            ctx.logger.transition("delete_trip", trip_id=trip.id, actor_id=user_id)


def archive_trip(*, ctx: AppContext, trip_id: str, user_id: str) -> Trip:
    with logged_operation(ctx, "archive_trip", trip_id=trip_id):
        trip = load_trip(ctx, trip_id, user_id, TripOperation.ARCHIVE)
        return commit(ctx, "archive_trip", trip.archive(), actor_id=user_id)


def restore_trip(*, ctx: AppContext, trip_id: str, user_id: str) -> Trip:
    with logged_operation(ctx, "restore_trip", trip_id=trip_id):
        trip = load_trip(ctx, trip_id, user_id, TripOperation.ARCHIVE)
        return commit(ctx, "restore_trip", trip.restore(), actor_id=user_id)


__all__ = [
    "archive_trip",
    "create_trip",
    "delete_trip",
    "get_trip",
    "list_trips",
    "restore_trip",
    "update_trip",
]
