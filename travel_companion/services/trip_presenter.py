"""Trip summary read model."""

from __future__ import annotations

from typing import Optional

from travel_companion.application.contracts import TripView
from travel_companion.domain.trip import Trip


def present_trip(trip: Trip, viewer_id: Optional[str] = None) -> TripView:
    return TripView(
        id=trip.id,
        user_id=trip.user_id,
        name=trip.name,
        start_date=trip.start_date,
        end_date=trip.end_date,
        visibility=trip.visibility,
        status=trip.status,
        created_at=trip.created_at,
        role=trip.role_of(viewer_id),
    )


__all__ = ["present_trip"]
