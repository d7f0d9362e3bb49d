"""Project a trip's flat item list into the day-by-day itinerary read model."""

from __future__ import annotations

from typing import Optional

from travel_companion.application.contracts import (
    DayView,
    ItineraryItemView,
    ItineraryView,
    PlacesToVisitView,
)
from travel_companion.domain.models import ItineraryItem
from travel_companion.domain.trip import Trip


def present_item(item: ItineraryItem, day_number: Optional[int]) -> ItineraryItemView:
    return ItineraryItemView(
        id=item.id,
        place_name=item.place_name,
        notes=item.notes,
        latitude=item.latitude,
        longitude=item.longitude,
        day_number=day_number,
    )


def present_itinerary(trip: Trip) -> ItineraryView:
    days = [
        DayView(
            day_number=bucket.day_number,
            date=bucket.date,
            items=[present_item(item, bucket.day_number) for item in bucket.items],
        )
        for bucket in trip.generated_days()
    ]
    places = PlacesToVisitView(items=[present_item(item, None) for item in trip.places_to_visit_items()])
    return ItineraryView(days=days, places_to_visit=places)


__all__ = ["present_item", "present_itinerary"]
