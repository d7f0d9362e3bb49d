"""Anchor-based reordering of itinerary items.

A move names the destination container (a day number, or ``None`` for the
places-to-visit backlog) and optionally one anchor item in that container.
The item is taken out of the flat list and put back next to the anchor, or
after the last item of the container when no anchor is given.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from travel_companion.domain.exceptions import NotFound, ValidationError
from travel_companion.domain.models import ItineraryItem
from travel_companion.domain.trip import Trip


def _in_container(item: ItineraryItem, *, backlog: bool, date: dt.date) -> bool:
    if backlog:
        return item.is_in_places_to_visit
    return not item.is_in_places_to_visit and item.date == date


def _anchor_index(
    remaining: list[ItineraryItem],
    anchor_id: str,
    *,
    backlog: bool,
    date: dt.date,
) -> int:
    for index, candidate in enumerate(remaining):
        if candidate.id != anchor_id:
            continue
        if not _in_container(candidate, backlog=backlog, date=date):
            raise ValidationError("Anchor item must belong to the target container")
        return index
    raise NotFound(f"Anchor item {anchor_id} not found")


def move_itinerary_item(
    trip: Trip,
    item_id: str,
    *,
    target_day_number: Optional[int] = None,
    before_item_id: Optional[str] = None,
    after_item_id: Optional[str] = None,
) -> Trip:
    """Move ``item_id`` into the target container and return the new trip.

    ``target_day_number=None`` targets the backlog. At most one of
    ``before_item_id`` and ``after_item_id`` may be given.
    """
    if before_item_id is not None and after_item_id is not None:
        raise ValidationError("Only one of beforeItemId or afterItemId may be provided")

    moved = trip.place_item(trip.find_item(item_id), target_day_number)
    backlog = moved.is_in_places_to_visit
    remaining = [item for item in trip.itinerary_items if item.id != item_id]

    if before_item_id is not None:
        insert_at = _anchor_index(remaining, before_item_id, backlog=backlog, date=moved.date)
    elif after_item_id is not None:
        insert_at = _anchor_index(remaining, after_item_id, backlog=backlog, date=moved.date) + 1
    else:
        insert_at = len(remaining)
        for index in range(len(remaining) - 1, -1, -1):
            if _in_container(remaining[index], backlog=backlog, date=moved.date):
                insert_at = index + 1
                break

    remaining.insert(insert_at, moved)
    return trip.with_items(remaining)


__all__ = ["move_itinerary_item"]
