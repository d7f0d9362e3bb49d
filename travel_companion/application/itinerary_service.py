"""Itinerary editing use cases."""

from __future__ import annotations

from typing import Optional

from travel_companion.application.access import commit, load_trip, logged_operation
from travel_companion.application.context import AppContext
from travel_companion.application.contracts import ItemDraft, MoveCommand
from travel_companion.domain.permissions import TripOperation
from travel_companion.domain.planning.placement import move_itinerary_item
from travel_companion.domain.trip import Trip


def get_itinerary(*, ctx: AppContext, trip_id: str, user_id: Optional[str]) -> Trip:
    return load_trip(ctx, trip_id, user_id)


def add_item(*, ctx: AppContext, trip_id: str, user_id: str, draft: ItemDraft) -> Trip:
    with logged_operation(ctx, "add_item", trip_id=trip_id):
        trip = load_trip(ctx, trip_id, user_id, TripOperation.EDIT_ITINERARY)
        if draft.day_number is None:
            updated = trip.add_itinerary_item_to_places_to_visit(
                draft.place_name, draft.notes, draft.latitude, draft.longitude
            )
        else:
            updated = trip.add_itinerary_item_to_day(
                draft.place_name, draft.notes, draft.latitude, draft.longitude, draft.day_number
            )
        return commit(ctx, "add_item", updated, actor_id=user_id, item_id=updated.itinerary_items[-1].id)


def update_item(
    *,
    ctx: AppContext,
    trip_id: str,
    user_id: str,
    item_id: str,
    draft: ItemDraft,
) -> Trip:
    with logged_operation(ctx, "update_item", trip_id=trip_id, item_id=item_id):
        trip = load_trip(ctx, trip_id, user_id, TripOperation.EDIT_ITINERARY)
        updated = trip.update_itinerary_item_details(
            item_id,
            place_name=draft.place_name,
            notes=draft.notes,
            latitude=draft.latitude,
            longitude=draft.longitude,
            day_number=draft.day_number,
        )
        return commit(ctx, "update_item", updated, actor_id=user_id, item_id=item_id)


def remove_item(*, ctx: AppContext, trip_id: str, user_id: str, item_id: str) -> Trip:
    with logged_operation(ctx, "remove_item", trip_id=trip_id, item_id=item_id):
        trip = load_trip(ctx, trip_id, user_id, TripOperation.EDIT_ITINERARY)
        return commit(ctx, "remove_item", trip.remove_itinerary_item(item_id), actor_id=user_id, item_id=item_id)


def move_item(
    *,
    ctx: AppContext,
    trip_id: str,
    user_id: str,
    item_id: str,
    command: MoveCommand,
) -> Trip:
    with logged_operation(ctx, "move_item", trip_id=trip_id, item_id=item_id):
        trip = load_trip(ctx, trip_id, user_id, TripOperation.EDIT_ITINERARY)
        updated = move_itinerary_item(
            trip,
            item_id,
            target_day_number=command.target_day_number,
            before_item_id=command.before_item_id,
            after_item_id=command.after_item_id,
        )
        return commit(
            ctx,
            "move_item",
            updated,
            actor_id=user_id,
            item_id=item_id,
            target_day_number=command.target_day_number,
        )


__all__ = ["add_item", "get_itinerary", "move_item", "remove_item", "update_item"]
