"""Itinerary endpoints; every response is the full day-by-day read model."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from travel_companion.api.dependencies import current_user_id, get_ctx, optional_user_id
from travel_companion.api.schemas import ItineraryItemRequest, MoveItemRequest
from travel_companion.application import itinerary_service
from travel_companion.application.context import AppContext
from travel_companion.application.contracts import ItineraryView
from travel_companion.services.itinerary_presenter import present_itinerary

router = APIRouter(prefix="/trips/{trip_id}/itinerary/v2", tags=["itinerary"])


@router.get("", response_model=ItineraryView)
def get_itinerary(
    trip_id: str,
    user_id: Optional[str] = Depends(optional_user_id),
    ctx: AppContext = Depends(get_ctx),
) -> ItineraryView:
    return present_itinerary(itinerary_service.get_itinerary(ctx=ctx, trip_id=trip_id, user_id=user_id))


@router.post("/items", response_model=ItineraryView, status_code=201)
def add_item(
    trip_id: str,
    body: ItineraryItemRequest,
    user_id: str = Depends(current_user_id),
    ctx: AppContext = Depends(get_ctx),
) -> ItineraryView:
    trip = itinerary_service.add_item(ctx=ctx, trip_id=trip_id, user_id=user_id, draft=body)
    return present_itinerary(trip)


@router.put("/items/{item_id}", response_model=ItineraryView)
def update_item(
    trip_id: str,
    item_id: str,
    body: ItineraryItemRequest,
    user_id: str = Depends(current_user_id),
    ctx: AppContext = Depends(get_ctx),
) -> ItineraryView:
    trip = itinerary_service.update_item(ctx=ctx, trip_id=trip_id, user_id=user_id, item_id=item_id, draft=body)
    return present_itinerary(trip)


@router.delete("/items/{item_id}", response_model=ItineraryView)
def remove_item(
    trip_id: str,
    item_id: str,
    user_id: str = Depends(current_user_id),
    ctx: AppContext = Depends(get_ctx),
) -> ItineraryView:
    trip = itinerary_service.remove_item(ctx=ctx, trip_id=trip_id, user_id=user_id, item_id=item_id)
    return present_itinerary(trip)


@router.post("/items/{item_id}/move", response_model=ItineraryView)
def move_item(
    trip_id: str,
    item_id: str,
    body: MoveItemRequest,
    user_id: str = Depends(current_user_id),
    ctx: AppContext = Depends(get_ctx),
) -> ItineraryView:
    trip = itinerary_service.move_item(
        ctx=ctx,
        trip_id=trip_id,
        user_id=user_id,
        item_id=item_id,
        command=body.to_command(),
    )
    return present_itinerary(trip)


__all__ = ["router"]
