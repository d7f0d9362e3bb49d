"""Trip endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from travel_companion.api.dependencies import current_user_id, get_ctx, optional_user_id
from travel_companion.api.schemas import CreateTripRequest, UpdateTripRequest
from travel_companion.application import trip_service
from travel_companion.application.context import AppContext
from travel_companion.application.contracts import TripView
from travel_companion.domain.enums import TripStatusFilter
from travel_companion.services.trip_presenter import present_trip

router = APIRouter(prefix="/trips", tags=["trips"])


@router.post("", response_model=TripView, status_code=201)
def create_trip(
    body: CreateTripRequest,
    user_id: str = Depends(current_user_id),
    ctx: AppContext = Depends(get_ctx),
) -> TripView:
    trip = trip_service.create_trip(
        ctx=ctx,
        user_id=user_id,
        name=body.name,
        start_date=body.start_date,
        end_date=body.end_date,
        visibility=body.visibility,
    )
    return present_trip(trip, user_id)


@router.get("", response_model=list[TripView])
def list_trips(
    status: TripStatusFilter = Query(default=TripStatusFilter.ACTIVE),
    user_id: str = Depends(current_user_id),
    ctx: AppContext = Depends(get_ctx),
) -> list[TripView]:
    trips = trip_service.list_trips(ctx=ctx, user_id=user_id, status_filter=status)
    return [present_trip(trip, user_id) for trip in trips]


@router.get("/{trip_id}", response_model=TripView)
def get_trip(
    trip_id: str,
    user_id: Optional[str] = Depends(optional_user_id),
    ctx: AppContext = Depends(get_ctx),
) -> TripView:
    return present_trip(trip_service.get_trip(ctx=ctx, trip_id=trip_id, user_id=user_id), user_id)


@router.put("/{trip_id}", response_model=TripView)
def update_trip(
    trip_id: str,
    body: UpdateTripRequest,
    user_id: str = Depends(current_user_id),
    ctx: AppContext = Depends(get_ctx),
) -> TripView:
    trip = trip_service.update_trip(
        ctx=ctx,
        trip_id=trip_id,
        user_id=user_id,
        name=body.name,
        start_date=body.start_date,
        end_date=body.end_date,
        visibility=body.visibility,
    )
    return present_trip(trip, user_id)


@router.delete("/{trip_id}", status_code=204)
def delete_trip(
    trip_id: str,
    user_id: str = Depends(current_user_id),
    ctx: AppContext = Depends(get_ctx),
) -> Response:
    trip_service.delete_trip(ctx=ctx, trip_id=trip_id, user_id=user_id)
    return Response(status_code=204)


@router.post("/{trip_id}/archive", response_model=TripView)
def archive_trip(
    trip_id: str,
    user_id: str = Depends(current_user_id),
    ctx: AppContext = Depends(get_ctx),
) -> TripView:
    return present_trip(trip_service.archive_trip(ctx=ctx, trip_id=trip_id, user_id=user_id), user_id)


@router.post("/{trip_id}/restore", response_model=TripView)
def restore_trip(
    trip_id: str,
    user_id: str = Depends(current_user_id),
    ctx: AppContext = Depends(get_ctx),
) -> TripView:
    return present_trip(trip_service.restore_trip(ctx=ctx, trip_id=trip_id, user_id=user_id), user_id)


__all__ = ["router"]
