"""Persistence-layer record schemas and aggregate mapping."""

from __future__ import annotations

import datetime as dt
from typing import Any

from pydantic import BaseModel, Field

from travel_companion.domain.enums import InviteStatus, TripRole, TripStatus, TripVisibility
from travel_companion.domain.models import ItineraryItem, TripInvite, TripMembership, User
from travel_companion.domain.trip import Trip


class TripRecord(BaseModel):
    trip_id: str
    user_id: str
    name: str
    start_date: str
    end_date: str
    visibility: str
    status: str
    itinerary: list[dict[str, Any]] = Field(default_factory=list)
    created_at: str


class MembershipRecord(BaseModel):
    trip_id: str
    user_id: str
    role: str
    position: int


class InviteRecord(BaseModel):
    trip_id: str
    email: str
    role: str
    status: str
    created_at: str
    invite_id: int | None = None


class UserRecord(BaseModel):
    user_id: str
    email: str
    display_name: str
    password_hash: str
    created_at: str


def item_to_payload(item: ItineraryItem) -> dict[str, Any]:
    return {
        "id": item.id,
        "place_name": item.place_name,
        "date": item.date.isoformat(),
        "notes": item.notes,
        "latitude": item.latitude,
        "longitude": item.longitude,
        "is_in_places_to_visit": item.is_in_places_to_visit,
    }


def trip_to_records(trip: Trip) -> tuple[TripRecord, list[MembershipRecord], list[InviteRecord]]:
    record = TripRecord(
        trip_id=trip.id,
        user_id=trip.user_id,
        name=trip.name,
        start_date=trip.start_date.isoformat(),
        end_date=trip.end_date.isoformat(),
        visibility=trip.visibility.value,
        status=trip.status.value,
        itinerary=[item_to_payload(item) for item in trip.itinerary_items],
        created_at=trip.created_at.isoformat(),
    )
    memberships = [
        MembershipRecord(trip_id=trip.id, user_id=m.user_id, role=m.role.value, position=index)
        for index, m in enumerate(trip.memberships)
    ]
    invites = [
        InviteRecord(
            trip_id=trip.id,
            email=invite.email,
            role=invite.role.value,
            status=invite.status.value,
            created_at=invite.created_at.isoformat(),
        )
        for invite in trip.invites
    ]
    return record, memberships, invites


def trip_from_records(
    record: TripRecord,
    memberships: list[MembershipRecord],
    invites: list[InviteRecord],
) -> Trip:
    ordered = sorted(memberships, key=lambda m: m.position)
    return Trip(
        id=record.trip_id,
        user_id=record.user_id,
        name=record.name,
        start_date=dt.date.fromisoformat(record.start_date),
        end_date=dt.date.fromisoformat(record.end_date),
        visibility=TripVisibility(record.visibility),
        status=TripStatus(record.status),
        memberships=tuple(TripMembership(user_id=m.user_id, role=TripRole(m.role)) for m in ordered),
        invites=tuple(
            TripInvite(
                email=invite.email,
                role=TripRole(invite.role),
                status=InviteStatus(invite.status),
                created_at=dt.datetime.fromisoformat(invite.created_at),
            )
            for invite in invites
        ),
        itinerary_items=tuple(ItineraryItem(**payload) for payload in record.itinerary),
        created_at=dt.datetime.fromisoformat(record.created_at),
    )


def user_to_record(user: User) -> UserRecord:
    return UserRecord(
        user_id=user.id,
        email=user.email,
        display_name=user.display_name,
        password_hash=user.password_hash,
        created_at=user.created_at.isoformat(),
    )


def user_from_record(record: UserRecord) -> User:
    return User(
        id=record.user_id,
        email=record.email,
        display_name=record.display_name,
        password_hash=record.password_hash,
        created_at=dt.datetime.fromisoformat(record.created_at),
    )


__all__ = [
    "InviteRecord",
    "MembershipRecord",
    "TripRecord",
    "UserRecord",
    "item_to_payload",
    "trip_from_records",
    "trip_to_records",
    "user_from_record",
    "user_to_record",
]
