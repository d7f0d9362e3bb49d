"""Pydantic domain models."""

from __future__ import annotations

import datetime as dt
import uuid
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from travel_companion.domain.enums import InviteStatus, TripRole
from travel_companion.domain.exceptions import ValidationError


def new_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def normalize_email(email: str) -> str:
    return str(email or "").strip().lower()


class DomainModel(BaseModel):
    """Immutable base: transitions build a fresh, fully validated instance."""

    model_config = ConfigDict(frozen=True)

    def with_changes(self, **changes: Any):
        fields = {name: getattr(self, name) for name in type(self).model_fields}
        fields.update(changes)
        return type(self)(**fields)


class ItineraryItem(DomainModel):
    id: str = Field(default_factory=new_id)
    place_name: str
    date: dt.date
    notes: str = ""
    latitude: float
    longitude: float
    is_in_places_to_visit: bool = False

    @model_validator(mode="after")
    def _check_fields(self) -> "ItineraryItem":
        if not self.place_name.strip():
            raise ValidationError("Place name cannot be blank")
        if not -90.0 <= self.latitude <= 90.0:
            raise ValidationError("Latitude must be between -90 and 90")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValidationError("Longitude must be between -180 and 180")
        return self


class TripMembership(DomainModel):
    user_id: str
    role: TripRole


class TripInvite(DomainModel):
    email: str
    role: TripRole
    status: InviteStatus = InviteStatus.PENDING
    created_at: dt.datetime = Field(default_factory=utc_now)

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, value: Any) -> str:
        email = normalize_email(value)
        if not email:
            raise ValidationError("Invite email cannot be blank")
        return email


class User(DomainModel):
    id: str = Field(default_factory=new_id)
    email: str
    display_name: str
    password_hash: str
    created_at: dt.datetime = Field(default_factory=utc_now)

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, value: Any) -> str:
        email = normalize_email(value)
        if not email:
            raise ValidationError("Email cannot be blank")
        return email


class DayBucket(DomainModel):
    """One calendar day of a trip with its scheduled items in list order."""

    day_number: int
    date: dt.date
    items: tuple[ItineraryItem, ...] = ()


__all__ = [
    "DayBucket",
    "DomainModel",
    "ItineraryItem",
    "TripInvite",
    "TripMembership",
    "User",
    "new_id",
    "normalize_email",
    "utc_now",
]
