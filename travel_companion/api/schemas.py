"""API request/response models."""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import EmailStr, Field

from travel_companion.application.contracts import CamelModel, ItemDraft, MoveCommand
from travel_companion.domain.enums import TripRole, TripVisibility


class CreateTripRequest(CamelModel):
    name: str = Field(min_length=1, max_length=200)
    start_date: dt.date
    end_date: dt.date
    visibility: TripVisibility = TripVisibility.PRIVATE


class UpdateTripRequest(CamelModel):
    name: Optional[str] = Field(default=None, max_length=200)
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    visibility: Optional[TripVisibility] = None


class ItineraryItemRequest(ItemDraft):
    pass


class MoveItemRequest(CamelModel):
    target_day_number: Optional[int] = None
    before_item_id: Optional[str] = None
    after_item_id: Optional[str] = None

    def to_command(self) -> MoveCommand:
        return MoveCommand(
            target_day_number=self.target_day_number,
            before_item_id=self.before_item_id,
            after_item_id=self.after_item_id,
        )


class AddOwnerRequest(CamelModel):
    user_id: str = Field(min_length=1, max_length=64)


class InviteRequest(CamelModel):
    email: EmailStr
    role: TripRole


class RespondToInviteRequest(CamelModel):
    accept: bool


class RoleRequest(CamelModel):
    role: TripRole


class HealthResponse(CamelModel):
    status: str = Field(description="ok")
    version: str = Field(default="")
    persistence: str = Field(default="")


__all__ = [
    "AddOwnerRequest",
    "CreateTripRequest",
    "HealthResponse",
    "InviteRequest",
    "ItineraryItemRequest",
    "MoveItemRequest",
    "RespondToInviteRequest",
    "RoleRequest",
    "UpdateTripRequest",
]
