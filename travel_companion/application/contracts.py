"""Application request/response contracts.

Read models are projections of a ``Trip``; they are produced for clients and
never accepted back as input. Wire names are camelCase.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from travel_companion.domain.enums import InviteStatus, TripRole, TripStatus, TripVisibility
from travel_companion.domain.exceptions import ValidationError

PLACES_TO_VISIT_LABEL = "Places To Visit"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ItineraryItemView(CamelModel):
    id: str
    place_name: str
    notes: str = ""
    latitude: float
    longitude: float
    day_number: Optional[int] = None


class DayView(CamelModel):
    day_number: int
    date: dt.date
    items: list[ItineraryItemView] = Field(default_factory=list)


class PlacesToVisitView(CamelModel):
    label: str = PLACES_TO_VISIT_LABEL
    items: list[ItineraryItemView] = Field(default_factory=list)


class ItineraryView(CamelModel):
    days: list[DayView] = Field(default_factory=list)
    places_to_visit: PlacesToVisitView = Field(default_factory=PlacesToVisitView)


class MembershipView(CamelModel):
    user_id: str
    role: TripRole


class InviteView(CamelModel):
    email: str
    role: TripRole
    status: InviteStatus


class CollaboratorsView(CamelModel):
    memberships: list[MembershipView] = Field(default_factory=list)
    invites: list[InviteView] = Field(default_factory=list)


class TripView(CamelModel):
    id: str
    user_id: str
    name: str
    start_date: dt.date
    end_date: dt.date
    visibility: TripVisibility
    status: TripStatus
    created_at: dt.datetime
    role: Optional[TripRole] = None


class MoveCommand(CamelModel):
    """Anchor-based move request: destination container plus at most one anchor."""

    target_day_number: Optional[int] = None
    before_item_id: Optional[str] = None
    after_item_id: Optional[str] = None

    @model_validator(mode="after")
    def _single_anchor(self) -> "MoveCommand":
        if self.before_item_id is not None and self.after_item_id is not None:
            raise ValidationError("Only one of beforeItemId or afterItemId may be provided")
        return self


class ItemDraft(CamelModel):
    """Content of an itinerary item as entered by a user; ``day_number=None`` is the backlog."""

    place_name: str = Field(min_length=1, max_length=200)
    notes: str = Field(default="", max_length=2000)
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
    day_number: Optional[int] = Field(default=None, ge=1)


__all__ = [
    "CamelModel",
    "CollaboratorsView",
    "DayView",
    "InviteView",
    "ItemDraft",
    "ItineraryItemView",
    "ItineraryView",
    "MembershipView",
    "MoveCommand",
    "PLACES_TO_VISIT_LABEL",
    "PlacesToVisitView",
    "TripView",
]
