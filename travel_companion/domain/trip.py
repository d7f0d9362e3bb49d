"""Trip aggregate.

A ``Trip`` is immutable. Every transition returns a new instance built through
the model constructor, so all aggregate invariants are re-checked on each state
the trip can reach. A failed transition raises and leaves the old value intact.

Itinerary items live in one flat ordered list. Day buckets and the
places-to-visit backlog are projections of that list, never stored separately.
"""

from __future__ import annotations

import datetime as dt
from typing import Iterable, Optional

from pydantic import Field, model_validator

from travel_companion.domain.enums import TripRole, TripStatus, TripVisibility
from travel_companion.domain.exceptions import Forbidden, InvariantViolation, NotFound, ValidationError
from travel_companion.domain.models import (
    DayBucket,
    DomainModel,
    ItineraryItem,
    TripInvite,
    TripMembership,
    new_id,
    utc_now,
)


class Trip(DomainModel):
    id: str = Field(default_factory=new_id)
    user_id: str
    name: str
    start_date: dt.date
    end_date: dt.date
    visibility: TripVisibility = TripVisibility.PRIVATE
    status: TripStatus = TripStatus.ACTIVE
    memberships: tuple[TripMembership, ...] = ()
    invites: tuple[TripInvite, ...] = ()
    itinerary_items: tuple[ItineraryItem, ...] = ()
    created_at: dt.datetime = Field(default_factory=utc_now)

    @model_validator(mode="after")
    def _check_invariants(self) -> "Trip":
        if not self.name.strip():
            raise ValidationError("Trip name cannot be blank")
        if self.end_date < self.start_date:
            raise ValidationError("End date cannot be before start date")

        if not self.memberships:
            raise InvariantViolation("Trip must have at least one member")
        member_ids = [m.user_id for m in self.memberships]
        if len(set(member_ids)) != len(member_ids):
            raise InvariantViolation("Trip memberships must be unique per user")
        if self.role_of(self.user_id) != TripRole.OWNER:
            raise InvariantViolation("Primary owner must be a member with OWNER role")

        emails = [invite.email.lower() for invite in self.invites]
        if len(set(emails)) != len(emails):
            raise InvariantViolation("Trip invites must be unique per email")

        item_ids = [item.id for item in self.itinerary_items]
        if len(set(item_ids)) != len(item_ids):
            raise InvariantViolation("Itinerary item ids must be unique")
        for item in self.itinerary_items:
            if not item.is_in_places_to_visit and not self.is_date_in_range(item.date):
                raise ValidationError(
                    f"Itinerary item date must be within trip date range ({self.start_date} - {self.end_date})"
                )
        return self

    @classmethod
    def create(
        cls,
        *,
        user_id: str,
        name: str,
        start_date: dt.date,
        end_date: dt.date,
        visibility: TripVisibility = TripVisibility.PRIVATE,
        trip_id: Optional[str] = None,
        created_at: Optional[dt.datetime] = None,
    ) -> "Trip":
        return cls(
            id=trip_id or new_id(),
            user_id=user_id,
            name=name.strip(),
            start_date=start_date,
            end_date=end_date,
            visibility=visibility,
            memberships=(TripMembership(user_id=user_id, role=TripRole.OWNER),),
            created_at=created_at or utc_now(),
        )

    # ── dates and containers ─────────────────────────────

    @property
    def day_count(self) -> int:
        return (self.end_date - self.start_date).days + 1

    def is_date_in_range(self, date: dt.date) -> bool:
        return self.start_date <= date <= self.end_date

    def date_for_day(self, day_number: int) -> dt.date:
        if day_number < 1:
            raise ValidationError("Day number must be at least 1")
        date = self.start_date + dt.timedelta(days=day_number - 1)
        if date > self.end_date:
            raise ValidationError(f"Day {day_number} is outside the trip date range")
        return date

    def day_number_of(self, item: ItineraryItem) -> Optional[int]:
        """Day number for a scheduled item, ``None`` for backlog items."""
        if item.is_in_places_to_visit:
            return None
        return (item.date - self.start_date).days + 1

    def place_item(self, item: ItineraryItem, day_number: Optional[int]) -> ItineraryItem:
        """Return ``item`` assigned to ``day_number`` or, when ``None``, to the backlog."""
        if day_number is None:
            return item.with_changes(is_in_places_to_visit=True, date=self.start_date)
        return item.with_changes(is_in_places_to_visit=False, date=self.date_for_day(day_number))

    def generated_days(self) -> list[DayBucket]:
        buckets: list[DayBucket] = []
        for offset in range(self.day_count):
            date = self.start_date + dt.timedelta(days=offset)
            items = tuple(
                item
                for item in self.itinerary_items
                if not item.is_in_places_to_visit and item.date == date
            )
            buckets.append(DayBucket(day_number=offset + 1, date=date, items=items))
        return buckets

    def places_to_visit_items(self) -> list[ItineraryItem]:
        return [item for item in self.itinerary_items if item.is_in_places_to_visit]

    def find_item(self, item_id: str) -> ItineraryItem:
        for item in self.itinerary_items:
            if item.id == item_id:
                return item
        raise NotFound(f"Itinerary item {item_id} not found")

    def with_items(self, items: Iterable[ItineraryItem]) -> "Trip":
        return self.with_changes(itinerary_items=tuple(items))

    # ── itinerary transitions ────────────────────────────

    def add_itinerary_item(self, item: ItineraryItem) -> "Trip":
        if item.is_in_places_to_visit:
            item = item.with_changes(date=self.start_date)
        elif not self.is_date_in_range(item.date):
            raise ValidationError(
                f"Itinerary item date must be within trip date range ({self.start_date} - {self.end_date})"
            )
        return self.with_items((*self.itinerary_items, item))

    def add_itinerary_item_to_day(
        self,
        place_name: str,
        notes: str,
        latitude: float,
        longitude: float,
        day_number: int,
    ) -> "Trip":
        item = ItineraryItem(
            place_name=place_name.strip(),
            date=self.date_for_day(day_number),
            notes=notes,
            latitude=latitude,
            longitude=longitude,
        )
        return self.add_itinerary_item(item)

    def add_itinerary_item_to_places_to_visit(
        self,
        place_name: str,
        notes: str,
        latitude: float,
        longitude: float,
    ) -> "Trip":
        item = ItineraryItem(
            place_name=place_name.strip(),
            date=self.start_date,
            notes=notes,
            latitude=latitude,
            longitude=longitude,
            is_in_places_to_visit=True,
        )
        return self.add_itinerary_item(item)

    def update_itinerary_item(self, item_id: str, new_item: ItineraryItem) -> "Trip":
        """Replace the item in place; the replacement keeps the original id and position."""
        self.find_item(item_id)
        replacement = new_item.with_changes(id=item_id)
        if replacement.is_in_places_to_visit:
            replacement = replacement.with_changes(date=self.start_date)
        elif not self.is_date_in_range(replacement.date):
            raise ValidationError(
                f"Itinerary item date must be within trip date range ({self.start_date} - {self.end_date})"
            )
        return self.with_items(
            replacement if item.id == item_id else item for item in self.itinerary_items
        )

    def update_itinerary_item_details(
        self,
        item_id: str,
        place_name: str,
        notes: str,
        latitude: float,
        longitude: float,
        day_number: Optional[int],
    ) -> "Trip":
        current = self.find_item(item_id)
        edited = current.with_changes(
            place_name=place_name.strip(),
            notes=notes,
            latitude=latitude,
            longitude=longitude,
        )
        return self.update_itinerary_item(item_id, self.place_item(edited, day_number))

    def remove_itinerary_item(self, item_id: str) -> "Trip":
        self.find_item(item_id)
        return self.with_items(item for item in self.itinerary_items if item.id != item_id)

    # ── details and lifecycle ────────────────────────────

    def update_details(
        self,
        name: str,
        start_date: dt.date,
        end_date: dt.date,
        visibility: Optional[TripVisibility] = None,
    ) -> "Trip":
        """Rename and reschedule the trip.

        Items that fall outside the new range are moved to the backlog with
        their date reset to the new start date. Existing backlog items are
        re-stamped with the new start date as well. List order is untouched.
        """
        if end_date < start_date:
            raise ValidationError("End date cannot be before start date")

        migrated: list[ItineraryItem] = []
        for item in self.itinerary_items:
            if item.is_in_places_to_visit or not start_date <= item.date <= end_date:
                migrated.append(item.with_changes(is_in_places_to_visit=True, date=start_date))
            else:
                migrated.append(item)

        return self.with_changes(
            name=name.strip(),
            start_date=start_date,
            end_date=end_date,
            visibility=visibility if visibility is not None else self.visibility,
            itinerary_items=tuple(migrated),
        )

    def archive(self) -> "Trip":
        if self.status == TripStatus.ARCHIVED:
            return self
        return self.with_changes(status=TripStatus.ARCHIVED)

    def restore(self) -> "Trip":
        if self.status == TripStatus.ACTIVE:
            return self
        return self.with_changes(status=TripStatus.ACTIVE)

    # ── membership queries ───────────────────────────────

    def role_of(self, user_id: Optional[str]) -> Optional[TripRole]:
        if user_id is None:
            return None
        for membership in self.memberships:
            if membership.user_id == user_id:
                return membership.role
        return None

    def has_role(self, user_id: Optional[str], role: TripRole) -> bool:
        return self.role_of(user_id) == role

    def is_member(self, user_id: Optional[str]) -> bool:
        return self.role_of(user_id) is not None

    def can_view(self, user_id: Optional[str] = None) -> bool:
        return self.visibility == TripVisibility.PUBLIC or self.is_member(user_id)

    def can_write(self, user_id: Optional[str]) -> bool:
        return self.role_of(user_id) in (TripRole.OWNER, TripRole.EDITOR)

    def owner_ids(self) -> list[str]:
        return [m.user_id for m in self.memberships if m.role == TripRole.OWNER]

    # ── membership transitions ───────────────────────────

    def with_member_role(self, user_id: str, role: TripRole) -> "Trip":
        """Upsert a membership: update the role in place or append a new member."""
        if self.is_member(user_id):
            memberships = tuple(
                m.with_changes(role=role) if m.user_id == user_id else m for m in self.memberships
            )
        else:
            memberships = (*self.memberships, TripMembership(user_id=user_id, role=role))
        return self.with_changes(memberships=memberships)

    def add_owner(self, actor_id: str, target_id: str) -> "Trip":
        if not self.has_role(actor_id, TripRole.OWNER):
            raise Forbidden("Only owners can add owners")
        return self.with_member_role(target_id, TripRole.OWNER)

    def remove_member(self, actor_id: str, target_id: str) -> "Trip":
        if not self.has_role(actor_id, TripRole.OWNER):
            raise Forbidden("Only owners can remove members")
        target_role = self.role_of(target_id)
        if target_role is None:
            raise NotFound("Target user is not a member")
        if target_id == self.user_id:
            raise InvariantViolation("Primary owner must transfer ownership before being removed")
        if target_role == TripRole.OWNER:
            if target_id != actor_id:
                raise Forbidden("Owners cannot remove other owners")
            if len(self.owner_ids()) == 1:
                raise InvariantViolation("Trip must have at least one owner")
        return self.with_changes(
            memberships=tuple(m for m in self.memberships if m.user_id != target_id)
        )

    def leave_trip(self, member_id: str, successor_owner_id: Optional[str] = None) -> "Trip":
        role = self.role_of(member_id)
        if role is None:
            raise NotFound("User is not a member of this trip")

        trip = self
        user_id = self.user_id
        if role == TripRole.OWNER:
            if successor_owner_id is not None:
                if successor_owner_id == member_id:
                    raise ValidationError("Successor owner must be a different member")
                if not self.is_member(successor_owner_id):
                    raise InvariantViolation("Successor owner must already be a member")
                trip = self.with_member_role(successor_owner_id, TripRole.OWNER)
                if member_id == self.user_id:
                    user_id = successor_owner_id
            elif len(self.owner_ids()) == 1:
                raise InvariantViolation("The last owner must name a successor before leaving")
            elif member_id == self.user_id:
                raise InvariantViolation("Primary owner must name a successor before leaving")

        return trip.with_changes(
            user_id=user_id,
            memberships=tuple(m for m in trip.memberships if m.user_id != member_id),
        )


__all__ = ["Trip"]
