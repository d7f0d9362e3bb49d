"""Role-gated permission checks.

Roles are a flat enum; what each role may do is a lookup table keyed by
operation, read through plain predicate functions.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from travel_companion.domain.enums import TripRole, TripVisibility
from travel_companion.domain.exceptions import Forbidden
from travel_companion.domain.trip import Trip


class TripOperation(str, Enum):
    VIEW = "view"
    EDIT_ITINERARY = "edit_itinerary"
    EDIT_DETAILS = "edit_details"
    CHANGE_VISIBILITY = "change_visibility"
    MANAGE_MEMBERS = "manage_members"
    VIEW_COLLABORATORS = "view_collaborators"
    ARCHIVE = "archive"
    DELETE = "delete"
    LEAVE = "leave"


_ALL_ROLES = frozenset(TripRole)
_WRITERS = frozenset({TripRole.OWNER, TripRole.EDITOR})
_OWNERS = frozenset({TripRole.OWNER})

ALLOWED_ROLES: dict[TripOperation, frozenset[TripRole]] = {
    TripOperation.VIEW: _ALL_ROLES,
    TripOperation.EDIT_ITINERARY: _WRITERS,
    TripOperation.EDIT_DETAILS: _WRITERS,
    TripOperation.CHANGE_VISIBILITY: _OWNERS,
    TripOperation.MANAGE_MEMBERS: _OWNERS,
    TripOperation.VIEW_COLLABORATORS: _OWNERS,
    TripOperation.ARCHIVE: _OWNERS,
    TripOperation.DELETE: _OWNERS,
    TripOperation.LEAVE: _ALL_ROLES,
}


def is_allowed(role: Optional[TripRole], operation: TripOperation) -> bool:
    if role is None:
        return False
    return role in ALLOWED_ROLES[operation]


def can_perform(trip: Trip, user_id: Optional[str], operation: TripOperation) -> bool:
    if operation == TripOperation.VIEW and trip.visibility == TripVisibility.PUBLIC:
        return True
    return is_allowed(trip.role_of(user_id), operation)


def require_permission(trip: Trip, user_id: Optional[str], operation: TripOperation) -> None:
    if not can_perform(trip, user_id, operation):
        raise Forbidden(f"Not allowed to {operation.value.replace('_', ' ')} on this trip")


__all__ = [
    "ALLOWED_ROLES",
    "TripOperation",
    "can_perform",
    "is_allowed",
    "require_permission",
]
