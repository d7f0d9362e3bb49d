"""Domain package exports."""

from travel_companion.domain.enums import (
    InviteStatus,
    TripRole,
    TripStatus,
    TripStatusFilter,
    TripVisibility,
)
from travel_companion.domain.exceptions import (
    DomainError,
    EmailAlreadyRegistered,
    Forbidden,
    InvariantViolation,
    NotFound,
    ValidationError,
)
from travel_companion.domain.models import DayBucket, ItineraryItem, TripInvite, TripMembership, User
from travel_companion.domain.trip import Trip

__all__ = [
    "DayBucket",
    "DomainError",
    "EmailAlreadyRegistered",
    "Forbidden",
    "InvariantViolation",
    "InviteStatus",
    "ItineraryItem",
    "NotFound",
    "Trip",
    "TripInvite",
    "TripMembership",
    "TripRole",
    "TripStatus",
    "TripStatusFilter",
    "TripVisibility",
    "User",
    "ValidationError",
]
