"""Persistence package exports."""

from travel_companion.persistence.repository import (
    TripRepository,
    UserRepository,
    get_trip_repository,
    get_user_repository,
)

__all__ = ["TripRepository", "UserRepository", "get_trip_repository", "get_user_repository"]
