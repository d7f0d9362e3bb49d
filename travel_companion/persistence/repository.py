"""Repository interfaces and factories."""

from __future__ import annotations

from typing import Protocol

from travel_companion.config.settings import AppSettings, resolve_settings
from travel_companion.domain.models import User
from travel_companion.domain.trip import Trip
from travel_companion.persistence.memory_repository import InMemoryTripRepository, InMemoryUserRepository
from travel_companion.persistence.sqlite_repository import SQLiteTripRepository, SQLiteUserRepository


class TripRepository(Protocol):
    backend: str

    def save(self, trip: Trip) -> Trip: ...

    def find_by_id(self, trip_id: str) -> Trip | None: ...

    def find_by_user_id(self, user_id: str) -> list[Trip]: ...

    def find_by_invite_email(self, email: str) -> list[Trip]: ...

    def delete_by_id(self, trip_id: str) -> None: ...

    def exists_by_id_and_user_id(self, trip_id: str, user_id: str) -> bool: ...


class UserRepository(Protocol):
    backend: str

    def save(self, user: User) -> User: ...

    def find_by_id(self, user_id: str) -> User | None: ...

    def find_by_email(self, email: str) -> User | None: ...

    def exists_by_email(self, email: str) -> bool: ...


def get_trip_repository(settings: AppSettings | None = None) -> TripRepository:
    settings = settings or resolve_settings()
    if not settings.persistence_enabled:
        return InMemoryTripRepository()
    return SQLiteTripRepository(settings.persistence_db)


def get_user_repository(settings: AppSettings | None = None) -> UserRepository:
    settings = settings or resolve_settings()
    if not settings.persistence_enabled:
        return InMemoryUserRepository()
    return SQLiteUserRepository(settings.persistence_db)


__all__ = [
    "TripRepository",
    "UserRepository",
    "get_trip_repository",
    "get_user_repository",
]
