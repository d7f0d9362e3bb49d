"""In-memory repositories, used when persistence is disabled and in tests."""

from __future__ import annotations

import threading

from travel_companion.domain.models import User, normalize_email
from travel_companion.domain.trip import Trip


class InMemoryTripRepository:
    backend = "memory"

    def __init__(self) -> None:
        self._trips: dict[str, Trip] = {}
        self._lock = threading.Lock()

    def save(self, trip: Trip) -> Trip:
        with self._lock:
            self._trips[trip.id] = trip
        return trip

    def find_by_id(self, trip_id: str) -> Trip | None:
        with self._lock:
            return self._trips.get(trip_id)

    def _newest_first(self, trips: list[Trip]) -> list[Trip]:
        return sorted(trips, key=lambda trip: trip.created_at, reverse=True)

    def find_by_user_id(self, user_id: str) -> list[Trip]:
        with self._lock:
            matches = [trip for trip in self._trips.values() if trip.is_member(user_id)]
        return self._newest_first(matches)

    def find_by_invite_email(self, email: str) -> list[Trip]:
        normalized = normalize_email(email)
        with self._lock:
            matches = [
                trip
                for trip in self._trips.values()
                if any(invite.email == normalized for invite in trip.invites)
            ]
        return self._newest_first(matches)

    def delete_by_id(self, trip_id: str) -> None:
        with self._lock:
            self._trips.pop(trip_id, None)

    def exists_by_id_and_user_id(self, trip_id: str, user_id: str) -> bool:
        trip = self.find_by_id(trip_id)
        return trip is not None and trip.is_member(user_id)


class InMemoryUserRepository:
    backend = "memory"

    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        self._lock = threading.Lock()

    def save(self, user: User) -> User:
        with self._lock:
            self._users[user.id] = user
        return user

    def find_by_id(self, user_id: str) -> User | None:
        with self._lock:
            return self._users.get(user_id)

    def find_by_email(self, email: str) -> User | None:
        normalized = normalize_email(email)
        with self._lock:
            for user in self._users.values():
                if user.email == normalized:
                    return user
        return None

    def exists_by_email(self, email: str) -> bool:
        return self.find_by_email(email) is not None


__all__ = ["InMemoryTripRepository", "InMemoryUserRepository"]
