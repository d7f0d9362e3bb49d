"""SQLite implementation of the trip and user repositories.

Trips are written as a whole aggregate. Membership and invite rows are
reconciled against what is already stored: unchanged rows are left alone,
changed rows are updated in place, stale rows are deleted and new rows are
inserted. Invite row ids therefore survive saves that do not touch them.
"""

from __future__ import annotations

import json
import sqlite3
import threading
from pathlib import Path
from typing import Any, Iterable

from travel_companion.domain.models import User, normalize_email
from travel_companion.domain.trip import Trip
from travel_companion.persistence.models import (
    InviteRecord,
    MembershipRecord,
    TripRecord,
    UserRecord,
    trip_from_records,
    trip_to_records,
    user_from_record,
    user_to_record,
)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    user_id TEXT PRIMARY KEY,
    email TEXT NOT NULL UNIQUE,
    display_name TEXT NOT NULL,
    password_hash TEXT NOT NULL,
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS trips (
    trip_id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    name TEXT NOT NULL,
    start_date TEXT NOT NULL,
    end_date TEXT NOT NULL,
    visibility TEXT NOT NULL,
    status TEXT NOT NULL,
    itinerary_json TEXT NOT NULL,
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS trip_memberships (
    trip_id TEXT NOT NULL,
    user_id TEXT NOT NULL,
    role TEXT NOT NULL,
    position INTEGER NOT NULL,
    PRIMARY KEY (trip_id, user_id),
    FOREIGN KEY(trip_id) REFERENCES trips(trip_id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS trip_invites (
    invite_id INTEGER PRIMARY KEY AUTOINCREMENT,
    trip_id TEXT NOT NULL,
    email TEXT NOT NULL,
    role TEXT NOT NULL,
    status TEXT NOT NULL,
    created_at TEXT NOT NULL,
    UNIQUE (trip_id, email),
    FOREIGN KEY(trip_id) REFERENCES trips(trip_id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_trip_memberships_user_id ON trip_memberships(user_id);
CREATE INDEX IF NOT EXISTS idx_trip_invites_email ON trip_invites(email);
"""


def _to_json(payload: Any) -> str:
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"), default=str)


def _from_json(raw: str | None, default: Any) -> Any:
    if not raw:
        return default
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return default


def _placeholders(count: int) -> str:
    return ",".join("?" for _ in range(count))


class _SQLiteStore:
    def __init__(self, db_path: str | Path) -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self._init_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path, timeout=5.0)
        conn.execute("PRAGMA journal_mode=WAL;")
        conn.execute("PRAGMA foreign_keys=ON;")
        return conn

    def _init_schema(self) -> None:
        with self._lock, self._connect() as conn:
            conn.executescript(_SCHEMA)


class SQLiteTripRepository(_SQLiteStore):
    backend = "sqlite"

    def save(self, trip: Trip) -> Trip:
        record, memberships, invites = trip_to_records(trip)
        with self._lock, self._connect() as conn:
            conn.execute(
                """
                INSERT INTO trips (
                    trip_id, user_id, name, start_date, end_date,
                    visibility, status, itinerary_json, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(trip_id) DO UPDATE SET
                    user_id=excluded.user_id,
                    name=excluded.name,
                    start_date=excluded.start_date,
                    end_date=excluded.end_date,
                    visibility=excluded.visibility,
                    status=excluded.status,
                    itinerary_json=excluded.itinerary_json
                """,
                (
                    record.trip_id,
                    record.user_id,
                    record.name,
                    record.start_date,
                    record.end_date,
                    record.visibility,
                    record.status,
                    _to_json(record.itinerary),
                    record.created_at,
                ),
            )
            self._reconcile_memberships(conn, trip.id, memberships)
            self._reconcile_invites(conn, trip.id, invites)
        return trip

    def _reconcile_memberships(
        self,
        conn: sqlite3.Connection,
        trip_id: str,
        memberships: list[MembershipRecord],
    ) -> None:
        stored = {
            row[0]: (row[1], row[2])
            for row in conn.execute(
                "SELECT user_id, role, position FROM trip_memberships WHERE trip_id = ?",
                (trip_id,),
            ).fetchall()
        }
        wanted = {m.user_id: m for m in memberships}

        stale = [user_id for user_id in stored if user_id not in wanted]
        if stale:
            conn.execute(
                f"DELETE FROM trip_memberships WHERE trip_id = ? AND user_id IN ({_placeholders(len(stale))})",
                (trip_id, *stale),
            )
        for membership in memberships:
            current = stored.get(membership.user_id)
            if current is None:
                conn.execute(
                    "INSERT INTO trip_memberships (trip_id, user_id, role, position) VALUES (?, ?, ?, ?)",
                    (trip_id, membership.user_id, membership.role, membership.position),
                )
            elif current != (membership.role, membership.position):
                conn.execute(
                    "UPDATE trip_memberships SET role = ?, position = ? WHERE trip_id = ? AND user_id = ?",
                    (membership.role, membership.position, trip_id, membership.user_id),
                )

    def _reconcile_invites(
        self,
        conn: sqlite3.Connection,
        trip_id: str,
        invites: list[InviteRecord],
    ) -> None:
        stored = {
            row[0]: (row[1], row[2], row[3])
            for row in conn.execute(
                "SELECT email, role, status, created_at FROM trip_invites WHERE trip_id = ?",
                (trip_id,),
            ).fetchall()
        }
        wanted = {invite.email: invite for invite in invites}

        stale = [email for email in stored if email not in wanted]
        if stale:
            conn.execute(
                f"DELETE FROM trip_invites WHERE trip_id = ? AND email IN ({_placeholders(len(stale))})",
                (trip_id, *stale),
            )
        for invite in invites:
            current = stored.get(invite.email)
            if current is None:
                conn.execute(
                    """
                    INSERT INTO trip_invites (trip_id, email, role, status, created_at)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (trip_id, invite.email, invite.role, invite.status, invite.created_at),
                )
            elif current != (invite.role, invite.status, invite.created_at):
                conn.execute(
                    """
                    UPDATE trip_invites SET role = ?, status = ?, created_at = ?
                    WHERE trip_id = ? AND email = ?
                    """,
                    (invite.role, invite.status, invite.created_at, trip_id, invite.email),
                )

    def _hydrate(self, conn: sqlite3.Connection, trip_rows: list[tuple]) -> list[Trip]:
        if not trip_rows:
            return []
        trip_ids = [row[0] for row in trip_rows]
        marks = _placeholders(len(trip_ids))

        memberships: dict[str, list[MembershipRecord]] = {trip_id: [] for trip_id in trip_ids}
        for row in conn.execute(
            f"""
            SELECT trip_id, user_id, role, position
            FROM trip_memberships
            WHERE trip_id IN ({marks})
            ORDER BY position ASC
            """,
            trip_ids,
        ).fetchall():
            memberships[row[0]].append(
                MembershipRecord(trip_id=row[0], user_id=row[1], role=row[2], position=row[3])
            )

        invites: dict[str, list[InviteRecord]] = {trip_id: [] for trip_id in trip_ids}
        for row in conn.execute(
            f"""
            SELECT trip_id, email, role, status, created_at, invite_id
            FROM trip_invites
            WHERE trip_id IN ({marks})
            ORDER BY invite_id ASC
            """,
            trip_ids,
        ).fetchall():
            invites[row[0]].append(
                InviteRecord(
                    trip_id=row[0],
                    email=row[1],
                    role=row[2],
                    status=row[3],
                    created_at=row[4],
                    invite_id=row[5],
                )
            )

        trips: list[Trip] = []
        for row in trip_rows:
            record = TripRecord(
                trip_id=row[0],
                user_id=row[1],
                name=row[2],
                start_date=row[3],
                end_date=row[4],
                visibility=row[5],
                status=row[6],
                itinerary=_from_json(row[7], []),
                created_at=row[8],
            )
            trips.append(trip_from_records(record, memberships[record.trip_id], invites[record.trip_id]))
        return trips

    def _select_trips(self, conn: sqlite3.Connection, where: str, params: Iterable[Any]) -> list[tuple]:
        return conn.execute(
            f"""
            SELECT
                t.trip_id, t.user_id, t.name, t.start_date, t.end_date,
                t.visibility, t.status, t.itinerary_json, t.created_at
            FROM trips t
            {where}
            ORDER BY t.created_at DESC, t.rowid DESC
            """,
            tuple(params),
        ).fetchall()

    def find_by_id(self, trip_id: str) -> Trip | None:
        with self._lock, self._connect() as conn:
            rows = self._select_trips(conn, "WHERE t.trip_id = ?", (trip_id,))
            trips = self._hydrate(conn, rows)
        return trips[0] if trips else None

    def find_by_user_id(self, user_id: str) -> list[Trip]:
        with self._lock, self._connect() as conn:
            rows = self._select_trips(
                conn,
                "JOIN trip_memberships m ON m.trip_id = t.trip_id WHERE m.user_id = ?",
                (user_id,),
            )
            return self._hydrate(conn, rows)

    def find_by_invite_email(self, email: str) -> list[Trip]:
        with self._lock, self._connect() as conn:
            rows = self._select_trips(
                conn,
                "WHERE t.trip_id IN (SELECT trip_id FROM trip_invites WHERE email = ?)",
                (normalize_email(email),),
            )
            return self._hydrate(conn, rows)

    def delete_by_id(self, trip_id: str) -> None:
        with self._lock, self._connect() as conn:
            conn.execute("DELETE FROM trips WHERE trip_id = ?", (trip_id,))

    def exists_by_id_and_user_id(self, trip_id: str, user_id: str) -> bool:
        with self._lock, self._connect() as conn:
            row = conn.execute(
                "SELECT 1 FROM trip_memberships WHERE trip_id = ? AND user_id = ? LIMIT 1",
                (trip_id, user_id),
            ).fetchone()
        return row is not None

    def invite_ids(self, trip_id: str) -> dict[str, int]:
        """Stored row id per invite email; the ids are stable across saves."""
        with self._lock, self._connect() as conn:
            rows = conn.execute(
                "SELECT email, invite_id FROM trip_invites WHERE trip_id = ?",
                (trip_id,),
            ).fetchall()
        return {row[0]: row[1] for row in rows}


class SQLiteUserRepository(_SQLiteStore):
    backend = "sqlite"

    def save(self, user: User) -> User:
        record = user_to_record(user)
        with self._lock, self._connect() as conn:
            conn.execute(
                """
                INSERT INTO users (user_id, email, display_name, password_hash, created_at)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(user_id) DO UPDATE SET
                    email=excluded.email,
                    display_name=excluded.display_name,
                    password_hash=excluded.password_hash
                """,
                (
                    record.user_id,
                    record.email,
                    record.display_name,
                    record.password_hash,
                    record.created_at,
                ),
            )
        return user

    def _find_one(self, where: str, value: str) -> User | None:
        with self._lock, self._connect() as conn:
            row = conn.execute(
                f"""
                SELECT user_id, email, display_name, password_hash, created_at
                FROM users
                WHERE {where} = ?
                LIMIT 1
                """,
                (value,),
            ).fetchone()
        if row is None:
            return None
        return user_from_record(
            UserRecord(
                user_id=row[0],
                email=row[1],
                display_name=row[2],
                password_hash=row[3],
                created_at=row[4],
            )
        )

    def find_by_id(self, user_id: str) -> User | None:
        return self._find_one("user_id", user_id)

    def find_by_email(self, email: str) -> User | None:
        return self._find_one("email", normalize_email(email))

    def exists_by_email(self, email: str) -> bool:
        return self.find_by_email(email) is not None


__all__ = ["SQLiteTripRepository", "SQLiteUserRepository"]
