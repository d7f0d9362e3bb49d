import datetime as dt

from travel_companion.config.settings import AppSettings
from travel_companion.domain import membership
from travel_companion.domain.enums import TripRole, TripStatus, TripVisibility
from travel_companion.domain.models import User
from travel_companion.domain.trip import Trip
from travel_companion.persistence.memory_repository import InMemoryTripRepository
from travel_companion.persistence.repository import get_trip_repository, get_user_repository
from travel_companion.persistence.sqlite_repository import SQLiteTripRepository, SQLiteUserRepository

CREATED = dt.datetime(2026, 1, 1, 9, 0, tzinfo=dt.timezone.utc)


def _trip(trip_id: str = "trip-1", user_id: str = "owner", created_at: dt.datetime = CREATED) -> Trip:
    trip = Trip.create(
        user_id=user_id,
        name="Oslo",
        start_date=dt.date(2026, 2, 1),
        end_date=dt.date(2026, 2, 3),
        trip_id=trip_id,
        created_at=created_at,
    )
    trip = trip.add_itinerary_item_to_day("Opera", "", 59.9, 10.75, 2)
    return trip.add_itinerary_item_to_places_to_visit("Fjord", "boat", 59.8, 10.7)


def test_sqlite_roundtrip_keeps_aggregate(tmp_path):
    repo = SQLiteTripRepository(tmp_path / "trips.sqlite3")
    trip = membership.invite(_trip(), "owner", "guest@example.com", TripRole.VIEWER, now=CREATED)
    trip = trip.with_member_role("ed", TripRole.EDITOR).with_changes(visibility=TripVisibility.PUBLIC)

    repo.save(trip)
    loaded = repo.find_by_id("trip-1")

    assert loaded == trip
    assert repo.find_by_id("missing") is None


def test_invite_ids_are_stable_across_saves(tmp_path):
    repo = SQLiteTripRepository(tmp_path / "trips.sqlite3")
    trip = membership.invite(_trip(), "owner", "a@example.com", TripRole.VIEWER, now=CREATED)
    trip = membership.invite(trip, "owner", "b@example.com", TripRole.VIEWER, now=CREATED)
    repo.save(trip)
    original = repo.invite_ids("trip-1")

    # Unrelated edit, then a role change on one invite.
    repo.save(trip.add_itinerary_item_to_day("Museum", "", 59.9, 10.7, 1))
    assert repo.invite_ids("trip-1") == original

    changed = membership.change_invite_role(trip, "owner", "a@example.com", TripRole.EDITOR)
    repo.save(changed)
    assert repo.invite_ids("trip-1") == original
    assert repo.find_by_id("trip-1").invites[0].role == TripRole.EDITOR


def test_save_removes_stale_rows_and_adds_new_ones(tmp_path):
    repo = SQLiteTripRepository(tmp_path / "trips.sqlite3")
    trip = membership.invite(_trip(), "owner", "a@example.com", TripRole.VIEWER, now=CREATED)
    trip = membership.invite(trip, "owner", "b@example.com", TripRole.VIEWER, now=CREATED)
    trip = trip.with_member_role("ed", TripRole.EDITOR)
    repo.save(trip)
    kept_id = repo.invite_ids("trip-1")["b@example.com"]

    trip = membership.remove_pending_or_declined_invite(trip, "owner", "a@example.com")
    trip = membership.invite(trip, "owner", "c@example.com", TripRole.EDITOR, now=CREATED)
    trip = trip.remove_member("owner", "ed").with_member_role("vi", TripRole.VIEWER)
    repo.save(trip)

    ids = repo.invite_ids("trip-1")
    assert set(ids) == {"b@example.com", "c@example.com"}
    assert ids["b@example.com"] == kept_id
    loaded = repo.find_by_id("trip-1")
    assert [m.user_id for m in loaded.memberships] == ["owner", "vi"]
    assert repo.exists_by_id_and_user_id("trip-1", "vi")
    assert not repo.exists_by_id_and_user_id("trip-1", "ed")


def test_find_by_user_id_lists_member_trips_newest_first(tmp_path):
    repo = SQLiteTripRepository(tmp_path / "trips.sqlite3")
    older = _trip("older", created_at=CREATED).with_member_role("ed", TripRole.EDITOR)
    newer = _trip("newer", created_at=CREATED + dt.timedelta(days=1)).with_member_role("ed", TripRole.VIEWER)
    other = _trip("other", user_id="someone-else")
    for trip in (older, newer, other):
        repo.save(trip)

    trips = repo.find_by_user_id("ed")

    assert [trip.id for trip in trips] == ["newer", "older"]
    assert trips[0].role_of("ed") == TripRole.VIEWER
    assert [trip.id for trip in repo.find_by_user_id("owner")] == ["newer", "older"]


def test_find_by_invite_email_is_case_insensitive(tmp_path):
    repo = SQLiteTripRepository(tmp_path / "trips.sqlite3")
    repo.save(membership.invite(_trip("t1"), "owner", "mika@example.com", TripRole.VIEWER))
    repo.save(_trip("t2"))

    assert [trip.id for trip in repo.find_by_invite_email("MIKA@example.com ")] == ["t1"]


def test_delete_cascades(tmp_path):
    repo = SQLiteTripRepository(tmp_path / "trips.sqlite3")
    repo.save(membership.invite(_trip(), "owner", "a@example.com", TripRole.VIEWER))

    repo.delete_by_id("trip-1")

    assert repo.find_by_id("trip-1") is None
    assert repo.invite_ids("trip-1") == {}
    assert not repo.exists_by_id_and_user_id("trip-1", "owner")


def test_archived_status_persists(tmp_path):
    repo = SQLiteTripRepository(tmp_path / "trips.sqlite3")
    repo.save(_trip().archive())
    assert repo.find_by_id("trip-1").status == TripStatus.ARCHIVED


def test_user_repository(tmp_path):
    repo = SQLiteUserRepository(tmp_path / "trips.sqlite3")
    user = User(id="u1", email=" Mika@Example.com", display_name="Mika", password_hash="hash", created_at=CREATED)
    repo.save(user)

    assert repo.find_by_id("u1") == user
    assert repo.find_by_email("MIKA@example.com") == user
    assert repo.exists_by_email("mika@example.com")
    assert not repo.exists_by_email("nobody@example.com")
    assert repo.find_by_id("missing") is None


def test_repository_factory_follows_settings(tmp_path):
    disabled = AppSettings(persistence_enabled=False)
    assert isinstance(get_trip_repository(disabled), InMemoryTripRepository)
    assert get_user_repository(disabled).backend == "memory"

    enabled = AppSettings(persistence_enabled=True, persistence_db=tmp_path / "db" / "x.sqlite3")
    assert get_trip_repository(enabled).backend == "sqlite"
    assert (tmp_path / "db" / "x.sqlite3").exists()
