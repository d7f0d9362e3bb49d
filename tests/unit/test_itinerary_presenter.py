import datetime as dt

from travel_companion.domain.enums import InviteStatus, TripRole
from travel_companion.domain.models import TripInvite
from travel_companion.domain.trip import Trip
from travel_companion.services.collaborator_presenter import present_collaborators
from travel_companion.services.itinerary_presenter import present_itinerary
from travel_companion.services.trip_presenter import present_trip


def _trip() -> Trip:
    trip = Trip.create(
        user_id="owner",
        name="Rome",
        start_date=dt.date(2026, 5, 1),
        end_date=dt.date(2026, 5, 2),
        trip_id="trip-1",
    )
    trip = trip.add_itinerary_item_to_day("Colosseum", "tickets", 41.89, 12.49, 1)
    trip = trip.add_itinerary_item_to_places_to_visit("Trastevere", "", 41.88, 12.47)
    return trip.add_itinerary_item_to_day("Pantheon", "", 41.9, 12.48, 1)


def test_itinerary_read_model_wire_shape():
    trip = _trip()
    payload = present_itinerary(trip).model_dump(mode="json", by_alias=True)

    colosseum, trastevere, pantheon = trip.itinerary_items
    assert payload == {
        "days": [
            {
                "dayNumber": 1,
                "date": "2026-05-01",
                "items": [
                    {
                        "id": colosseum.id,
                        "placeName": "Colosseum",
                        "notes": "tickets",
                        "latitude": 41.89,
                        "longitude": 12.49,
                        "dayNumber": 1,
                    },
                    {
                        "id": pantheon.id,
                        "placeName": "Pantheon",
                        "notes": "",
                        "latitude": 41.9,
                        "longitude": 12.48,
                        "dayNumber": 1,
                    },
                ],
            },
            {"dayNumber": 2, "date": "2026-05-02", "items": []},
        ],
        "placesToVisit": {
            "label": "Places To Visit",
            "items": [
                {
                    "id": trastevere.id,
                    "placeName": "Trastevere",
                    "notes": "",
                    "latitude": 41.88,
                    "longitude": 12.47,
                    "dayNumber": None,
                }
            ],
        },
    }


def test_collaborators_read_model():
    trip = _trip().with_member_role("ed", TripRole.EDITOR)
    trip = trip.with_changes(invites=(TripInvite(email="a@example.com", role=TripRole.VIEWER),))

    payload = present_collaborators(trip).model_dump(mode="json", by_alias=True)

    assert payload == {
        "memberships": [{"userId": "owner", "role": "OWNER"}, {"userId": "ed", "role": "EDITOR"}],
        "invites": [{"email": "a@example.com", "role": "VIEWER", "status": InviteStatus.PENDING.value}],
    }


def test_trip_summary_includes_viewer_role():
    trip = _trip()
    assert present_trip(trip, "owner").role == TripRole.OWNER
    assert present_trip(trip, None).role is None
    payload = present_trip(trip).model_dump(mode="json", by_alias=True)
    assert payload["startDate"] == "2026-05-01"
    assert payload["userId"] == "owner"
    assert payload["status"] == "ACTIVE"
