import datetime as dt
import json

from travel_companion.cli import main
from travel_companion.domain.enums import TripRole
from travel_companion.domain.trip import Trip


def _seed(ctx) -> Trip:
    trip = Trip.create(
        user_id="owner",
        name="Lisbon",
        start_date=dt.date(2026, 6, 1),
        end_date=dt.date(2026, 6, 2),
        trip_id="trip-1",
    )
    trip = trip.add_itinerary_item_to_day("Belem", "pastries", 38.69, -9.2, 1)
    trip = trip.add_itinerary_item_to_day("Alfama", "", 38.71, -9.13, 1)
    return ctx.trip_repo.save(trip.with_member_role("vi", TripRole.VIEWER))


def test_itinerary_text_output(ctx, capsys):
    trip = _seed(ctx)
    belem, alfama = trip.itinerary_items

    assert main(["itinerary", "trip-1", "--user", "owner"], ctx=ctx) == 0

    out = capsys.readouterr().out.splitlines()
    assert out == [
        "Day 1 (2026-06-01)",
        f"  [{belem.id}] Belem  (pastries)",
        f"  [{alfama.id}] Alfama",
        "Day 2 (2026-06-02)",
        "  -",
        "Places To Visit",
        "  -",
    ]


def test_move_prints_json(ctx, capsys):
    trip = _seed(ctx)
    belem, alfama = trip.itinerary_items

    code = main(["move", "trip-1", alfama.id, "--user", "owner", "--day", "1", "--before", belem.id, "--json"], ctx=ctx)

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert [item["id"] for item in payload["days"][0]["items"]] == [alfama.id, belem.id]


def test_move_to_places_to_visit(ctx, capsys):
    trip = _seed(ctx)
    belem = trip.itinerary_items[0]

    assert main(["move", "trip-1", belem.id, "--user", "owner", "--json"], ctx=ctx) == 0

    payload = json.loads(capsys.readouterr().out)
    assert [item["placeName"] for item in payload["placesToVisit"]["items"]] == ["Belem"]


def test_domain_errors_exit_with_one(ctx, capsys):
    trip = _seed(ctx)

    code = main(["move", "trip-1", trip.itinerary_items[0].id, "--user", "vi", "--day", "2"], ctx=ctx)

    assert code == 1
    assert capsys.readouterr().err.startswith("Forbidden:")
    assert main(["itinerary", "missing", "--user", "owner"], ctx=ctx) == 1


def test_register_prints_user_id(ctx, capsys):
    assert main(["register", "new@example.com", "--name", "New", "--password-hash", "h"], ctx=ctx) == 0

    user_id = capsys.readouterr().out.strip()
    assert ctx.user_repo.find_by_id(user_id).email == "new@example.com"
