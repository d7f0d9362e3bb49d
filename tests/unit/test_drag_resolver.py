import datetime as dt

from travel_companion.application.contracts import (
    DayView,
    ItineraryItemView,
    ItineraryView,
    MoveCommand,
    PlacesToVisitView,
)
from travel_companion.dnd.containers import build_containers, target_day_number
from travel_companion.dnd.resolver import (
    OVER_CONTAINER,
    OVER_ITEM,
    DragMoveCommand,
    map_drop_to_move_command,
    resolve_move_from_drag,
)

CONTAINERS = {
    "day:1": ["a", "b", "c"],
    "day:2": ["d"],
    "places": ["p1", "p2"],
}


def _view(item_id: str, day_number):
    return ItineraryItemView(id=item_id, place_name=item_id.upper(), latitude=0, longitude=0, day_number=day_number)


def _itinerary() -> ItineraryView:
    return ItineraryView(
        days=[
            DayView(day_number=1, date=dt.date(2026, 1, 1), items=[_view("a", 1), _view("b", 1)]),
            DayView(day_number=2, date=dt.date(2026, 1, 2), items=[_view("c", 2)]),
        ],
        places_to_visit=PlacesToVisitView(items=[_view("p1", None)]),
    )


def _payload(command: MoveCommand) -> dict:
    return command.model_dump(by_alias=True, exclude_none=True)


def test_target_day_number_parsing():
    assert target_day_number("day:3") == 3
    assert target_day_number("places") is None
    assert target_day_number("day:not-a-number") is None


def test_build_containers_from_read_model():
    assert build_containers(_itinerary()) == {"day:1": ["a", "b"], "day:2": ["c"], "places": ["p1"]}


def test_same_list_move_to_top_uses_before_anchor():
    payload = map_drop_to_move_command(item_id="b", target_container_id="day:1", target_index=0, containers=CONTAINERS)
    assert _payload(payload) == {"targetDayNumber": 1, "beforeItemId": "a"}


def test_same_list_move_to_middle():
    payload = map_drop_to_move_command(item_id="a", target_container_id="day:1", target_index=1, containers=CONTAINERS)
    assert _payload(payload) == {"targetDayNumber": 1, "beforeItemId": "c"}


def test_same_list_move_past_end_uses_after_anchor():
    payload = map_drop_to_move_command(item_id="a", target_container_id="day:1", target_index=99, containers=CONTAINERS)
    assert _payload(payload) == {"targetDayNumber": 1, "afterItemId": "c"}


def test_cross_list_move_into_day():
    payload = map_drop_to_move_command(item_id="p1", target_container_id="day:2", target_index=0, containers=CONTAINERS)
    assert _payload(payload) == {"targetDayNumber": 2, "beforeItemId": "d"}


def test_cross_list_move_into_places():
    payload = map_drop_to_move_command(item_id="a", target_container_id="places", target_index=1, containers=CONTAINERS)
    assert _payload(payload) == {"beforeItemId": "p2"}


def test_drop_into_empty_container_has_no_anchor():
    containers = {**CONTAINERS, "day:3": []}
    payload = map_drop_to_move_command(item_id="a", target_container_id="day:3", target_index=0, containers=containers)
    assert _payload(payload) == {"targetDayNumber": 3}


def test_drop_on_item_in_another_day():
    command = resolve_move_from_drag(
        _itinerary(), active_item_id="a", over_id="c", over_type="item", over_container_id="day:2"
    )
    assert command == DragMoveCommand(item_id="a", payload=MoveCommand(target_day_number=2, before_item_id="c"))


def test_drop_on_container_surface_appends():
    command = resolve_move_from_drag(
        _itinerary(), active_item_id="a", over_id="places", over_type="container", over_container_id="places"
    )
    assert command is not None
    assert command.item_id == "a"
    assert _payload(command.payload) == {"afterItemId": "p1"}


def test_container_id_without_type_is_treated_as_surface():
    command = resolve_move_from_drag(_itinerary(), active_item_id="c", over_id="day:1")
    assert command is not None
    assert _payload(command.payload) == {"targetDayNumber": 1, "afterItemId": "b"}


def test_drop_on_itself_is_a_no_op():
    command = resolve_move_from_drag(
        _itinerary(), active_item_id="a", over_id="a", over_type="item", over_container_id="day:1"
    )
    assert command is None


def test_drop_last_item_on_own_container_is_a_no_op():
    assert resolve_move_from_drag(_itinerary(), active_item_id="b", over_id="day:1", over_type="container") is None
    assert resolve_move_from_drag(_itinerary(), active_item_id="c", over_id="day:2", over_type="container") is None


def test_unresolvable_gestures_return_none():
    itinerary = _itinerary()
    assert resolve_move_from_drag(itinerary, active_item_id="zzz", over_id="a") is None
    assert resolve_move_from_drag(itinerary, active_item_id="a", over_id="zzz", over_type="item") is None
    assert resolve_move_from_drag(itinerary, active_item_id="a", over_id="day:9", over_type="container") is None


def test_same_day_reorder_downwards():
    command = resolve_move_from_drag(_itinerary(), active_item_id="a", over_id="b", over_type="item")
    assert command is not None
    assert _payload(command.payload) == {"targetDayNumber": 1, "afterItemId": "b"}


def test_item_typed_drop_never_falls_back_to_container_key():
    itinerary = _itinerary()
    assert resolve_move_from_drag(itinerary, active_item_id="c", over_id="day:1", over_type=OVER_ITEM) is None

    command = resolve_move_from_drag(itinerary, active_item_id="c", over_id="day:1", over_type=OVER_CONTAINER)
    assert command is not None
    assert _payload(command.payload) == {"targetDayNumber": 1, "afterItemId": "b"}
