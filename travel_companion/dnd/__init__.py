"""Drag-and-drop gesture mapping for the itinerary board."""

from travel_companion.dnd.containers import (
    PLACES_CONTAINER_ID,
    build_containers,
    day_container_id,
    find_item_container_id,
    target_day_number,
)
from travel_companion.dnd.resolver import DragMoveCommand, map_drop_to_move_command, resolve_move_from_drag

__all__ = [
    "DragMoveCommand",
    "PLACES_CONTAINER_ID",
    "build_containers",
    "day_container_id",
    "find_item_container_id",
    "map_drop_to_move_command",
    "resolve_move_from_drag",
    "target_day_number",
]
