"""Container ids for the itinerary board.

Each day column is ``day:<N>`` and the backlog is ``places``. A container maps
to the ordered ids of the items it currently renders.
"""

from __future__ import annotations

from typing import Optional

from travel_companion.application.contracts import ItineraryView

PLACES_CONTAINER_ID = "places"
_DAY_PREFIX = "day:"

Containers = dict[str, list[str]]


def day_container_id(day_number: int) -> str:
    return f"{_DAY_PREFIX}{day_number}"


def target_day_number(container_id: str) -> Optional[int]:
    """Day number for a day container; ``None`` for the backlog or a malformed id."""
    if not container_id.startswith(_DAY_PREFIX):
        return None
    raw = container_id[len(_DAY_PREFIX):]
    try:
        return int(raw, 10)
    except ValueError:
        return None


def is_container_id(container_id: str) -> bool:
    return container_id == PLACES_CONTAINER_ID or target_day_number(container_id) is not None


def build_containers(itinerary: ItineraryView) -> Containers:
    containers: Containers = {
        day_container_id(day.day_number): [item.id for item in day.items] for day in itinerary.days
    }
    containers[PLACES_CONTAINER_ID] = [item.id for item in itinerary.places_to_visit.items]
    return containers


def find_item_container_id(containers: Containers, item_id: str) -> Optional[str]:
    for container_id, item_ids in containers.items():
        if item_id in item_ids:
            return container_id
    return None


__all__ = [
    "Containers",
    "PLACES_CONTAINER_ID",
    "build_containers",
    "day_container_id",
    "find_item_container_id",
    "is_container_id",
    "target_day_number",
]
