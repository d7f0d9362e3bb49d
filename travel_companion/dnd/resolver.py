"""Turn a drag-and-drop gesture into an anchor-based move command.

The command uses the same vocabulary the placement engine accepts, so the
order the board previews on drop is the order the server produces.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from travel_companion.application.contracts import ItineraryView, MoveCommand
from travel_companion.dnd.containers import (
    Containers,
    build_containers,
    find_item_container_id,
    is_container_id,
    target_day_number,
)

OVER_ITEM = "item"
OVER_CONTAINER = "container"


@dataclass(frozen=True)
class DragMoveCommand:
    item_id: str
    payload: MoveCommand


def map_drop_to_move_command(
    *,
    item_id: str,
    target_container_id: str,
    target_index: int,
    containers: Containers,
) -> MoveCommand:
    """Anchor ``item_id`` at ``target_index`` of the target container.

    The index is read against the container with the dragged item removed,
    clamped to its bounds. The item at the index becomes ``before_item_id``;
    past the end, the last item becomes ``after_item_id``; an empty container
    yields no anchor at all.
    """
    day_number = target_day_number(target_container_id)
    siblings = [candidate for candidate in containers.get(target_container_id, []) if candidate != item_id]
    index = max(0, min(target_index, len(siblings)))

    if index < len(siblings):
        return MoveCommand(target_day_number=day_number, before_item_id=siblings[index])
    if index > 0:
        return MoveCommand(target_day_number=day_number, after_item_id=siblings[index - 1])
    return MoveCommand(target_day_number=day_number)


def resolve_move_from_drag(
    itinerary: ItineraryView,
    *,
    active_item_id: str,
    over_id: str,
    over_type: Optional[str] = None,
    over_container_id: Optional[str] = None,
) -> Optional[DragMoveCommand]:
    """Resolve a drop of ``active_item_id`` onto ``over_id``.

    ``over_type`` is ``"container"`` for a drop on a column surface and
    ``"item"`` for a drop on another card; when omitted, a container key
    counts as a surface drop. Returns ``None`` when the gesture
    cannot be resolved or would leave the item where it is.
    """
    containers = build_containers(itinerary)
    source_id = find_item_container_id(containers, active_item_id)
    if source_id is None:
        return None

    on_container = over_type == OVER_CONTAINER or (
        over_type != OVER_ITEM and over_id in containers and is_container_id(over_id)
    )
    if on_container:
        target_id = over_container_id or over_id
    else:
        target_id = over_container_id or find_item_container_id(containers, over_id)
    if target_id is None or target_id not in containers:
        return None

    source_items = containers[source_id]
    target_items = containers[target_id]
    active_index = source_items.index(active_item_id)

    if on_container:
        target_index = len(target_items)
    elif over_id in target_items:
        target_index = target_items.index(over_id)
    else:
        return None

    if source_id == target_id:
        remaining = len(target_items) - 1
        if min(target_index, remaining) == active_index:
            return None

    payload = map_drop_to_move_command(
        item_id=active_item_id,
        target_container_id=target_id,
        target_index=target_index,
        containers=containers,
    )
    return DragMoveCommand(item_id=active_item_id, payload=payload)


__all__ = [
    "DragMoveCommand",
    "OVER_CONTAINER",
    "OVER_ITEM",
    "map_drop_to_move_command",
    "resolve_move_from_drag",
]
