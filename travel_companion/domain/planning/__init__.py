"""Itinerary planning algorithms."""

from travel_companion.domain.planning.placement import move_itinerary_item

__all__ = ["move_itinerary_item"]
