"""Service layer public exports."""

from travel_companion.services.collaborator_presenter import present_collaborators
from travel_companion.services.itinerary_presenter import present_item, present_itinerary
from travel_companion.services.trip_presenter import present_trip

__all__ = ["present_collaborators", "present_item", "present_itinerary", "present_trip"]
