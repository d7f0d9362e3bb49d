"""API routers."""

from travel_companion.api.routes.collaborators import router as collaborators_router
from travel_companion.api.routes.itinerary import router as itinerary_router
from travel_companion.api.routes.trips import router as trips_router

__all__ = ["collaborators_router", "itinerary_router", "trips_router"]
