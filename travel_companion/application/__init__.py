"""Application layer exports."""

from travel_companion.application.context import AppContext, get_app_context, make_app_context

__all__ = ["AppContext", "get_app_context", "make_app_context"]
