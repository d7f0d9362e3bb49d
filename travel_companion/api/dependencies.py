"""Request-scoped dependencies.

The caller's identity arrives in the ``X-User-Id`` header, set by the auth
gateway in front of this service.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Header, HTTPException

from travel_companion.application.context import AppContext, get_app_context


def get_ctx() -> AppContext:
    return get_app_context()


def optional_user_id(x_user_id: Optional[str] = Header(default=None)) -> Optional[str]:
    if x_user_id is None or not x_user_id.strip():
        return None
    return x_user_id.strip()


def current_user_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    user_id = optional_user_id(x_user_id)
    if user_id is None:
        raise HTTPException(status_code=401, detail="Authentication required")
    return user_id


__all__ = ["current_user_id", "get_ctx", "optional_user_id"]
