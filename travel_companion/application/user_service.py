"""Account registration use case.

Password hashing and token issuance belong to the auth collaborator; this
module only receives an already hashed password.
"""

from __future__ import annotations

from travel_companion.application.access import logged_operation
from travel_companion.application.context import AppContext
from travel_companion.application.membership_service import link_pending_invites_on_registration
from travel_companion.domain.exceptions import EmailAlreadyRegistered, ValidationError
from travel_companion.domain.models import User, normalize_email


def register_user(*, ctx: AppContext, email: str, display_name: str, password_hash: str) -> User:
    with logged_operation(ctx, "register_user"):
        normalized = normalize_email(email)
        if not display_name.strip():
            raise ValidationError("Display name cannot be blank")
        if ctx.user_repo.exists_by_email(normalized):
            raise EmailAlreadyRegistered("Email is already registered")

        user = ctx.user_repo.save(
            User(
                email=normalized,
                display_name=display_name.strip(),
                password_hash=password_hash,
                created_at=ctx.clock(),
            )
        )
        linked = link_pending_invites_on_registration(ctx=ctx, user=user)
        if ctx.logger is not None:
            ctx.logger.summary(operation="register_user", user_id=user.id, linked_trips=len(linked))
        return user


__all__ = ["register_user"]
