"""Collaborator management use cases."""

from __future__ import annotations

from typing import Optional

from travel_companion.application.access import commit, load_trip, logged_operation
from travel_companion.application.context import AppContext
from travel_companion.domain import membership
from travel_companion.domain.enums import TripRole
from travel_companion.domain.exceptions import NotFound
from travel_companion.domain.models import User
from travel_companion.domain.permissions import TripOperation
from travel_companion.domain.trip import Trip


def add_owner(*, ctx: AppContext, trip_id: str, actor_id: str, target_id: str) -> Trip:
    with logged_operation(ctx, "add_owner", trip_id=trip_id):
        trip = load_trip(ctx, trip_id, actor_id)
        updated = membership.add_owner(trip, actor_id, target_id)
        return commit(ctx, "add_owner", updated, actor_id=actor_id, target_id=target_id)


def remove_member(*, ctx: AppContext, trip_id: str, actor_id: str, target_id: str) -> Trip:
    with logged_operation(ctx, "remove_member", trip_id=trip_id):
        trip = load_trip(ctx, trip_id, actor_id)
        updated = membership.remove_member(trip, actor_id, target_id)
        return commit(ctx, "remove_member", updated, actor_id=actor_id, target_id=target_id)


def leave_trip(
    *,
    ctx: AppContext,
    trip_id: str,
    user_id: str,
    successor_owner_id: Optional[str] = None,
) -> Trip:
    with logged_operation(ctx, "leave_trip", trip_id=trip_id):
        trip = load_trip(ctx, trip_id, user_id, TripOperation.LEAVE)
        updated = membership.leave_trip(trip, user_id, successor_owner_id)
        return commit(ctx, "leave_trip", updated, actor_id=user_id, successor_owner_id=successor_owner_id)


def invite_member(*, ctx: AppContext, trip_id: str, actor_id: str, email: str, role: TripRole) -> Trip:
    """Invite ``email`` to the trip.

    An address that already has an account is granted the role directly and
    its outstanding invite is revoked; any other address gets a PENDING invite.
    """
    with logged_operation(ctx, "invite_member", trip_id=trip_id):
        trip = load_trip(ctx, trip_id, actor_id)
        user = ctx.user_repo.find_by_email(email)
        if user is not None:
            updated = membership.grant_role_to_registered_user(trip, actor_id, user.id, user.email, role)
            return commit(
                ctx, "grant_member_role", updated, actor_id=actor_id, target_id=user.id, role=role.value
            )
        updated = membership.invite(trip, actor_id, email, role, now=ctx.clock())
        return commit(ctx, "invite_member", updated, actor_id=actor_id, email=email, role=role.value)


def respond_to_invite(*, ctx: AppContext, trip_id: str, user_id: str, accept: bool) -> Trip:
    """Accept or decline the caller's pending invite.

    The invitee is usually not a member yet, so the trip is looked up without
    the view check; a caller with no pending invite gets ``NotFound``.
    """
    with logged_operation(ctx, "respond_to_invite", trip_id=trip_id):
        trip = ctx.trip_repo.find_by_id(trip_id)
        user = ctx.user_repo.find_by_id(user_id)
        if trip is None or user is None:
            raise NotFound("Trip not found")
        updated = membership.respond_to_invite(trip, user.id, user.email, accept)
        return commit(ctx, "respond_to_invite", updated, actor_id=user_id, accepted=accept)


def remove_pending_or_declined_invite(*, ctx: AppContext, trip_id: str, actor_id: str, email: str) -> Trip:
    with logged_operation(ctx, "remove_invite", trip_id=trip_id):
        trip = load_trip(ctx, trip_id, actor_id)
        updated = membership.remove_pending_or_declined_invite(trip, actor_id, email)
        return commit(ctx, "remove_invite", updated, actor_id=actor_id, email=email)


def change_member_role(
    *,
    ctx: AppContext,
    trip_id: str,
    actor_id: str,
    target_id: str,
    role: TripRole,
) -> Trip:
    with logged_operation(ctx, "change_member_role", trip_id=trip_id):
        trip = load_trip(ctx, trip_id, actor_id)
        updated = membership.change_member_role(trip, actor_id, target_id, role)
        return commit(ctx, "change_member_role", updated, actor_id=actor_id, target_id=target_id, role=role.value)


def change_invite_role(*, ctx: AppContext, trip_id: str, actor_id: str, email: str, role: TripRole) -> Trip:
    with logged_operation(ctx, "change_invite_role", trip_id=trip_id):
        trip = load_trip(ctx, trip_id, actor_id)
        updated = membership.change_invite_role(trip, actor_id, email, role)
        return commit(ctx, "change_invite_role", updated, actor_id=actor_id, email=email, role=role.value)


def get_collaborators(*, ctx: AppContext, trip_id: str, user_id: str) -> Trip:
    return load_trip(ctx, trip_id, user_id, TripOperation.VIEW_COLLABORATORS)


def link_pending_invites_on_registration(*, ctx: AppContext, user: User) -> list[Trip]:
    """Activate every PENDING invite addressed to a newly registered account."""
    linked: list[Trip] = []
    for trip in ctx.trip_repo.find_by_invite_email(user.email):
        updated = membership.accept_pending_invite_on_registration(trip, user.id, user.email)
        if updated is trip:
            continue
        linked.append(commit(ctx, "link_invite_on_registration", updated, actor_id=user.id))
    return linked


__all__ = [
    "add_owner",
    "change_invite_role",
    "change_member_role",
    "get_collaborators",
    "invite_member",
    "leave_trip",
    "link_pending_invites_on_registration",
    "remove_member",
    "remove_pending_or_declined_invite",
    "respond_to_invite",
]
