"""Membership and invite lifecycle rules.

Every function takes the current trip plus the acting user and returns the
next trip state. Authorization is a role lookup on the trip itself.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from travel_companion.domain.enums import InviteStatus, TripRole
from travel_companion.domain.exceptions import (
    Forbidden,
    InvariantViolation,
    NotFound,
    ValidationError,
)
from travel_companion.domain.models import TripInvite, normalize_email, utc_now
from travel_companion.domain.permissions import TripOperation, require_permission
from travel_companion.domain.trip import Trip

_ACTIVE_INVITE_STATUSES = frozenset({InviteStatus.PENDING, InviteStatus.ACCEPTED})
_REMOVABLE_INVITE_STATUSES = frozenset({InviteStatus.PENDING, InviteStatus.DECLINED})


def _find_invite(trip: Trip, email: str) -> Optional[TripInvite]:
    normalized = normalize_email(email)
    for invite in trip.invites:
        if invite.email == normalized:
            return invite
    return None


def _replace_invite(trip: Trip, email: str, replacement: Optional[TripInvite]) -> Trip:
    normalized = normalize_email(email)
    invites: list[TripInvite] = []
    for invite in trip.invites:
        if invite.email != normalized:
            invites.append(invite)
        elif replacement is not None:
            invites.append(replacement)
    return trip.with_changes(invites=tuple(invites))


def invite(
    trip: Trip,
    actor_id: str,
    email: str,
    role: TripRole,
    *,
    now: Optional[dt.datetime] = None,
) -> Trip:
    """Create a PENDING invite for ``email``.

    A DECLINED or REVOKED invite for the same address is replaced by a fresh
    PENDING one. A PENDING or ACCEPTED invite blocks a second invite.
    """
    require_permission(trip, actor_id, TripOperation.MANAGE_MEMBERS)
    normalized = normalize_email(email)
    if not normalized:
        raise ValidationError("Invite email cannot be blank")

    fresh = TripInvite(
        email=normalized,
        role=role,
        status=InviteStatus.PENDING,
        created_at=now or utc_now(),
    )
    existing = _find_invite(trip, normalized)
    if existing is None:
        return trip.with_changes(invites=(*trip.invites, fresh))
    if existing.status in _ACTIVE_INVITE_STATUSES:
        raise InvariantViolation(f"An active invite already exists for {normalized}")
    return _replace_invite(trip, normalized, fresh)


def respond_to_invite(trip: Trip, user_id: str, user_email: str, accept: bool) -> Trip:
    """Accept or decline the PENDING invite addressed to ``user_email``."""
    existing = _find_invite(trip, user_email)
    if existing is None or existing.status != InviteStatus.PENDING:
        raise NotFound("No pending invite for this user")

    status = InviteStatus.ACCEPTED if accept else InviteStatus.DECLINED
    updated = _replace_invite(trip, existing.email, existing.with_changes(status=status))
    if accept and not updated.is_member(user_id):
        updated = updated.with_member_role(user_id, existing.role)
    return updated


def accept_pending_invite_on_registration(trip: Trip, user_id: str, user_email: str) -> Trip:
    """Turn a PENDING invite for a newly registered account into a membership."""
    existing = _find_invite(trip, user_email)
    if existing is None or existing.status != InviteStatus.PENDING:
        return trip
    return respond_to_invite(trip, user_id, user_email, accept=True)


def remove_pending_or_declined_invite(trip: Trip, actor_id: str, email: str) -> Trip:
    require_permission(trip, actor_id, TripOperation.MANAGE_MEMBERS)
    existing = _find_invite(trip, email)
    if existing is None:
        raise NotFound("Invite not found")
    if existing.status not in _REMOVABLE_INVITE_STATUSES:
        raise ValidationError(f"Cannot remove an invite with status {existing.status.value}")
    return _replace_invite(trip, existing.email, None)


def _guard_owner_demotion(trip: Trip, actor_id: str, target_id: str, role: TripRole) -> None:
    if trip.role_of(target_id) != TripRole.OWNER or role == TripRole.OWNER:
        return
    if target_id != actor_id:
        raise Forbidden("Owners cannot change other owners roles")
    if len(trip.owner_ids()) == 1:
        raise InvariantViolation("Trip must have at least one owner")
    if target_id == trip.user_id:
        raise InvariantViolation("Primary owner must transfer ownership before stepping down")


def grant_role_to_registered_user(
    trip: Trip,
    actor_id: str,
    user_id: str,
    email: str,
    role: TripRole,
) -> Trip:
    """Invite an address that already belongs to an account.

    The account becomes a member with ``role`` right away, under the same
    owner rules as a role change. Any invite addressed to the email is
    marked REVOKED.
    """
    require_permission(trip, actor_id, TripOperation.MANAGE_MEMBERS)
    _guard_owner_demotion(trip, actor_id, user_id, role)
    updated = trip.with_member_role(user_id, role)
    existing = _find_invite(updated, email)
    if existing is not None:
        updated = _replace_invite(updated, existing.email, existing.with_changes(status=InviteStatus.REVOKED))
    return updated


def change_member_role(trip: Trip, actor_id: str, target_id: str, role: TripRole) -> Trip:
    require_permission(trip, actor_id, TripOperation.MANAGE_MEMBERS)
    current = trip.role_of(target_id)
    if current is None:
        raise NotFound("Target user is not a member")
    if current == TripRole.OWNER and target_id != actor_id:
        raise Forbidden("Owners cannot change other owners roles")
    _guard_owner_demotion(trip, actor_id, target_id, role)
    return trip.with_member_role(target_id, role)


def change_invite_role(trip: Trip, actor_id: str, email: str, role: TripRole) -> Trip:
    require_permission(trip, actor_id, TripOperation.MANAGE_MEMBERS)
    existing = _find_invite(trip, email)
    if existing is None or existing.status != InviteStatus.PENDING:
        raise NotFound("Pending invite not found")
    return _replace_invite(trip, existing.email, existing.with_changes(role=role))


def add_owner(trip: Trip, actor_id: str, target_id: str) -> Trip:
    return trip.add_owner(actor_id, target_id)


def remove_member(trip: Trip, actor_id: str, target_id: str) -> Trip:
    return trip.remove_member(actor_id, target_id)


def leave_trip(trip: Trip, member_id: str, successor_owner_id: Optional[str] = None) -> Trip:
    return trip.leave_trip(member_id, successor_owner_id)


__all__ = [
    "accept_pending_invite_on_registration",
    "add_owner",
    "change_invite_role",
    "change_member_role",
    "grant_role_to_registered_user",
    "invite",
    "leave_trip",
    "remove_member",
    "remove_pending_or_declined_invite",
    "respond_to_invite",
]
