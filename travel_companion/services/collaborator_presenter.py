"""Membership and invite read model."""

from __future__ import annotations

from travel_companion.application.contracts import CollaboratorsView, InviteView, MembershipView
from travel_companion.domain.trip import Trip


def present_collaborators(trip: Trip) -> CollaboratorsView:
    return CollaboratorsView(
        memberships=[MembershipView(user_id=m.user_id, role=m.role) for m in trip.memberships],
        invites=[
            InviteView(email=invite.email, role=invite.role, status=invite.status)
            for invite in trip.invites
        ],
    )


__all__ = ["present_collaborators"]
