"""Collaborator endpoints: members, owners and email invites."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from travel_companion.api.dependencies import current_user_id, get_ctx
from travel_companion.api.schemas import AddOwnerRequest, InviteRequest, RespondToInviteRequest, RoleRequest
from travel_companion.application import membership_service
from travel_companion.application.context import AppContext
from travel_companion.application.contracts import CollaboratorsView
from travel_companion.services.collaborator_presenter import present_collaborators

router = APIRouter(prefix="/trips/{trip_id}", tags=["collaborators"])


@router.get("/collaborators", response_model=CollaboratorsView)
def get_collaborators(
    trip_id: str,
    user_id: str = Depends(current_user_id),
    ctx: AppContext = Depends(get_ctx),
) -> CollaboratorsView:
    return present_collaborators(membership_service.get_collaborators(ctx=ctx, trip_id=trip_id, user_id=user_id))


@router.post("/owners", response_model=CollaboratorsView)
def add_owner(
    trip_id: str,
    body: AddOwnerRequest,
    user_id: str = Depends(current_user_id),
    ctx: AppContext = Depends(get_ctx),
) -> CollaboratorsView:
    trip = membership_service.add_owner(ctx=ctx, trip_id=trip_id, actor_id=user_id, target_id=body.user_id)
    return present_collaborators(trip)


@router.post("/invites", response_model=CollaboratorsView)
def invite_member(
    trip_id: str,
    body: InviteRequest,
    user_id: str = Depends(current_user_id),
    ctx: AppContext = Depends(get_ctx),
) -> CollaboratorsView:
    trip = membership_service.invite_member(
        ctx=ctx, trip_id=trip_id, actor_id=user_id, email=str(body.email), role=body.role
    )
    return present_collaborators(trip)


@router.post("/invites/respond", response_model=CollaboratorsView)
def respond_to_invite(
    trip_id: str,
    body: RespondToInviteRequest,
    user_id: str = Depends(current_user_id),
    ctx: AppContext = Depends(get_ctx),
) -> CollaboratorsView:
    trip = membership_service.respond_to_invite(ctx=ctx, trip_id=trip_id, user_id=user_id, accept=body.accept)
    return present_collaborators(trip)


@router.delete("/invites", response_model=CollaboratorsView)
def remove_invite(
    trip_id: str,
    email: str = Query(min_length=1),
    user_id: str = Depends(current_user_id),
    ctx: AppContext = Depends(get_ctx),
) -> CollaboratorsView:
    trip = membership_service.remove_pending_or_declined_invite(
        ctx=ctx, trip_id=trip_id, actor_id=user_id, email=email
    )
    return present_collaborators(trip)


@router.patch("/invites/role", response_model=CollaboratorsView)
def change_invite_role(
    trip_id: str,
    body: RoleRequest,
    email: str = Query(min_length=1),
    user_id: str = Depends(current_user_id),
    ctx: AppContext = Depends(get_ctx),
) -> CollaboratorsView:
    trip = membership_service.change_invite_role(
        ctx=ctx, trip_id=trip_id, actor_id=user_id, email=email, role=body.role
    )
    return present_collaborators(trip)


@router.patch("/members/{member_id}/role", response_model=CollaboratorsView)
def change_member_role(
    trip_id: str,
    member_id: str,
    body: RoleRequest,
    user_id: str = Depends(current_user_id),
    ctx: AppContext = Depends(get_ctx),
) -> CollaboratorsView:
    trip = membership_service.change_member_role(
        ctx=ctx, trip_id=trip_id, actor_id=user_id, target_id=member_id, role=body.role
    )
    return present_collaborators(trip)


# Declared before /members/{member_id} so "me" is not captured as an id.
@router.delete("/members/me", response_model=CollaboratorsView)
def leave_trip(
    trip_id: str,
    successor_owner_user_id: Optional[str] = Query(default=None, alias="successorOwnerUserId"),
    user_id: str = Depends(current_user_id),
    ctx: AppContext = Depends(get_ctx),
) -> CollaboratorsView:
    trip = membership_service.leave_trip(
        ctx=ctx, trip_id=trip_id, user_id=user_id, successor_owner_id=successor_owner_user_id
    )
    return present_collaborators(trip)


@router.delete("/members/{member_id}", response_model=CollaboratorsView)
def remove_member(
    trip_id: str,
    member_id: str,
    user_id: str = Depends(current_user_id),
    ctx: AppContext = Depends(get_ctx),
) -> CollaboratorsView:
    trip = membership_service.remove_member(ctx=ctx, trip_id=trip_id, actor_id=user_id, target_id=member_id)
    return present_collaborators(trip)


__all__ = ["router"]
