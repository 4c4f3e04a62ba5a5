"""
Group API endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from stockroom.dependencies import get_db, get_current_user
from stockroom.models import User
from stockroom.schemas.group import (
    GroupCreate,
    GroupCreatedResponse,
    GroupDetail,
    GroupList,
    GroupResponse,
    InviteCodeResponse,
    InvitePreview,
    JoinGroupRequest,
)
from stockroom.services import group_service

router = APIRouter()


@router.get("", response_model=GroupList)
def list_groups(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """List groups the caller owns or has joined."""
    return group_service.get_groups(db, current_user)


@router.post("", response_model=GroupCreatedResponse, status_code=201)
def create_group(
    group: GroupCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Create a new group owned by the caller."""
    return group_service.create_group(db, current_user, group)


@router.get("/invite/{invite_code}", response_model=InvitePreview)
def preview_invite(
    invite_code: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Show which group an invite code leads to."""
    return group_service.get_group_by_invite_code(db, invite_code)


@router.post("/join", response_model=GroupResponse)
def join_group(
    request: JoinGroupRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Join a group with an invite code."""
    return group_service.join_group(db, current_user, request.invite_code)


@router.get("/{group_id}", response_model=GroupDetail)
def get_group(
    group_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get group detail with members and categories."""
    return group_service.get_group(db, current_user, group_id)


@router.delete("/{group_id}", status_code=204)
def delete_group(
    group_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Delete a group (owner only)."""
    group_service.delete_group(db, current_user, group_id)
    return None


@router.post("/{group_id}/leave", status_code=204)
def leave_group(
    group_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Leave a group the caller has joined."""
    group_service.leave_group(db, current_user, group_id)
    return None


@router.delete("/{group_id}/members/{member_id}", status_code=204)
def remove_member(
    group_id: str,
    member_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Remove a member from a group (owner only)."""
    group_service.remove_member(db, current_user, group_id, member_id)
    return None


@router.post("/{group_id}/invite-code", response_model=InviteCodeResponse)
def regenerate_invite_code(
    group_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Issue a new invite code, invalidating the old one."""
    code = group_service.regenerate_invite_code(db, current_user, group_id)
    return InviteCodeResponse(invite_code=code)
