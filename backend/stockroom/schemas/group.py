"""
Group Pydantic schemas for API validation.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, List

from stockroom.schemas.user import UserSummary


class GroupCreate(BaseModel):
    """Schema for creating a group."""
    name: str = Field(..., min_length=1, max_length=50)


class JoinGroupRequest(BaseModel):
    """Schema for joining a group through an invite code."""
    invite_code: str = Field(..., min_length=1)


class GroupResponse(BaseModel):
    """Schema for a freshly created or joined group."""
    id: str
    name: str
    owner_id: str
    created_at: datetime

    class Config:
        from_attributes = True


class GroupCreatedResponse(GroupResponse):
    """The creator is the owner, so the invite code is returned."""
    invite_code: str


class GroupSummary(BaseModel):
    """One row of the caller's group list."""
    id: str
    name: str
    invite_code: Optional[str] = None
    is_owner: bool
    owner_name: Optional[str] = None
    member_count: int


class GroupList(BaseModel):
    """Groups the caller owns and groups the caller joined."""
    owned: List[GroupSummary]
    joined: List[GroupSummary]


class GroupMemberResponse(BaseModel):
    id: str
    user: UserSummary
    created_at: datetime

    class Config:
        from_attributes = True


class GroupCategorySummary(BaseModel):
    id: str
    name: str
    color: Optional[str] = None
    sort_order: int
    item_count: int


class GroupDetail(BaseModel):
    """Full group view. invite_code is only filled in for the owner."""
    id: str
    name: str
    invite_code: Optional[str] = None
    is_owner: bool
    owner: UserSummary
    members: List[GroupMemberResponse]
    categories: List[GroupCategorySummary]


class InvitePreview(BaseModel):
    """What a prospective member sees before joining."""
    id: str
    name: str
    owner_name: str
    member_count: int


class InviteCodeResponse(BaseModel):
    invite_code: str
