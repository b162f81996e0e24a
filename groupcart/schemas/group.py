"""Pydantic schemas for Group model."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from groupcart.models.group import MemberRole
from groupcart.services.membership import LeaveOutcome


class GroupCreate(BaseModel):
    """Schema for creating a new group."""
    # Optional here so a missing name reaches the service and gets a 400
    name: Optional[str] = None
    description: Optional[str] = None


class GroupJoin(BaseModel):
    """Schema for joining a group via invite code."""
    invite_code: Optional[str] = None


class UserSummary(BaseModel):
    """Public fields of a user shown inside a group."""
    id: int
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class GroupMemberResponse(BaseModel):
    """Schema for group member information."""
    id: int
    email: str
    name: str
    role: MemberRole
    joined_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ShoppingListSummary(BaseModel):
    """Short form of a shopping list embedded in a group."""
    id: int
    name: str
    is_completed: bool

    model_config = ConfigDict(from_attributes=True)


class GroupResponse(BaseModel):
    """Group with its creator, members and shopping lists."""
    id: int
    name: str
    description: Optional[str]
    invite_code: str
    created_by: Optional[int]
    created_at: datetime
    updated_at: datetime
    creator: Optional[UserSummary]
    members: List[GroupMemberResponse]
    shopping_lists: List[ShoppingListSummary]
    member_count: int
    shopping_list_count: int


class LeaveResponse(BaseModel):
    """Acknowledgement returned after leaving a group."""
    message: str
    outcome: LeaveOutcome
