"""Group management endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from groupcart.api.deps import get_current_user
from groupcart.database import get_db
from groupcart.models.group import Group
from groupcart.models.user import User
from groupcart.schemas.group import (
    GroupCreate,
    GroupJoin,
    GroupMemberResponse,
    GroupResponse,
    LeaveResponse,
    ShoppingListSummary,
    UserSummary,
)
from groupcart.services import (
    create_group as create_group_service,
    get_group_for_member,
    get_group_members,
    join_group as join_group_service,
    leave_group as leave_group_service,
    list_user_groups,
)

router = APIRouter()


def build_group_response(group: Group, db: Session) -> GroupResponse:
    """Project a group with its creator, members and lists for display."""
    members = [GroupMemberResponse.model_validate(m) for m in get_group_members(group.id, db)]
    shopping_lists = [ShoppingListSummary.model_validate(s) for s in group.shopping_lists]

    return GroupResponse(
        id=group.id,
        name=group.name,
        description=group.description,
        invite_code=group.invite_code,
        created_by=group.created_by,
        created_at=group.created_at,
        updated_at=group.updated_at,
        creator=UserSummary.model_validate(group.creator) if group.creator else None,
        members=members,
        shopping_lists=shopping_lists,
        member_count=len(members),
        shopping_list_count=len(shopping_lists),
    )


@router.post("", response_model=GroupResponse, status_code=status.HTTP_201_CREATED)
def create_group(
    group_data: GroupCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Create a new group.

    The authenticated user becomes the creator and sole ADMIN member.
    A unique invite code is generated for others to join.

    Raises:
        InvalidInputError: 400 if the name is blank
    """
    group = create_group_service(
        group_data.name,
        current_user.id,
        db,
        description=group_data.description,
    )
    return build_group_response(group, db)


@router.get("", response_model=List[GroupResponse])
def list_groups(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List all groups the current user is a member of."""
    return [build_group_response(g, db) for g in list_user_groups(current_user.id, db)]


@router.post("/join", response_model=GroupResponse, status_code=status.HTTP_200_OK)
def join_group(
    join_data: GroupJoin,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Join a group using an invite code.

    Raises:
        InvalidInputError: 400 if the code is blank
        InvalidInviteCodeError: 404 if no group has this code
        AlreadyMemberError: 409 if already a member
    """
    group = join_group_service(join_data.invite_code, current_user.id, db)
    return build_group_response(group, db)


@router.get("/{group_id}", response_model=GroupResponse)
def get_group(
    group_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Get details of a specific group.

    Raises:
        GroupNotFoundError: 404 if group not found
        AccessDeniedError: 403 if not a member
    """
    group = get_group_for_member(group_id, current_user.id, db)
    return build_group_response(group, db)


@router.get("/{group_id}/members", response_model=List[GroupMemberResponse])
def list_group_members(
    group_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List members of a group with their roles, longest-tenured first."""
    get_group_for_member(group_id, current_user.id, db)
    return get_group_members(group_id, db)


@router.delete("/{group_id}/leave", response_model=LeaveResponse)
def leave_group(
    group_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Leave a group (self-removal).

    The last member leaving deletes the group with its lists and items.
    A creator leaving hands the group to the next admin, or failing that
    the longest-standing member. Anyone else just loses their membership.

    Raises:
        NotMemberError: 404 if the group or the membership does not exist
    """
    outcome = leave_group_service(group_id, current_user.id, db)
    return LeaveResponse(message="Successfully left group", outcome=outcome)
