"""
Group lifecycle: creation, invite-code joins and membership lookups.

All functions take the acting user's id explicitly and commit their own
transaction. Failures are reported with the exceptions in
groupcart.services.exceptions.
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import func, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from groupcart.config import settings
from groupcart.database import acquire_write_lock
from groupcart.models.group import Group, MemberRole, group_members
from groupcart.models.user import User
from groupcart.services.exceptions import (
    AccessDeniedError,
    AlreadyMemberError,
    GroupNotFoundError,
    InvalidInputError,
    InvalidInviteCodeError,
    InviteCodeGenerationError,
)
from groupcart.utils.invite_code import generate_invite_code, normalize_invite_code

logger = logging.getLogger(__name__)


def get_member_count(group_id: int, db: Session) -> int:
    """Get the number of members in a group."""
    count = db.execute(
        select(func.count()).select_from(group_members).where(
            group_members.c.group_id == group_id
        )
    ).scalar()
    return count or 0


def get_membership_role(group_id: int, user_id: int, db: Session) -> Optional[str]:
    """Return the user's role in the group, or None if they are not a member."""
    return db.execute(
        select(group_members.c.role).where(
            group_members.c.group_id == group_id,
            group_members.c.user_id == user_id
        )
    ).scalar()


def get_group_for_member(group_id: int, user_id: int, db: Session) -> Group:
    """
    Fetch a group on behalf of one of its members.

    Raises:
        GroupNotFoundError: if the group does not exist
        AccessDeniedError: if the user is not a member
    """
    group = db.get(Group, group_id)
    if group is None:
        raise GroupNotFoundError("Group not found")

    if get_membership_role(group_id, user_id, db) is None:
        raise AccessDeniedError("You are not a member of this group")

    return group


def get_group_members(group_id: int, db: Session) -> list:
    """Members of a group with their role and join date, longest-tenured first."""
    return db.execute(
        select(
            User.id,
            User.email,
            User.name,
            group_members.c.role,
            group_members.c.joined_at,
        )
        .join(group_members, User.id == group_members.c.user_id)
        .where(group_members.c.group_id == group_id)
        .order_by(group_members.c.joined_at.asc(), User.id.asc())
    ).all()


def list_user_groups(user_id: int, db: Session) -> List[Group]:
    """Groups the user belongs to, most recently updated first."""
    return list(
        db.execute(
            select(Group)
            .join(group_members, Group.id == group_members.c.group_id)
            .where(group_members.c.user_id == user_id)
            .order_by(Group.updated_at.desc(), Group.id.desc())
        ).scalars().all()
    )


def _invite_code_taken(invite_code: str, db: Session) -> bool:
    return db.execute(
        select(Group.id).where(Group.invite_code == invite_code)
    ).first() is not None


def create_group(
    name: Optional[str],
    creator_id: int,
    db: Session,
    description: Optional[str] = None,
) -> Group:
    """
    Create a group owned by ``creator_id``.

    The creator becomes the only member, with the ADMIN role, in the same
    transaction that inserts the group. Invite codes are retried on
    collision, first against a lookup and then against the unique index.

    Raises:
        InvalidInputError: if the name is blank
        InviteCodeGenerationError: if every attempt collided
    """
    name = (name or "").strip()
    if not name:
        raise InvalidInputError("Group name is required")
    description = (description or "").strip() or None

    max_attempts = settings.INVITE_CODE_MAX_ATTEMPTS
    for attempt in range(1, max_attempts + 1):
        invite_code = generate_invite_code()

        if _invite_code_taken(invite_code, db):
            logger.warning("Invite code collision (attempt %d/%d)", attempt, max_attempts)
            continue

        group = Group(
            name=name,
            description=description,
            invite_code=invite_code,
            created_by=creator_id,
        )
        db.add(group)
        try:
            db.flush()
        except IntegrityError:
            db.rollback()
            # Only a code claimed between lookup and insert is worth retrying
            if not _invite_code_taken(invite_code, db):
                raise
            logger.warning("Invite code taken concurrently (attempt %d/%d)", attempt, max_attempts)
            continue

        db.execute(
            insert(group_members).values(
                user_id=creator_id,
                group_id=group.id,
                joined_at=datetime.utcnow(),
                role=MemberRole.ADMIN.value,
            )
        )
        db.commit()
        db.refresh(group)

        logger.info("User %s created group %s", creator_id, group.id)
        return group

    raise InviteCodeGenerationError("Failed to generate unique invite code")


def join_group(invite_code: Optional[str], user_id: int, db: Session) -> Group:
    """
    Add ``user_id`` to the group identified by ``invite_code`` as a MEMBER.

    Raises:
        InvalidInputError: if the code is blank
        InvalidInviteCodeError: if no group has this code
        AlreadyMemberError: if the user already belongs to the group
    """
    code = normalize_invite_code(invite_code)
    if not code:
        raise InvalidInputError("Invite code is required")

    # Lock so a concurrent leave cannot delete the group mid-join
    acquire_write_lock(db)
    group = db.execute(
        select(Group).where(Group.invite_code == code).with_for_update()
    ).scalar_one_or_none()

    if group is None:
        db.rollback()
        raise InvalidInviteCodeError("Invalid invite code")

    if get_membership_role(group.id, user_id, db) is not None:
        db.rollback()
        raise AlreadyMemberError("You are already a member of this group")

    try:
        db.execute(
            insert(group_members).values(
                user_id=user_id,
                group_id=group.id,
                joined_at=datetime.utcnow(),
                role=MemberRole.MEMBER.value,
            )
        )
        db.commit()
    except IntegrityError:
        # Composite primary key caught a concurrent duplicate join
        db.rollback()
        raise AlreadyMemberError("You are already a member of this group")

    db.refresh(group)

    logger.info("User %s joined group %s", user_id, group.id)
    return group
