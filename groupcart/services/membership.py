"""
Membership transitions triggered when a member leaves a group.

A leave ends in one of three ways:

* the group is deleted, when the leaver is its last member;
* ownership is transferred, when the creator leaves a group that still has
  other members (or the stored creator is no longer among them);
* the leaver's membership row is removed and nothing else changes.

Every write of a leave happens in one transaction. Any failure rolls the
whole leave back, so the group is never observed with a creator who is not
a member.
"""

import enum
import logging
from datetime import datetime
from typing import List, NamedTuple, Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from groupcart.database import acquire_write_lock
from groupcart.models.group import Group, MemberRole, group_members
from groupcart.services.exceptions import InvariantViolationError, NotMemberError
from groupcart.services.groups import get_member_count, get_membership_role

logger = logging.getLogger(__name__)


class LeaveOutcome(str, enum.Enum):
    """What a leave request did to the group."""

    GROUP_DELETED = "GROUP_DELETED"
    OWNERSHIP_TRANSFERRED = "OWNERSHIP_TRANSFERRED"
    MEMBER_REMOVED = "MEMBER_REMOVED"


class MemberCandidate(NamedTuple):
    """A remaining member considered for ownership."""

    user_id: int
    role: str
    joined_at: datetime


def _succession_key(candidate: MemberCandidate):
    # Admins first, then longest tenure; user id keeps exact ties deterministic
    is_admin = candidate.role == MemberRole.ADMIN.value
    return (0 if is_admin else 1, candidate.joined_at, candidate.user_id)


def select_successor(candidates: Sequence[MemberCandidate]) -> MemberCandidate:
    """
    Pick who takes over a group from its departing creator.

    An ADMIN always wins over a MEMBER regardless of join order. Within the
    same role the earliest ``joined_at`` wins.

    Raises:
        InvariantViolationError: if there is nobody to hand the group to
    """
    if not candidates:
        raise InvariantViolationError("No remaining member to transfer ownership to")
    return min(candidates, key=_succession_key)


def _remaining_members(group_id: int, leaving_user_id: int, db: Session) -> List[MemberCandidate]:
    rows = db.execute(
        select(
            group_members.c.user_id,
            group_members.c.role,
            group_members.c.joined_at,
        ).where(
            group_members.c.group_id == group_id,
            group_members.c.user_id != leaving_user_id
        )
    ).all()
    return [MemberCandidate(row.user_id, row.role, row.joined_at) for row in rows]


def _transfer_ownership(group: Group, successor_id: int, db: Session) -> None:
    group.created_by = successor_id
    db.execute(
        update(group_members)
        .where(
            group_members.c.group_id == group.id,
            group_members.c.user_id == successor_id
        )
        .values(role=MemberRole.ADMIN.value)
    )
    db.flush()


def _remove_membership(group_id: int, user_id: int, db: Session) -> None:
    db.execute(
        delete(group_members).where(
            group_members.c.group_id == group_id,
            group_members.c.user_id == user_id
        )
    )


def leave_group(group_id: int, user_id: int, db: Session) -> LeaveOutcome:
    """
    Remove ``user_id`` from a group, deleting or re-owning the group as needed.

    Args:
        group_id: ID of the group to leave
        user_id: Authenticated user leaving the group
        db: Database session

    Returns:
        Which transition was applied

    Raises:
        NotMemberError: if the group does not exist or the user is not in it
        InvariantViolationError: if a transfer is needed but nobody remains
    """
    # Every read below must still hold when the writes commit
    acquire_write_lock(db)
    group = db.execute(
        select(Group).where(Group.id == group_id).with_for_update()
    ).scalar_one_or_none()

    if group is None or get_membership_role(group_id, user_id, db) is None:
        db.rollback()
        raise NotMemberError("You are not a member of this group")

    is_creator = group.created_by == user_id
    is_only_member = get_member_count(group_id, db) == 1

    try:
        if is_only_member:
            # A group is never kept without members, whoever the creator was
            db.delete(group)
            outcome = LeaveOutcome.GROUP_DELETED
        else:
            remaining = _remaining_members(group_id, user_id, db)
            creator_remains = any(m.user_id == group.created_by for m in remaining)

            if is_creator or not creator_remains:
                successor = select_successor(remaining)
                _transfer_ownership(group, successor.user_id, db)
                outcome = LeaveOutcome.OWNERSHIP_TRANSFERRED
            else:
                outcome = LeaveOutcome.MEMBER_REMOVED

            _remove_membership(group_id, user_id, db)

        db.commit()
    except Exception:
        db.rollback()
        logger.warning("Rolled back leave of user %s from group %s", user_id, group_id)
        raise

    if outcome is LeaveOutcome.OWNERSHIP_TRANSFERRED:
        logger.info(
            "User %s left group %s; ownership passed to user %s",
            user_id, group_id, successor.user_id
        )
    else:
        logger.info("User %s left group %s (%s)", user_id, group_id, outcome.value)

    return outcome
