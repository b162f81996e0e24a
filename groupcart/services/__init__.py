"""
Group services layer.

Business rules for creating, joining and leaving groups live here so the
HTTP routes stay thin and the rules can be tested against a session directly.
"""

from .exceptions import (
    GroupCartError,
    InvalidInputError,
    GroupNotFoundError,
    InvalidInviteCodeError,
    NotMemberError,
    AccessDeniedError,
    AlreadyMemberError,
    InvariantViolationError,
    InviteCodeGenerationError,
)

from .groups import (
    create_group,
    join_group,
    list_user_groups,
    get_group_for_member,
    get_group_members,
    get_member_count,
    get_membership_role,
)

from .membership import (
    LeaveOutcome,
    MemberCandidate,
    leave_group,
    select_successor,
)


__all__ = [
    # Exceptions
    'GroupCartError',
    'InvalidInputError',
    'GroupNotFoundError',
    'InvalidInviteCodeError',
    'NotMemberError',
    'AccessDeniedError',
    'AlreadyMemberError',
    'InvariantViolationError',
    'InviteCodeGenerationError',

    # Group lifecycle
    'create_group',
    'join_group',
    'list_user_groups',
    'get_group_for_member',
    'get_group_members',
    'get_member_count',
    'get_membership_role',

    # Membership transitions
    'LeaveOutcome',
    'MemberCandidate',
    'leave_group',
    'select_successor',
]
