from datetime import datetime, timedelta

import pytest

from groupcart.models.group import MemberRole
from groupcart.services import InvariantViolationError, MemberCandidate, select_successor

T0 = datetime(2025, 1, 1, 12, 0, 0)


def candidate(user_id, role, minutes):
    return MemberCandidate(user_id, role.value, T0 + timedelta(minutes=minutes))


def test_admin_beats_earlier_member():
    early_member = candidate(2, MemberRole.MEMBER, 1)
    late_admin = candidate(3, MemberRole.ADMIN, 90)

    assert select_successor([early_member, late_admin]).user_id == 3


def test_earliest_member_wins_within_role():
    newer = candidate(4, MemberRole.MEMBER, 30)
    older = candidate(5, MemberRole.MEMBER, 10)

    assert select_successor([newer, older]).user_id == 5


def test_earliest_admin_wins_among_admins():
    candidates = [
        candidate(6, MemberRole.ADMIN, 50),
        candidate(7, MemberRole.ADMIN, 20),
        candidate(8, MemberRole.MEMBER, 0),
    ]

    assert select_successor(candidates).user_id == 7


def test_identical_join_time_breaks_tie_by_user_id():
    candidates = [
        candidate(12, MemberRole.MEMBER, 5),
        candidate(9, MemberRole.MEMBER, 5),
    ]

    assert select_successor(candidates).user_id == 9


def test_order_of_input_does_not_matter():
    candidates = [
        candidate(2, MemberRole.MEMBER, 1),
        candidate(3, MemberRole.ADMIN, 90),
        candidate(4, MemberRole.MEMBER, 0),
    ]

    assert select_successor(candidates) == select_successor(list(reversed(candidates)))


def test_no_candidates_is_an_invariant_violation():
    with pytest.raises(InvariantViolationError):
        select_successor([])
