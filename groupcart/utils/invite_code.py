"""Invite code generation and normalization."""

import secrets
import string
from typing import Optional

from groupcart.config import settings

INVITE_CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_invite_code(length: Optional[int] = None) -> str:
    """
    Draw a random invite code from uppercase letters and digits.

    Codes come from the OS CSPRNG and carry no information about the group,
    so they cannot be guessed from its name or id. Uniqueness is not
    guaranteed here; callers retry against the unique index.

    Args:
        length: Number of characters (default: settings.INVITE_CODE_LENGTH)

    Example:
        >>> len(generate_invite_code(12))
        12
    """
    size = length or settings.INVITE_CODE_LENGTH
    return "".join(secrets.choice(INVITE_CODE_ALPHABET) for _ in range(size))


def normalize_invite_code(raw: Optional[str]) -> str:
    """Strip surrounding whitespace from user-entered invite codes."""
    return (raw or "").strip()
