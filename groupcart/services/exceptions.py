"""
Domain exceptions for group lifecycle and membership transitions.

Each exception carries the HTTP status the API reports for it. Handlers in
groupcart.main turn them into JSON responses; the services never build
HTTP responses themselves.
"""

from fastapi import status


class GroupCartError(Exception):
    """Base exception for all group service errors."""

    status_code = status.HTTP_400_BAD_REQUEST
    # Internal errors are logged and reported without their message
    internal = False

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class InvalidInputError(GroupCartError):
    """Raised when a required field is missing or blank."""

    status_code = status.HTTP_400_BAD_REQUEST


class GroupNotFoundError(GroupCartError):
    """Raised when a group does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class InvalidInviteCodeError(GroupCartError):
    """Raised when an invite code matches no group."""

    status_code = status.HTTP_404_NOT_FOUND


class NotMemberError(GroupCartError):
    """Raised when a leave request comes from someone who is not a member."""

    status_code = status.HTTP_404_NOT_FOUND


class AccessDeniedError(GroupCartError):
    """Raised when a non-member tries to read a group's data."""

    status_code = status.HTTP_403_FORBIDDEN


class AlreadyMemberError(GroupCartError):
    """Raised when a user tries to join a group they're already in."""

    status_code = status.HTTP_409_CONFLICT


class InvariantViolationError(GroupCartError):
    """Raised when stored state contradicts what the transition logic guarantees."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    internal = True


class InviteCodeGenerationError(GroupCartError):
    """Raised when no unused invite code was found within the retry budget."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    internal = True
