"""
Domain-specific exceptions for groups app.

These exceptions represent business rule violations; the API exception
handler turns them into error responses using their ``kind``.
"""

from config.exceptions import Conflict, Forbidden, InvalidArgument, NotFound, ServiceError


class GroupsServiceError(ServiceError):
    """Base exception for all groups service errors."""
    pass


class GroupNotFoundError(GroupsServiceError, NotFound):
    """Raised when a group does not exist."""
    pass


class GroupAlreadyExistsError(GroupsServiceError, Conflict):
    """Raised when the quest already has a group submission."""
    pass


class GroupSizeError(GroupsServiceError, InvalidArgument):
    """Raised when the participant list is outside the allowed size."""
    pass


class ParticipantAlreadySubmittedError(GroupsServiceError, Conflict):
    """Raised when a listed participant already has their own submission for the quest."""
    pass


class NotParticipantError(GroupsServiceError, Conflict):
    """Raised when a user acts on a group they were never part of."""
    pass


class SubmitterCannotOptOutError(GroupsServiceError, Forbidden):
    """Raised when the submitter (directly or through their partner) would be opted out."""
    pass


class GroupClosedError(GroupsServiceError, Conflict):
    """Raised when the wrapped submission no longer allows membership changes."""
    pass
