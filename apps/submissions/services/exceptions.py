"""
Domain-specific exceptions for submission services.

All map onto the shared taxonomy in ``config.exceptions``.
"""

from config.exceptions import Conflict, Forbidden, InvalidArgument, NotFound, ServiceError


class SubmissionsServiceError(ServiceError):
    """Base exception for submission services."""
    pass


class SubmissionNotFoundError(SubmissionsServiceError, NotFound):
    """Raised when submission does not exist."""
    pass


class DuplicateSubmissionError(SubmissionsServiceError, Conflict):
    """Raised when the quest is already covered for the user (own, partner or group)."""
    pass


class SubmissionAlreadyReviewedError(SubmissionsServiceError, Conflict):
    """Raised when reviewing a submission that is already approved or rejected."""
    pass


class SubmissionDeletedError(SubmissionsServiceError, Conflict):
    """Raised when acting on a soft-deleted submission."""
    pass


class InvalidTransitionError(SubmissionsServiceError, Conflict):
    """Raised when a status change is not allowed from the current status."""
    pass


class InvalidDecisionError(SubmissionsServiceError, InvalidArgument):
    """Raised when review decision is not approve/reject."""
    pass


class NotSubmissionOwnerError(SubmissionsServiceError, Forbidden):
    """Raised when a non-owner, non-admin tries to delete a submission."""
    pass
