"""
Services for the submission ledger.

Public API:
    - create_submission / has_partnership_submission
    - review_submission / escalate_submission
    - delete_submission
    - get_submission / visible_submissions / awaiting_decision / get_quest_status
"""

from .exceptions import (
    SubmissionsServiceError,
    SubmissionNotFoundError,
    DuplicateSubmissionError,
    SubmissionAlreadyReviewedError,
    SubmissionDeletedError,
    InvalidTransitionError,
    InvalidDecisionError,
    NotSubmissionOwnerError,
)
from .submission_ledger import (
    create_submission,
    has_partnership_submission,
    get_submission,
    visible_submissions,
    awaiting_decision,
    get_quest_status,
)
from .submission_review import review_submission, escalate_submission
from .submission_deletion import delete_submission

__all__ = [
    # Exceptions
    'SubmissionsServiceError',
    'SubmissionNotFoundError',
    'DuplicateSubmissionError',
    'SubmissionAlreadyReviewedError',
    'SubmissionDeletedError',
    'InvalidTransitionError',
    'InvalidDecisionError',
    'NotSubmissionOwnerError',
    # Services
    'create_submission',
    'has_partnership_submission',
    'get_submission',
    'visible_submissions',
    'awaiting_decision',
    'get_quest_status',
    'review_submission',
    'escalate_submission',
    'delete_submission',
]
