"""
Review state machine.

    pending_review ──escalate──> manual_review
          │                           │
          └──────────approve/reject───┴──> approved | rejected

``approved`` and ``rejected`` are terminal. Every transition runs with the
submission row locked, so points go from zero to the quest's value at most
once.
"""

from typing import Optional
from uuid import UUID

import structlog
from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.activities.models import ActivityType
from apps.activities.services import record_activity
from apps.submissions.models import Submission, SubmissionStatus, ReviewDecision
from .exceptions import (
    SubmissionNotFoundError,
    SubmissionAlreadyReviewedError,
    SubmissionDeletedError,
    InvalidTransitionError,
    InvalidDecisionError,
)

logger = structlog.get_logger(__name__)


def _lock_submission(submission_id: UUID) -> Submission:
    try:
        return Submission.objects.select_for_update().get(id=submission_id)
    except Submission.DoesNotExist:
        raise SubmissionNotFoundError(f"Submission with ID {submission_id} not found")


@transaction.atomic
def review_submission(
    *,
    submission_id: UUID,
    reviewer: User,
    decision: str,
    feedback: str = ""
) -> Submission:
    """
    Approve or reject a submission awaiting decision.

    Approval awards the quest's current point value; rejection leaves zero.

    Raises:
        InvalidDecisionError: If decision is not approve/reject
        SubmissionNotFoundError: If the submission doesn't exist
        SubmissionDeletedError: If it was soft-deleted
        SubmissionAlreadyReviewedError: If it is already approved or rejected
    """
    if decision not in ReviewDecision.values:
        raise InvalidDecisionError(f"Unknown review decision: {decision}")

    submission = _lock_submission(submission_id)

    if submission.is_deleted:
        raise SubmissionDeletedError(
            "Cannot review a deleted submission",
            submission_id=str(submission.id),
        )
    if submission.is_terminal:
        raise SubmissionAlreadyReviewedError(
            f"Submission is already {submission.status}",
            submission_id=str(submission.id),
        )

    if decision == ReviewDecision.APPROVE:
        submission.status = SubmissionStatus.APPROVED
        submission.points_awarded = submission.quest.points
        activity_type = ActivityType.SUBMISSION_APPROVED
    else:
        submission.status = SubmissionStatus.REJECTED
        submission.points_awarded = 0
        activity_type = ActivityType.SUBMISSION_REJECTED

    submission.reviewed_by = reviewer
    submission.reviewed_at = timezone.now()
    submission.admin_feedback = feedback
    submission.save(update_fields=[
        'status',
        'points_awarded',
        'reviewed_by',
        'reviewed_at',
        'admin_feedback',
        'updated_at',
    ])

    record_activity(
        user=submission.user,
        activity_type=activity_type,
        description=f"Submission {submission.status} for quest: {submission.quest.title}",
        quest=submission.quest,
        submission=submission,
        metadata={'points_awarded': submission.points_awarded, 'feedback': feedback},
        created_by=reviewer,
    )

    logger.info(
        "submission_reviewed",
        submission_id=str(submission.id),
        decision=decision,
        points_awarded=submission.points_awarded,
        reviewer_id=str(reviewer.id),
    )
    return submission


@transaction.atomic
def escalate_submission(*, submission_id: UUID, analysis: Optional[dict] = None) -> Submission:
    """
    Hand a submission over to a human reviewer.

    Called by the automated proof pipeline when it cannot decide; the
    pipeline's output is kept in ``ai_analysis`` for the reviewer.

    Raises:
        SubmissionNotFoundError: If the submission doesn't exist
        InvalidTransitionError: Unless the submission is live and pending_review
    """
    submission = _lock_submission(submission_id)

    if submission.is_deleted or submission.status != SubmissionStatus.PENDING_REVIEW:
        raise InvalidTransitionError(
            "Only pending submissions can be escalated to manual review",
            submission_id=str(submission.id),
        )

    submission.status = SubmissionStatus.MANUAL_REVIEW
    if analysis is not None:
        submission.ai_analysis = analysis
    submission.save(update_fields=['status', 'ai_analysis', 'updated_at'])

    record_activity(
        user=submission.user,
        activity_type=ActivityType.SUBMISSION_ESCALATED,
        description="Submission sent to manual review",
        quest=submission.quest,
        submission=submission,
    )

    logger.info("submission_escalated", submission_id=str(submission.id))
    return submission
