"""Soft deletion of submissions."""

from uuid import UUID

import structlog
from django.db import transaction
from django.db.models import F
from django.utils import timezone

from apps.accounts.models import User
from apps.activities.models import ActivityType
from apps.activities.services import record_activity
from apps.groups.models import GroupParticipant
from apps.submissions.models import Submission
from .exceptions import (
    SubmissionNotFoundError,
    SubmissionDeletedError,
    NotSubmissionOwnerError,
)

logger = structlog.get_logger(__name__)


@transaction.atomic
def delete_submission(*, submission_id: UUID, user: User) -> Submission:
    """
    Soft-delete a submission (owner or admin only).

    If the submission wraps a group, every participant except the submitter
    is opted out in the same transaction. The group row itself is kept.

    Args:
        submission_id: Submission to delete
        user: Owner or admin performing the deletion

    Returns:
        The deleted Submission

    Raises:
        SubmissionNotFoundError: If the submission doesn't exist
        NotSubmissionOwnerError: If user is neither owner nor admin
        SubmissionDeletedError: If it is already deleted
    """
    try:
        submission = Submission.objects.select_for_update().get(id=submission_id)
    except Submission.DoesNotExist:
        raise SubmissionNotFoundError(f"Submission with ID {submission_id} not found")

    if submission.user_id != user.id and not user.is_admin:
        raise NotSubmissionOwnerError("Only the owner or an admin can delete this submission")

    if submission.is_deleted:
        raise SubmissionDeletedError(
            "Submission is already deleted",
            submission_id=str(submission.id),
        )

    now = timezone.now()
    opted_out = 0
    if submission.is_group_submission:
        opted_out = (
            GroupParticipant.objects
            .filter(group__submission=submission, opted_out=False)
            .exclude(user=F('group__submitter'))
            .update(opted_out=True, opted_out_at=now)
        )

    submission.is_deleted = True
    submission.deleted_at = now
    submission.deleted_by = user
    submission.save(update_fields=['is_deleted', 'deleted_at', 'deleted_by', 'updated_at'])

    record_activity(
        user=submission.user,
        activity_type=ActivityType.SUBMISSION_DELETED,
        description=f"Submission deleted for quest: {submission.quest.title}",
        quest=submission.quest,
        submission=submission,
        metadata={
            'deleted_by_admin': submission.user_id != user.id,
            'participants_opted_out': opted_out,
        },
        created_by=user,
    )

    logger.info(
        "submission_deleted",
        submission_id=str(submission.id),
        deleted_by=str(user.id),
        participants_opted_out=opted_out,
    )
    return submission
