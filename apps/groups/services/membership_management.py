"""
Participation management service.

Opting out withdraws a participant from a group submission's credit without
touching the submission itself. The participant's partner, as recorded when
the group was created, always moves together with them.
"""

from typing import List
from uuid import UUID

import structlog
from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.activities.models import ActivityType
from apps.activities.services import record_activities
from apps.groups.models import GroupSubmission, GroupParticipant
from apps.submissions.models import Submission, SubmissionStatus

from .exceptions import (
    GroupNotFoundError,
    NotParticipantError,
    SubmitterCannotOptOutError,
    GroupClosedError,
)

logger = structlog.get_logger(__name__)


def _lock_group(group_id: UUID):
    """Lock the group and its submission, in that order."""
    try:
        group = GroupSubmission.objects.select_for_update().get(id=group_id)
    except GroupSubmission.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")
    submission = Submission.objects.select_for_update().get(id=group.submission_id)
    return group, submission


def _lock_membership(group: GroupSubmission, user: User) -> List[GroupParticipant]:
    """
    Lock the user's row and, when present, their recorded partner's row.

    Returns:
        [own_row] or [own_row, partner_row]
    """
    try:
        row = GroupParticipant.objects.select_for_update().get(group=group, user=user)
    except GroupParticipant.DoesNotExist:
        raise NotParticipantError("You are not a participant in this group submission")

    rows = [row]
    if row.partner_id:
        partner_row = (
            GroupParticipant.objects
            .select_for_update()
            .filter(group=group, user_id=row.partner_id)
            .first()
        )
        if partner_row is not None:
            rows.append(partner_row)
    return rows


@transaction.atomic
def opt_out(*, group_id: UUID, user: User) -> List[GroupParticipant]:
    """
    Withdraw ``user`` (and their recorded partner) from a group submission.

    Args:
        group_id: UUID of the group
        user: Participant opting out

    Returns:
        The participant rows that changed (empty if already opted out)

    Raises:
        GroupNotFoundError: If group doesn't exist
        SubmitterCannotOptOutError: If user or their partner is the submitter
        NotParticipantError: If user was never part of the group
        GroupClosedError: If the submission is approved or deleted
    """
    group, submission = _lock_group(group_id)

    if group.submitter_id == user.id:
        raise SubmitterCannotOptOutError(
            "As the submitter, you cannot opt out. You can delete the submission instead."
        )

    rows = _lock_membership(group, user)

    if rows[0].opted_out:
        return []

    if submission.is_deleted:
        raise GroupClosedError("The group submission has been deleted")
    if submission.status == SubmissionStatus.APPROVED:
        raise GroupClosedError("Cannot opt out of an approved submission")

    if any(row.user_id == group.submitter_id for row in rows):
        raise SubmitterCannotOptOutError(
            "Your partner submitted this group submission; ask them to delete it instead."
        )

    changed = [row for row in rows if not row.opted_out]
    now = timezone.now()
    GroupParticipant.objects.filter(id__in=[row.id for row in changed]).update(
        opted_out=True,
        opted_out_at=now,
    )
    for row in changed:
        row.opted_out = True
        row.opted_out_at = now

    record_activities(
        {
            'user': row.user,
            'activity_type': ActivityType.GROUP_SUBMISSION_OPTED_OUT,
            'description': "Opted out of group submission",
            'quest': submission.quest,
            'submission': submission,
            'metadata': {'group_id': str(group.id), 'cascaded': row.user_id != user.id},
            'created_by': user,
        }
        for row in changed
    )

    logger.info(
        "group_participant_opted_out",
        group_id=str(group.id),
        user_id=str(user.id),
        opted_out=[str(row.user_id) for row in changed],
    )
    return changed


@transaction.atomic
def opt_in(*, group_id: UUID, user: User) -> List[GroupParticipant]:
    """
    Undo an opt-out for ``user`` (and their recorded partner).

    Args:
        group_id: UUID of the group
        user: Participant opting back in

    Returns:
        The participant rows that changed (empty if already active)

    Raises:
        GroupNotFoundError: If group doesn't exist
        NotParticipantError: If user was never part of the group
        GroupClosedError: If the submission is rejected or deleted
    """
    group, submission = _lock_group(group_id)
    rows = _lock_membership(group, user)

    if submission.is_deleted:
        raise GroupClosedError("The group submission has been deleted")
    if submission.status == SubmissionStatus.REJECTED:
        raise GroupClosedError("Cannot opt into a rejected submission")

    changed = [row for row in rows if row.opted_out]
    if not changed:
        return []

    GroupParticipant.objects.filter(id__in=[row.id for row in changed]).update(
        opted_out=False,
        opted_out_at=None,
    )
    for row in changed:
        row.opted_out = False
        row.opted_out_at = None

    record_activities(
        {
            'user': row.user,
            'activity_type': ActivityType.GROUP_SUBMISSION_OPTED_IN,
            'description': "Opted back into group submission",
            'quest': submission.quest,
            'submission': submission,
            'metadata': {'group_id': str(group.id), 'cascaded': row.user_id != user.id},
            'created_by': user,
        }
        for row in changed
    )

    logger.info(
        "group_participant_opted_in",
        group_id=str(group.id),
        user_id=str(user.id),
        opted_in=[str(row.user_id) for row in changed],
    )
    return changed
