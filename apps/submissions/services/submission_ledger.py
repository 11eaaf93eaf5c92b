"""
Submission creation and lookups.

A quest counts as "taken" for a participant when they own a live submission
for it, when their partner does (``pair`` quests) or when they are an active
participant of the quest's live group (``multiple-pair`` quests).
"""

from typing import Optional
from uuid import UUID

import structlog
from django.db import transaction, IntegrityError
from django.db.models import Q, QuerySet

from apps.accounts.models import User
from apps.accounts.services import lock_users
from apps.activities.models import ActivityType
from apps.activities.services import record_activity
from apps.groups.models import GroupParticipant, GroupSubmission
from apps.quests.models import Quest, QuestCategory
from apps.quests.services import get_open_quest, get_quest
from apps.submissions.models import Submission, SubmissionStatus, AWAITING_DECISION
from .exceptions import DuplicateSubmissionError, SubmissionNotFoundError

logger = structlog.get_logger(__name__)


def has_partnership_submission(*, user: User, quest: Quest) -> bool:
    """Return True if ``user``'s current partner has a live submission for ``quest``."""
    if user.partner_id is None:
        return False
    return Submission.objects.live().filter(user_id=user.partner_id, quest=quest).exists()


def _active_group_participation(*, user: User, quest: Quest) -> Optional[GroupParticipant]:
    return (
        GroupParticipant.objects
        .select_related('group__submission')
        .filter(
            user=user,
            group__quest=quest,
            opted_out=False,
            group__submission__is_deleted=False,
        )
        .first()
    )


@transaction.atomic
def create_submission(*, user: User, quest_id: UUID, proof_ref: str) -> Submission:
    """
    Record a new quest completion claim in ``pending_review``.

    The user row (and the partner row, for pair quests) stays locked until
    commit, so a concurrent submission by the partner waits and then sees
    this one.

    Args:
        user: Submitting participant
        quest_id: Quest being completed
        proof_ref: Opaque reference to the proof image (bot file id)

    Returns:
        Created Submission

    Raises:
        QuestNotFoundError: If the quest doesn't exist
        QuestNotAcceptingSubmissionsError: If the quest is closed
        DuplicateSubmissionError: If the quest is already covered for the user
    """
    quest = get_open_quest(quest_id=quest_id)

    user_ids = [user.id]
    if quest.category == QuestCategory.PAIR:
        partner_id = User.objects.filter(id=user.id).values_list('partner_id', flat=True).first()
        if partner_id:
            user_ids.append(partner_id)
    submitter = lock_users(user_ids=user_ids)[user.id]

    if Submission.objects.live().filter(user=submitter, quest=quest).exists():
        raise DuplicateSubmissionError(
            "You already have a submission for this quest",
            quest_id=str(quest.id),
        )

    if quest.category == QuestCategory.PAIR and has_partnership_submission(user=submitter, quest=quest):
        raise DuplicateSubmissionError(
            "Your partner has already submitted this quest",
            quest_id=str(quest.id),
        )

    if quest.category == QuestCategory.MULTIPLE_PAIR and _active_group_participation(user=submitter, quest=quest):
        raise DuplicateSubmissionError(
            "You are already part of a group submission for this quest",
            quest_id=str(quest.id),
        )

    try:
        with transaction.atomic():
            submission = Submission.objects.create(
                user=submitter,
                quest=quest,
                proof_ref=proof_ref,
                visible_to_partner=quest.category == QuestCategory.PAIR,
            )
    except IntegrityError:
        raise DuplicateSubmissionError(
            "You already have a submission for this quest",
            quest_id=str(quest.id),
        )

    record_activity(
        user=submitter,
        activity_type=ActivityType.SUBMISSION_CREATED,
        description=f"Submitted proof for quest: {quest.title}",
        quest=quest,
        submission=submission,
        created_by=submitter,
    )

    logger.info(
        "submission_created",
        submission_id=str(submission.id),
        quest_id=str(quest.id),
        user_id=str(submitter.id),
    )
    return submission


def get_submission(*, submission_id: UUID) -> Submission:
    try:
        return Submission.objects.select_related('user', 'quest').get(id=submission_id)
    except Submission.DoesNotExist:
        raise SubmissionNotFoundError(f"Submission with ID {submission_id} not found")


def visible_submissions(
    *,
    user: User,
    status: Optional[str] = None,
    quest_id: Optional[UUID] = None,
    include_deleted: bool = False
) -> QuerySet:
    """
    Submissions ``user`` may see.

    Admins see everything (soft-deleted rows only on request). Participants
    see their own live submissions, their partner's, and the group
    submissions they take part in.
    """
    queryset = Submission.objects.select_related('user', 'quest')

    if user.is_admin:
        if not include_deleted:
            queryset = queryset.live()
    else:
        scope = Q(user=user) | Q(
            group__participants__user=user,
            group__participants__opted_out=False,
        )
        if user.partner_id:
            scope |= Q(user_id=user.partner_id)
        queryset = queryset.live().filter(scope).distinct()

    if status:
        queryset = queryset.filter(status=status)
    if quest_id:
        queryset = queryset.filter(quest_id=quest_id)

    return queryset


_STATUS_LABELS = {
    SubmissionStatus.PENDING_REVIEW: 'pending',
    SubmissionStatus.MANUAL_REVIEW: 'pending',
    SubmissionStatus.APPROVED: 'completed',
    SubmissionStatus.REJECTED: 'rejected',
}


def get_quest_status(*, user: User, quest_id: UUID) -> dict:
    """
    Where ``user`` stands on a quest, taking partner and group credit into account.

    Returns:
        Dict with ``status`` (available, pending, completed or rejected), the
        submission that decides it, and whether the user may opt out of it.
    """
    quest = get_quest(quest_id=quest_id)

    submission = Submission.objects.live().filter(user=user, quest=quest).first()
    participation = None

    if submission is None and user.partner_id and quest.category == QuestCategory.PAIR:
        submission = (
            Submission.objects.live()
            .filter(user_id=user.partner_id, quest=quest, visible_to_partner=True)
            .first()
        )

    if submission is None:
        participation = _active_group_participation(user=user, quest=quest)
        if participation is not None:
            submission = participation.group.submission

    if submission is None:
        return {
            'quest_id': quest.id,
            'status': 'available',
            'submission_id': None,
            'submitted_by': None,
            'submitted_at': None,
            'can_opt_out': False,
            'group_id': None,
        }

    can_opt_out = (
        participation is not None
        and participation.group.submitter_id != user.id
        and submission.status != SubmissionStatus.APPROVED
    )
    group_id = participation.group_id if participation is not None else None
    if group_id is None and submission.is_group_submission:
        group_id = (
            GroupSubmission.objects
            .filter(submission=submission)
            .values_list('id', flat=True)
            .first()
        )

    return {
        'quest_id': quest.id,
        'status': _STATUS_LABELS[submission.status],
        'submission_id': submission.id,
        'submitted_by': submission.user_id,
        'submitted_at': submission.submitted_at,
        'can_opt_out': can_opt_out,
        'group_id': group_id,
    }


def awaiting_decision(*, quest_id: Optional[UUID] = None) -> QuerySet:
    """Review queue for admins, oldest first."""
    queryset = (
        Submission.objects.live()
        .filter(status__in=AWAITING_DECISION)
        .select_related('user', 'quest')
        .order_by('submitted_at')
    )
    if quest_id:
        queryset = queryset.filter(quest_id=quest_id)
    return queryset
