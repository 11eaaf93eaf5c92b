"""
Group submission creation and lookup.

Handles creating the group wrapper for multiple-pair quests.
"""

from typing import Iterable
from uuid import UUID

import structlog
from django.db import transaction, IntegrityError

from apps.accounts.models import User
from apps.accounts.services import lock_users
from apps.activities.models import ActivityType
from apps.activities.services import record_activities
from apps.groups.models import GroupSubmission, GroupParticipant, MIN_GROUP_SIZE, MAX_GROUP_SIZE
from apps.quests.models import QuestCategory
from apps.quests.services import get_quest, WrongQuestCategoryError
from apps.submissions.models import Submission, AWAITING_DECISION
from apps.submissions.services import SubmissionNotFoundError

from .exceptions import (
    GroupNotFoundError,
    GroupAlreadyExistsError,
    GroupSizeError,
    GroupClosedError,
    ParticipantAlreadySubmittedError,
)

logger = structlog.get_logger(__name__)


def count_represented_pairs(users: Iterable[User]) -> int:
    """
    Number of distinct partnerships (or unpartnered singles) among ``users``.

    Two partners in the same group count once; a participant whose partner
    stayed out still counts as their partnership.
    """
    units = set()
    for user in users:
        if user.partner_id:
            units.add(tuple(sorted((str(user.id), str(user.partner_id)))))
        else:
            units.add((str(user.id),))
    return len(units)


@transaction.atomic
def create_group(
    *,
    quest_id: UUID,
    submitter: User,
    submission_id: UUID,
    participant_ids: Iterable[UUID]
) -> GroupSubmission:
    """
    Wrap the submitter's submission into a group covering several participants.

    The submitter is always included. Each participant row records the
    participant's partner as of now.

    Args:
        quest_id: Multiple-pair quest the group is for
        submitter: User who owns the submission
        submission_id: The submitter's live submission for the quest
        participant_ids: Users to credit (duplicates are ignored)

    Returns:
        The GroupSubmission (the existing one for an identical retry)

    Raises:
        QuestNotFoundError: If the quest doesn't exist
        WrongQuestCategoryError: If the quest is not multiple-pair
        SubmissionNotFoundError: If the submission is not the submitter's live one for the quest
        GroupAlreadyExistsError: If the quest already has a different group
        GroupClosedError: If the submission was already approved or rejected
        GroupSizeError: If the group would have fewer than 2 or more than 10 participants
        UserNotFoundError: If a participant doesn't exist
        ParticipantAlreadySubmittedError: If a participant has their own submission for the quest
    """
    quest = get_quest(quest_id=quest_id)
    if quest.category != QuestCategory.MULTIPLE_PAIR:
        raise WrongQuestCategoryError("Group submissions are only allowed for multiple-pair quests")

    try:
        submission = (
            Submission.objects
            .select_for_update()
            .get(id=submission_id, user=submitter, quest=quest, is_deleted=False)
        )
    except Submission.DoesNotExist:
        raise SubmissionNotFoundError("Submission not found or not owned by you")

    existing = GroupSubmission.objects.filter(quest=quest).first()
    if existing is not None:
        if existing.submission_id == submission.id and existing.submitter_id == submitter.id:
            return existing
        raise GroupAlreadyExistsError(
            "A group submission already exists for this quest",
            quest_id=str(quest.id),
        )

    if submission.status not in AWAITING_DECISION:
        raise GroupClosedError(
            f"Cannot form a group around a submission that is already {submission.status}",
            submission_id=str(submission.id),
        )

    ids = list(dict.fromkeys(UUID(str(participant_id)) for participant_id in participant_ids))
    if not MIN_GROUP_SIZE <= len(ids) <= MAX_GROUP_SIZE:
        raise GroupSizeError(
            f"Group submissions must include {MIN_GROUP_SIZE}-{MAX_GROUP_SIZE} participants"
        )
    if submitter.id not in ids:
        ids.append(submitter.id)
        if len(ids) > MAX_GROUP_SIZE:
            raise GroupSizeError(
                f"Group submissions must include {MIN_GROUP_SIZE}-{MAX_GROUP_SIZE} participants "
                "including the submitter"
            )

    users = lock_users(user_ids=ids)

    already_submitted = list(
        Submission.objects.live()
        .filter(quest=quest, user_id__in=ids)
        .exclude(id=submission.id)
        .values_list('user_id', flat=True)
    )
    if already_submitted:
        raise ParticipantAlreadySubmittedError(
            "Some participants already submitted this quest themselves",
            user_ids=[str(user_id) for user_id in already_submitted],
        )

    try:
        with transaction.atomic():
            group = GroupSubmission.objects.create(
                quest=quest,
                submission=submission,
                submitter=submitter,
            )
    except IntegrityError:
        raise GroupAlreadyExistsError(
            "A group submission already exists for this quest",
            quest_id=str(quest.id),
        )

    GroupParticipant.objects.bulk_create([
        GroupParticipant(group=group, user=users[user_id], partner_id=users[user_id].partner_id)
        for user_id in ids
    ])

    submission.is_group_submission = True
    submission.visible_to_partner = False
    submission.represents_pairs = count_represented_pairs(users[user_id] for user_id in ids)
    submission.save(update_fields=[
        'is_group_submission',
        'visible_to_partner',
        'represents_pairs',
        'updated_at',
    ])

    record_activities(
        {
            'user': users[user_id],
            'activity_type': ActivityType.GROUP_SUBMISSION_CREATED,
            'description': f"Included in group submission for quest: {quest.title}",
            'quest': quest,
            'submission': submission,
            'metadata': {'group_id': str(group.id), 'participants': len(ids)},
            'created_by': submitter,
        }
        for user_id in ids
    )

    logger.info(
        "group_submission_created",
        group_id=str(group.id),
        quest_id=str(quest.id),
        participants=len(ids),
        represents_pairs=submission.represents_pairs,
    )
    return group


def get_group_by_id(*, group_id: UUID) -> GroupSubmission:
    try:
        return (
            GroupSubmission.objects
            .select_related('quest', 'submission', 'submitter')
            .get(id=group_id)
        )
    except GroupSubmission.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")


def group_status(*, group_id: UUID) -> dict:
    """
    State of the wrapped submission plus the participants split by opt-out.

    Returns:
        Dict with ``group``, ``submission``, ``active`` and ``opted_out``
    """
    group = get_group_by_id(group_id=group_id)
    participants = list(group.participants.select_related('user', 'partner'))
    return {
        'group': group,
        'submission': group.submission,
        'active': [p for p in participants if not p.opted_out],
        'opted_out': [p for p in participants if p.opted_out],
    }


def groups_for_user(*, user: User):
    """Groups the user takes part in (all groups for admins)."""
    queryset = GroupSubmission.objects.select_related('quest', 'submission', 'submitter')
    if user.is_admin:
        return queryset
    return queryset.filter(participants__user=user).distinct()
