"""Quest lookup and lifecycle service."""

from uuid import UUID

import structlog
from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from apps.quests.models import Quest, QuestStatus
from .exceptions import QuestNotFoundError, QuestNotAcceptingSubmissionsError

logger = structlog.get_logger(__name__)


def get_quest(*, quest_id: UUID) -> Quest:
    try:
        return Quest.objects.get(id=quest_id)
    except Quest.DoesNotExist:
        raise QuestNotFoundError(f"Quest with ID {quest_id} not found")


def get_open_quest(*, quest_id: UUID) -> Quest:
    """
    Get a quest that currently accepts submissions.

    Raises:
        QuestNotFoundError: If the quest doesn't exist
        QuestNotAcceptingSubmissionsError: If it is inactive or expired
    """
    quest = get_quest(quest_id=quest_id)
    if not quest.is_accepting_submissions():
        raise QuestNotAcceptingSubmissionsError(
            "Quest is not accepting submissions",
            quest_id=str(quest.id),
        )
    return quest


def get_active_quests(*, category: str = None) -> QuerySet:
    queryset = Quest.objects.accepting_submissions()
    if category:
        queryset = queryset.filter(category=category)
    return queryset


@transaction.atomic
def expire_overdue_quests(*, now=None) -> int:
    """
    Move every active quest whose deadline has passed to ``inactive``.

    Returns:
        Number of quests expired
    """
    now = now or timezone.now()
    overdue_ids = list(
        Quest.objects.overdue(now=now)
        .select_for_update()
        .values_list('id', flat=True)
    )
    if not overdue_ids:
        return 0

    count = Quest.objects.filter(id__in=overdue_ids).update(
        status=QuestStatus.INACTIVE,
        updated_at=now,
    )
    logger.info("quests_expired", count=count)
    return count
