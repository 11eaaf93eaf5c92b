"""
Activity log service.

Entries are written inside the caller's transaction, so an audit row commits
or rolls back together with the change it describes.
"""

from typing import Iterable, Optional

import structlog
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.activities.models import Activity

logger = structlog.get_logger(__name__)


def record_activity(
    *,
    user: User,
    activity_type: str,
    description: str = "",
    quest=None,
    submission=None,
    metadata: Optional[dict] = None,
    created_by: Optional[User] = None
) -> Activity:
    """Append a single activity entry about ``user``."""
    activity = Activity.objects.create(
        user=user,
        activity_type=activity_type,
        description=description,
        quest=quest,
        submission=submission,
        metadata=metadata or {},
        created_by=created_by,
    )
    logger.debug("activity_recorded", activity_type=activity_type, user_id=str(user.pk))
    return activity


def record_activities(entries: Iterable[dict]) -> list:
    """
    Append several entries in one INSERT.

    Each entry takes the keyword arguments of ``record_activity``.
    """
    activities = [
        Activity(
            user=entry['user'],
            activity_type=entry['activity_type'],
            description=entry.get('description', ''),
            quest=entry.get('quest'),
            submission=entry.get('submission'),
            metadata=entry.get('metadata') or {},
            created_by=entry.get('created_by'),
        )
        for entry in entries
    ]
    return Activity.objects.bulk_create(activities)


def list_activities(
    *,
    user: User,
    user_id=None,
    activity_type: Optional[str] = None
) -> QuerySet:
    """
    Return the activity feed visible to ``user``.

    Admins see every entry and may narrow it to one participant; everybody
    else only sees entries about themself.
    """
    queryset = Activity.objects.select_related('user', 'created_by', 'quest')

    if user.is_admin:
        if user_id is not None:
            queryset = queryset.filter(user_id=user_id)
    else:
        queryset = queryset.filter(user=user)

    if activity_type:
        queryset = queryset.filter(activity_type=activity_type)

    return queryset
