from django.db import models
from django.db.models import Q
from django.utils import timezone
import uuid


class QuestCategory(models.TextChoices):
    PAIR = 'pair', 'Pair'
    MULTIPLE_PAIR = 'multiple-pair', 'Multiple pairs'
    BONUS = 'bonus', 'Bonus'


class QuestStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    INACTIVE = 'inactive', 'Inactive'
    ARCHIVED = 'archived', 'Archived'


class QuestQuerySet(models.QuerySet):

    def accepting_submissions(self, now=None):
        now = now or timezone.now()
        return self.filter(status=QuestStatus.ACTIVE).filter(
            Q(expires_at__isnull=True) | Q(expires_at__gt=now)
        )

    def overdue(self, now=None):
        now = now or timezone.now()
        return self.filter(status=QuestStatus.ACTIVE, expires_at__lte=now)


class Quest(models.Model):
    """
    A task participants complete and prove with a photo.

    ``category`` decides who shares the credit: ``pair`` quests credit the
    submitter's partner, ``multiple-pair`` quests are submitted once for a
    whole group of participants.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    category = models.CharField(max_length=20, choices=QuestCategory.choices, default=QuestCategory.PAIR)
    points = models.PositiveIntegerField()
    status = models.CharField(max_length=20, choices=QuestStatus.choices, default=QuestStatus.ACTIVE)
    expires_at = models.DateTimeField(null=True, blank=True)
    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='created_quests',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = QuestQuerySet.as_manager()

    class Meta:
        db_table = 'quests'
        indexes = [
            models.Index(fields=['status', 'expires_at'], name='quests_status_expires_idx'),
            models.Index(fields=['category'], name='quests_category_idx'),
        ]
        constraints = [
            models.CheckConstraint(condition=Q(points__gt=0), name='quests_points_positive'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return self.title

    def is_accepting_submissions(self, now=None):
        if self.status != QuestStatus.ACTIVE:
            return False
        now = now or timezone.now()
        return self.expires_at is None or self.expires_at > now
