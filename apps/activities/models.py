from django.db import models
import uuid


class ActivityType(models.TextChoices):
    PARTNERSHIP_CREATED = 'partnership_created', 'Partnership created'
    PARTNERSHIP_REMOVED = 'partnership_removed', 'Partnership removed'
    PARTNERSHIP_FORCE_CHANGED = 'partnership_force_changed', 'Partnership force changed'
    PARTNERSHIP_FORCE_BROKEN = 'partnership_force_broken', 'Partnership force broken'
    PARTNERSHIP_FORCE_CREATED = 'partnership_force_created', 'Partnership force created'
    SUBMISSION_CREATED = 'submission_created', 'Submission created'
    SUBMISSION_ESCALATED = 'submission_escalated', 'Submission escalated'
    SUBMISSION_APPROVED = 'submission_approved', 'Submission approved'
    SUBMISSION_REJECTED = 'submission_rejected', 'Submission rejected'
    SUBMISSION_DELETED = 'submission_deleted', 'Submission deleted'
    GROUP_SUBMISSION_CREATED = 'group_submission_created', 'Group submission created'
    GROUP_SUBMISSION_OPTED_OUT = 'group_submission_opted_out', 'Opted out of group submission'
    GROUP_SUBMISSION_OPTED_IN = 'group_submission_opted_in', 'Opted back into group submission'


class Activity(models.Model):
    """
    Append-only audit entry about one participant.

    ``created_by`` is whoever performed the action (the participant
    themself, an admin, or nobody for automated transitions).
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='activities')
    activity_type = models.CharField(max_length=40, choices=ActivityType.choices)
    description = models.TextField(blank=True)
    quest = models.ForeignKey(
        'quests.Quest',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='activities',
    )
    submission = models.ForeignKey(
        'submissions.Submission',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='activities',
    )
    metadata = models.JSONField(default=dict, blank=True)
    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='performed_activities',
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'activities'
        indexes = [
            models.Index(fields=['user', 'created_at'], name='activities_user_created_idx'),
            models.Index(fields=['activity_type', 'created_at'], name='activities_type_created_idx'),
        ]
        ordering = ['-created_at']
        verbose_name_plural = 'activities'

    def __str__(self):
        return f"{self.activity_type} for {self.user_id}"
