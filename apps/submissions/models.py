from django.db import models
from django.db.models import Q
import uuid


class SubmissionStatus(models.TextChoices):
    PENDING_REVIEW = 'pending_review', 'Pending review'
    MANUAL_REVIEW = 'manual_review', 'Manual review'
    APPROVED = 'approved', 'Approved'
    REJECTED = 'rejected', 'Rejected'


AWAITING_DECISION = (SubmissionStatus.PENDING_REVIEW, SubmissionStatus.MANUAL_REVIEW)


class ReviewDecision(models.TextChoices):
    APPROVE = 'approve', 'Approve'
    REJECT = 'reject', 'Reject'


class SubmissionQuerySet(models.QuerySet):

    def live(self):
        return self.filter(is_deleted=False)

    def approved(self):
        return self.filter(is_deleted=False, status=SubmissionStatus.APPROVED)


class Submission(models.Model):
    """
    A participant's claim of having completed a quest.

    Rows are never physically removed: deletion sets ``is_deleted`` and the
    projection ignores such rows. At most one live submission may exist per
    (user, quest).
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.PROTECT, related_name='submissions')
    quest = models.ForeignKey('quests.Quest', on_delete=models.PROTECT, related_name='submissions')
    proof_ref = models.CharField(max_length=255)

    status = models.CharField(
        max_length=20,
        choices=SubmissionStatus.choices,
        default=SubmissionStatus.PENDING_REVIEW,
    )
    points_awarded = models.PositiveIntegerField(default=0)

    # Credit sharing
    visible_to_partner = models.BooleanField(default=False)
    is_group_submission = models.BooleanField(default=False)
    represents_pairs = models.PositiveSmallIntegerField(default=1)

    # Review
    ai_analysis = models.JSONField(null=True, blank=True)
    admin_feedback = models.TextField(blank=True)
    reviewed_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='reviewed_submissions',
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)

    # Soft delete
    is_deleted = models.BooleanField(default=False)
    deleted_at = models.DateTimeField(null=True, blank=True)
    deleted_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='deleted_submissions',
    )

    submitted_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = SubmissionQuerySet.as_manager()

    class Meta:
        db_table = 'submissions'
        indexes = [
            models.Index(fields=['quest', 'status'], name='submissions_quest_status_idx'),
            models.Index(fields=['user', 'is_deleted'], name='submissions_user_deleted_idx'),
            models.Index(fields=['status', 'is_deleted'], name='submissions_status_del_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'quest'],
                condition=Q(is_deleted=False),
                name='submissions_one_live_per_quest',
            ),
            models.CheckConstraint(
                condition=Q(status=SubmissionStatus.APPROVED) | Q(points_awarded=0),
                name='submissions_points_only_approved',
            ),
        ]
        ordering = ['-submitted_at']

    def __str__(self):
        return f"{self.user_id} -> {self.quest_id} ({self.status})"

    @property
    def is_terminal(self):
        return self.status in (SubmissionStatus.APPROVED, SubmissionStatus.REJECTED)
