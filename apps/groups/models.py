from django.db import models
import uuid


MIN_GROUP_SIZE = 2
MAX_GROUP_SIZE = 10


class GroupSubmission(models.Model):
    """
    One submission standing for several participants on a multiple-pair quest.

    A quest has at most one group. The wrapped submission belongs to the
    submitter; co-participants are credited through ``participants``.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    quest = models.OneToOneField('quests.Quest', on_delete=models.PROTECT, related_name='group_submission')
    submission = models.OneToOneField('submissions.Submission', on_delete=models.PROTECT, related_name='group')
    submitter = models.ForeignKey('accounts.User', on_delete=models.PROTECT, related_name='submitted_groups')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'group_submissions'
        indexes = [
            models.Index(fields=['submitter', 'created_at'], name='group_subs_submitter_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"Group for {self.quest_id}"

    def has_participant(self, user):
        return self.participants.filter(user=user).exists()


class GroupParticipant(models.Model):
    """
    A participant credited by a group submission.

    ``partner`` is the participant's partner at the moment the group was
    created. It decides who is opted out together and is never updated
    afterwards, even if the partnership changes.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    group = models.ForeignKey(GroupSubmission, on_delete=models.CASCADE, related_name='participants')
    user = models.ForeignKey('accounts.User', on_delete=models.PROTECT, related_name='group_participations')
    partner = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
    )
    opted_out = models.BooleanField(default=False)
    opted_out_at = models.DateTimeField(null=True, blank=True)
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'group_participants'
        constraints = [
            models.UniqueConstraint(fields=['group', 'user'], name='group_participants_unique_user'),
        ]
        indexes = [
            models.Index(fields=['group', 'opted_out'], name='group_parts_group_opt_idx'),
            models.Index(fields=['user', 'opted_out'], name='group_parts_user_opt_idx'),
        ]
        ordering = ['joined_at']

    def __str__(self):
        state = 'opted out' if self.opted_out else 'active'
        return f"{self.user_id} in {self.group_id} ({state})"
