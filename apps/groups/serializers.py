from rest_framework import serializers

from apps.accounts.serializers import UserPublicSerializer
from .models import GroupSubmission, GroupParticipant


class GroupParticipantSerializer(serializers.ModelSerializer):
    """Serializer for group participant rows."""

    user = UserPublicSerializer(read_only=True)
    partner_id = serializers.UUIDField(read_only=True, allow_null=True)

    class Meta:
        model = GroupParticipant
        fields = ['id', 'user', 'partner_id', 'opted_out', 'opted_out_at', 'joined_at']
        read_only_fields = fields


class GroupSubmissionSerializer(serializers.ModelSerializer):
    """Main serializer for group submissions."""

    submitter = UserPublicSerializer(read_only=True)
    quest_id = serializers.UUIDField(read_only=True)
    submission_id = serializers.UUIDField(read_only=True)
    submission_status = serializers.CharField(source='submission.status', read_only=True)
    represents_pairs = serializers.IntegerField(source='submission.represents_pairs', read_only=True)
    participants = GroupParticipantSerializer(many=True, read_only=True)

    class Meta:
        model = GroupSubmission
        fields = [
            'id',
            'quest_id',
            'submission_id',
            'submission_status',
            'represents_pairs',
            'submitter',
            'participants',
            'created_at',
        ]
        read_only_fields = fields


class GroupListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    quest_id = serializers.UUIDField(read_only=True)
    submission_id = serializers.UUIDField(read_only=True)
    submitter_id = serializers.UUIDField(read_only=True)
    submission_status = serializers.CharField(source='submission.status', read_only=True)

    class Meta:
        model = GroupSubmission
        fields = ['id', 'quest_id', 'submission_id', 'submitter_id', 'submission_status', 'created_at']
        read_only_fields = fields


class GroupCreateSerializer(serializers.Serializer):
    """Input for creating a group submission."""

    quest_id = serializers.UUIDField()
    submission_id = serializers.UUIDField()
    participant_ids = serializers.ListField(
        child=serializers.UUIDField(),
        max_length=50,
        help_text="Participants to credit; the submitter is added automatically.",
    )


class GroupStatusSerializer(serializers.Serializer):
    """Wrapped submission state and the participant partition."""

    group_id = serializers.UUIDField(source='group.id')
    quest_id = serializers.UUIDField(source='group.quest_id')
    submitter_id = serializers.UUIDField(source='group.submitter_id')
    submission_id = serializers.UUIDField(source='submission.id')
    submission_status = serializers.CharField(source='submission.status')
    submission_deleted = serializers.BooleanField(source='submission.is_deleted')
    points_awarded = serializers.IntegerField(source='submission.points_awarded')
    represents_pairs = serializers.IntegerField(source='submission.represents_pairs')
    active = GroupParticipantSerializer(many=True)
    opted_out = GroupParticipantSerializer(many=True)


class ParticipationChangeSerializer(serializers.Serializer):
    """Result of an opt-out or opt-in."""

    changed = GroupParticipantSerializer(many=True)
    message = serializers.CharField()


def opt_out_message(changed):
    """User-facing message for the rows an opt-out changed."""
    if not changed:
        return 'You have already opted out of this group submission'
    if len(changed) > 1:
        return 'You and your partner have been opted out of this group submission'
    return 'You have been opted out of this group submission'
