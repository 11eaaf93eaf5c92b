from django.core.exceptions import ObjectDoesNotExist
from rest_framework import serializers

from apps.accounts.serializers import UserPublicSerializer
from .models import Submission, SubmissionStatus, ReviewDecision


class SubmissionSerializer(serializers.ModelSerializer):
    user = UserPublicSerializer(read_only=True)
    quest_id = serializers.UUIDField(read_only=True)
    group_id = serializers.SerializerMethodField()

    class Meta:
        model = Submission
        fields = [
            'id',
            'user',
            'quest_id',
            'proof_ref',
            'status',
            'points_awarded',
            'visible_to_partner',
            'is_group_submission',
            'represents_pairs',
            'group_id',
            'ai_analysis',
            'admin_feedback',
            'reviewed_at',
            'is_deleted',
            'deleted_at',
            'submitted_at',
        ]
        read_only_fields = fields

    def get_group_id(self, obj):
        if not obj.is_group_submission:
            return None
        try:
            return str(obj.group.id)
        except ObjectDoesNotExist:
            return None


class SubmissionCreateSerializer(serializers.Serializer):
    quest_id = serializers.UUIDField()
    proof_ref = serializers.CharField(max_length=255)


class SubmissionFilterSerializer(serializers.Serializer):
    """Query parameters for the submission list."""

    status = serializers.ChoiceField(choices=SubmissionStatus.choices, required=False)
    quest_id = serializers.UUIDField(required=False)
    include_deleted = serializers.BooleanField(required=False, default=False)


class ReviewSerializer(serializers.Serializer):
    decision = serializers.ChoiceField(choices=ReviewDecision.choices)
    feedback = serializers.CharField(required=False, allow_blank=True, default='')


class EscalateSerializer(serializers.Serializer):
    analysis = serializers.JSONField(required=False)


class QuestStatusSerializer(serializers.Serializer):
    quest_id = serializers.UUIDField()
    status = serializers.ChoiceField(choices=['available', 'pending', 'completed', 'rejected'])
    submission_id = serializers.UUIDField(allow_null=True)
    submitted_by = serializers.UUIDField(allow_null=True)
    submitted_at = serializers.DateTimeField(allow_null=True)
    can_opt_out = serializers.BooleanField()
    group_id = serializers.UUIDField(allow_null=True)
