from rest_framework import serializers

from apps.accounts.serializers import UserPublicSerializer
from .models import Activity, ActivityType


class ActivitySerializer(serializers.ModelSerializer):
    user = UserPublicSerializer(read_only=True)
    created_by = UserPublicSerializer(read_only=True)
    quest_id = serializers.UUIDField(read_only=True, allow_null=True)
    submission_id = serializers.UUIDField(read_only=True, allow_null=True)

    class Meta:
        model = Activity
        fields = [
            'id',
            'user',
            'activity_type',
            'description',
            'quest_id',
            'submission_id',
            'metadata',
            'created_by',
            'created_at',
        ]
        read_only_fields = fields


class ActivityFilterSerializer(serializers.Serializer):
    """Query parameters for the activity feed."""

    user_id = serializers.UUIDField(required=False)
    activity_type = serializers.ChoiceField(choices=ActivityType.choices, required=False)
