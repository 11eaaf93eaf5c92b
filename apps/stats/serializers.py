"""
Serializers for stats app.

Input Serializers:
    LeaderboardQuerySerializer - Validates leaderboard query parameters

Response Serializers:
    ParticipantStatsSerializer - Points, rank and completed quests
    LeaderboardEntrySerializer - One leaderboard row
"""

from django.conf import settings
from rest_framework import serializers


class LeaderboardQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(
        required=False,
        min_value=1,
        max_value=100,
        help_text='Number of entries to return',
    )

    def validate(self, attrs):
        attrs.setdefault('limit', settings.LEADERBOARD_DEFAULT_LIMIT)
        return attrs


class ParticipantStatsSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    total_points = serializers.IntegerField()
    rank = serializers.IntegerField()
    completed_quests = serializers.IntegerField()


class LeaderboardEntrySerializer(serializers.Serializer):
    rank = serializers.IntegerField()
    user_id = serializers.UUIDField()
    display_name = serializers.CharField()
    telegram_username = serializers.CharField(allow_blank=True)
    total_points = serializers.IntegerField()
    completed_quests = serializers.IntegerField()
