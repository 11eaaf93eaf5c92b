from rest_framework import serializers
from .models import Quest, QuestCategory


class QuestSerializer(serializers.ModelSerializer):
    class Meta:
        model = Quest
        fields = [
            'id',
            'title',
            'description',
            'category',
            'points',
            'status',
            'expires_at',
            'created_at',
        ]
        read_only_fields = fields


class QuestFilterSerializer(serializers.Serializer):
    category = serializers.ChoiceField(choices=QuestCategory.choices, required=False)
