from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema, extend_schema_view

from .models import Quest
from .serializers import QuestSerializer, QuestFilterSerializer
from .services import get_active_quests


@extend_schema_view(
    list=extend_schema(
        parameters=[QuestFilterSerializer],
        description="Quests currently accepting submissions.",
        tags=['quests'],
    ),
    retrieve=extend_schema(tags=['quests']),
)
class QuestViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Quest catalogue.

    list: quests that are active and not past their deadline
    retrieve: any quest, so clients can render history for closed ones
    """

    serializer_class = QuestSerializer
    permission_classes = [IsAuthenticated]
    queryset = Quest.objects.all()

    def get_queryset(self):
        if self.action == 'list':
            filters = QuestFilterSerializer(data=self.request.query_params)
            filters.is_valid(raise_exception=True)
            return get_active_quests(category=filters.validated_data.get('category'))
        return Quest.objects.all()
