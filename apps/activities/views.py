from rest_framework import generics
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema

from .serializers import ActivitySerializer, ActivityFilterSerializer
from .services import list_activities


class ActivityPagination(PageNumberPagination):
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


@extend_schema(
    parameters=[ActivityFilterSerializer],
    description="Audit feed. Admins see every participant, others only their own entries.",
    tags=['activities'],
)
class ActivityListView(generics.ListAPIView):
    serializer_class = ActivitySerializer
    permission_classes = [IsAuthenticated]
    pagination_class = ActivityPagination

    def get_queryset(self):
        filters = ActivityFilterSerializer(data=self.request.query_params)
        filters.is_valid(raise_exception=True)
        return list_activities(
            user=self.request.user,
            user_id=filters.validated_data.get('user_id'),
            activity_type=filters.validated_data.get('activity_type'),
        )
