from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .projection import PointsProjection
from .serializers import (
    LeaderboardQuerySerializer,
    ParticipantStatsSerializer,
    LeaderboardEntrySerializer,
)


@extend_schema(
    responses={200: ParticipantStatsSerializer},
    description="Total points, rank and completed quest count of a participant.",
    tags=['stats'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def participant_stats(request, participant_id=None):
    """Participant points - thin HTTP handler."""
    # Use current user if no ID provided
    target_id = participant_id if participant_id is not None else request.user.id

    data = PointsProjection.participant_stats(user_id=target_id)
    return Response(ParticipantStatsSerializer(data).data)


@extend_schema(
    parameters=[LeaderboardQuerySerializer],
    responses={200: LeaderboardEntrySerializer(many=True)},
    description="Participants ordered by total points.",
    tags=['stats'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def leaderboard(request):
    query_serializer = LeaderboardQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)

    entries = PointsProjection.leaderboard(limit=query_serializer.validated_data['limit'])
    return Response(LeaderboardEntrySerializer(entries, many=True).data)
