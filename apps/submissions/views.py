from rest_framework import mixins, viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, extend_schema_view

from apps.accounts.permissions import IsAdminRole
from apps.groups.serializers import ParticipationChangeSerializer, opt_out_message
from apps.groups.services import opt_out as opt_out_participant

from .models import Submission
from .serializers import (
    SubmissionSerializer,
    SubmissionCreateSerializer,
    SubmissionFilterSerializer,
    ReviewSerializer,
    EscalateSerializer,
    QuestStatusSerializer,
)
from .services import (
    create_submission,
    get_submission,
    visible_submissions,
    awaiting_decision,
    get_quest_status,
    review_submission,
    escalate_submission,
    delete_submission,
)

UUID_PATTERN = '[0-9a-f-]{36}'


class SubmissionPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


@extend_schema_view(
    list=extend_schema(parameters=[SubmissionFilterSerializer], tags=['submissions']),
    retrieve=extend_schema(tags=['submissions']),
)
class SubmissionViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for quest submissions.

    list: Submissions visible to the caller
    create: Submit proof for a quest
    retrieve: Submission detail
    destroy: Soft-delete (owner/admin) or opt out of a group submission
    review / escalate: Admin review workflow
    """

    queryset = Submission.objects.all()
    serializer_class = SubmissionSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = SubmissionPagination
    lookup_value_regex = UUID_PATTERN

    def get_queryset(self):
        if self.action == 'list':
            filters = SubmissionFilterSerializer(data=self.request.query_params)
            filters.is_valid(raise_exception=True)
            return visible_submissions(user=self.request.user, **filters.validated_data)
        return visible_submissions(user=self.request.user, include_deleted=True)

    def get_permissions(self):
        if self.action in ['review', 'escalate', 'review_queue']:
            return [IsAuthenticated(), IsAdminRole()]
        return [IsAuthenticated()]

    @extend_schema(
        request=SubmissionCreateSerializer,
        responses={201: SubmissionSerializer},
        description="Submit proof for a quest. Fails with 409 if the quest is already covered.",
        tags=['submissions'],
    )
    def create(self, request, *args, **kwargs):
        serializer = SubmissionCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        submission = create_submission(
            user=request.user,
            quest_id=serializer.validated_data['quest_id'],
            proof_ref=serializer.validated_data['proof_ref'],
        )
        return Response(SubmissionSerializer(submission).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        responses={204: None, 200: ParticipationChangeSerializer},
        description=(
            "Owners and admins soft-delete the submission. A co-participant of a "
            "group submission is opted out instead."
        ),
        tags=['submissions'],
    )
    def destroy(self, request, pk=None):
        submission = get_submission(submission_id=pk)

        if (
            submission.is_group_submission
            and submission.user_id != request.user.id
            and not request.user.is_admin
            and submission.group.has_participant(request.user)
        ):
            changed = opt_out_participant(group_id=submission.group.id, user=request.user)
            return Response(ParticipationChangeSerializer({
                'changed': changed,
                'message': opt_out_message(changed),
            }).data)

        delete_submission(submission_id=pk, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=ReviewSerializer, responses={200: SubmissionSerializer}, tags=['submissions'])
    @action(detail=True, methods=['post'])
    def review(self, request, pk=None):
        """Approve or reject a submission (admin only)."""
        serializer = ReviewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        submission = review_submission(
            submission_id=pk,
            reviewer=request.user,
            decision=serializer.validated_data['decision'],
            feedback=serializer.validated_data['feedback'],
        )
        return Response(SubmissionSerializer(submission).data)

    @extend_schema(request=EscalateSerializer, responses={200: SubmissionSerializer}, tags=['submissions'])
    @action(detail=True, methods=['post'])
    def escalate(self, request, pk=None):
        """Send a pending submission to manual review (admin / review pipeline)."""
        serializer = EscalateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        submission = escalate_submission(
            submission_id=pk,
            analysis=serializer.validated_data.get('analysis'),
        )
        return Response(SubmissionSerializer(submission).data)

    @extend_schema(responses={200: SubmissionSerializer(many=True)}, tags=['submissions'])
    @action(detail=False, methods=['get'], url_path='review-queue')
    def review_queue(self, request):
        """Submissions awaiting a decision, oldest first (admin only)."""
        filters = SubmissionFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        page = self.paginate_queryset(awaiting_decision(quest_id=filters.validated_data.get('quest_id')))
        serializer = SubmissionSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    @extend_schema(responses={200: QuestStatusSerializer}, tags=['submissions'])
    @action(detail=False, methods=['get'], url_path=f'quest-status/(?P<quest_id>{UUID_PATTERN})')
    def quest_status(self, request, quest_id=None):
        """Where the caller stands on a quest, counting partner and group credit."""
        result = get_quest_status(user=request.user, quest_id=quest_id)
        return Response(QuestStatusSerializer(result).data)
