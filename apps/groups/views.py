from rest_framework import mixins, viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from .models import GroupSubmission
from .serializers import (
    GroupSubmissionSerializer,
    GroupListSerializer,
    GroupCreateSerializer,
    GroupStatusSerializer,
    ParticipationChangeSerializer,
    opt_out_message,
)
from .permissions import IsGroupParticipant

from apps.groups.services import (
    create_group,
    group_status,
    groups_for_user,
    opt_out as opt_out_participant,
    opt_in as opt_in_participant,
)


class GroupPagination(PageNumberPagination):
    """Custom pagination for groups."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class GroupViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    ViewSet for group submissions.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Groups the user takes part in
    create: Wrap a submission into a group
    retrieve: Submission state and participant partition
    opt_out / opt_in: Caller-scoped participation changes
    """

    queryset = GroupSubmission.objects.all()
    serializer_class = GroupListSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = GroupPagination
    lookup_value_regex = '[0-9a-f-]{36}'

    def get_queryset(self):
        return groups_for_user(user=self.request.user)

    @extend_schema(
        request=GroupCreateSerializer,
        responses={201: GroupSubmissionSerializer},
        description="Create a group submission for a multiple-pair quest.",
        tags=['groups'],
    )
    def create(self, request, *args, **kwargs):
        serializer = GroupCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        group = create_group(
            quest_id=serializer.validated_data['quest_id'],
            submitter=request.user,
            submission_id=serializer.validated_data['submission_id'],
            participant_ids=serializer.validated_data['participant_ids'],
        )

        output_serializer = GroupSubmissionSerializer(
            GroupSubmission.objects
            .select_related('submission', 'submitter')
            .prefetch_related('participants__user')
            .get(id=group.id)
        )
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    @extend_schema(
        responses={200: GroupStatusSerializer},
        description="Wrapped submission state plus active and opted-out participants.",
        tags=['groups'],
    )
    def retrieve(self, request, pk=None):
        result = group_status(group_id=pk)
        self.check_object_permissions(request, result['group'])
        return Response(GroupStatusSerializer(result).data)

    def get_permissions(self):
        if self.action == 'retrieve':
            return [IsAuthenticated(), IsGroupParticipant()]
        return [IsAuthenticated()]

    @extend_schema(request=None, responses={200: ParticipationChangeSerializer}, tags=['groups'])
    @action(detail=True, methods=['post'], url_path='opt-out')
    def opt_out(self, request, pk=None):
        """Opt the caller (and their partner) out of the group."""
        changed = opt_out_participant(group_id=pk, user=request.user)
        return Response(ParticipationChangeSerializer({
            'changed': changed,
            'message': opt_out_message(changed),
        }).data)

    @extend_schema(request=None, responses={200: ParticipationChangeSerializer}, tags=['groups'])
    @action(detail=True, methods=['post'], url_path='opt-in')
    def opt_in(self, request, pk=None):
        """Opt the caller (and their partner) back into the group."""
        changed = opt_in_participant(group_id=pk, user=request.user)
        if not changed:
            message = 'You are already part of this group submission'
        else:
            message = 'You have been opted back into this group submission'
        return Response(ParticipationChangeSerializer({'changed': changed, 'message': message}).data)
