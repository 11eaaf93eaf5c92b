from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import IsAdminRole
from apps.accounts.services import get_user_by_id

from .serializers import (
    LinkRequestSerializer,
    AdminLinkSerializer,
    AdminUnlinkSerializer,
    PartnershipSerializer,
    ForceChangeResponseSerializer,
)
from .services import link_partners, unlink_partner, force_change_partner


def _partnership(user_id):
    return PartnershipSerializer(get_user_by_id(user_id=user_id)).data


@extend_schema(
    methods=['GET'],
    responses={200: PartnershipSerializer},
    description="Current partner of the caller.",
    tags=['partnerships'],
)
@extend_schema(
    methods=['POST'],
    request=LinkRequestSerializer,
    responses={201: PartnershipSerializer},
    description="Partner the caller with another participant. 400 if either is already partnered.",
    tags=['partnerships'],
)
@extend_schema(
    methods=['DELETE'],
    request=None,
    responses={204: None},
    description="Dissolve the caller's partnership. 400 if the caller has no partner.",
    tags=['partnerships'],
)
@api_view(['GET', 'POST', 'DELETE'])
@permission_classes([IsAuthenticated])
def my_partnership(request):
    """Caller-scoped partnership link / unlink."""
    if request.method == 'POST':
        serializer = LinkRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        link_partners(user_id=request.user.id, partner_id=serializer.validated_data['target_id'])
        return Response(_partnership(request.user.id), status=status.HTTP_201_CREATED)

    if request.method == 'DELETE':
        unlink_partner(user_id=request.user.id)
        return Response(status=status.HTTP_204_NO_CONTENT)

    return Response(_partnership(request.user.id))


@extend_schema(
    request=AdminLinkSerializer,
    responses={201: PartnershipSerializer},
    description="Link two participants (admin only).",
    tags=['partnerships'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_link(request):
    serializer = AdminLinkSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    link_partners(
        user_id=serializer.validated_data['user_id'],
        partner_id=serializer.validated_data['partner_id'],
        performed_by=request.user,
    )
    return Response(
        _partnership(serializer.validated_data['user_id']),
        status=status.HTTP_201_CREATED,
    )


@extend_schema(
    request=AdminUnlinkSerializer,
    responses={200: PartnershipSerializer},
    description="Dissolve a participant's partnership (admin only).",
    tags=['partnerships'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_unlink(request):
    serializer = AdminUnlinkSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    unlink_partner(user_id=serializer.validated_data['user_id'], performed_by=request.user)
    return Response(_partnership(serializer.validated_data['user_id']))


@extend_schema(
    request=AdminLinkSerializer,
    responses={200: ForceChangeResponseSerializer},
    description="Partner two participants, breaking their existing partnerships (admin only).",
    tags=['partnerships'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_force_change(request):
    serializer = AdminLinkSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    broken = force_change_partner(
        user_id=serializer.validated_data['user_id'],
        partner_id=serializer.validated_data['partner_id'],
        performed_by=request.user,
    )
    message = (
        f"Partnership created, {len(broken)} existing partnership(s) broken"
        if broken else "Partnership created"
    )
    return Response(ForceChangeResponseSerializer({
        'message': message,
        'partnership': get_user_by_id(user_id=serializer.validated_data['user_id']),
        'broken': broken,
    }).data)
