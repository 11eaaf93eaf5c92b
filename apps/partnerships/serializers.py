from rest_framework import serializers

from apps.accounts.serializers import UserPublicSerializer


class LinkRequestSerializer(serializers.Serializer):
    target_id = serializers.UUIDField(help_text="User to partner with")


class AdminLinkSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    partner_id = serializers.UUIDField()


class AdminUnlinkSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()


class PartnershipSerializer(serializers.Serializer):
    """The caller's (or a given user's) current partner."""

    user_id = serializers.UUIDField(source='id')
    partner = UserPublicSerializer(allow_null=True)


class BrokenPartnershipSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    old_partner_id = serializers.UUIDField()


class ForceChangeResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    partnership = PartnershipSerializer()
    broken = BrokenPartnershipSerializer(many=True)
