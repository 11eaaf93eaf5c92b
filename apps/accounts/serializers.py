from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """Basic user serializer for profile display."""

    partner_id = serializers.UUIDField(read_only=True, allow_null=True)

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'display_name',
            'telegram_username',
            'role',
            'partner_id',
            'created_at',
            'last_login',
        ]
        read_only_fields = ['id', 'email', 'role', 'partner_id', 'created_at', 'last_login']


class UserRegistrationSerializer(serializers.Serializer):
    """Serializer for user registration."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        write_only=True,
        required=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    password_confirm = serializers.CharField(
        write_only=True,
        required=True,
        style={'input_type': 'password'}
    )
    display_name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    telegram_username = serializers.CharField(max_length=64, required=False, allow_blank=True)

    def validate(self, attrs):
        """Validate password confirmation."""
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError({
                'password_confirm': 'Passwords do not match'
            })
        return attrs


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class UserPublicSerializer(serializers.ModelSerializer):
    """Public user info (for displaying in groups, leaderboards, etc.)."""

    class Meta:
        model = User
        fields = ['id', 'display_name', 'telegram_username']
        read_only_fields = fields
