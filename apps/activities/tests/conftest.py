import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def client_for():
    """Return a factory building a JWT-authenticated client for a user."""
    def make(user):
        client = APIClient()
        refresh = RefreshToken.for_user(user)
        client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
        return client
    return make


@pytest.fixture
def user(db):
    return User.objects.create_user(email='user@example.com', password='TestPass123!', display_name='User')


@pytest.fixture
def other_user(db):
    return User.objects.create_user(email='other@example.com', password='TestPass123!', display_name='Other')


@pytest.fixture
def admin(db):
    return User.objects.create_user(
        email='admin@example.com',
        password='TestPass123!',
        display_name='Admin',
        role=UserRole.ADMIN,
    )
