import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole


def _make_user(email, name, **extra):
    return User.objects.create_user(
        email=email,
        password='TestPass123!',
        display_name=name,
        **extra,
    )


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
def alice(db):
    return _make_user('alice@example.com', 'Alice')


@pytest.fixture
def bob(db):
    return _make_user('bob@example.com', 'Bob')


@pytest.fixture
def carol(db):
    return _make_user('carol@example.com', 'Carol')


@pytest.fixture
def dave(db):
    return _make_user('dave@example.com', 'Dave')


@pytest.fixture
def admin(db):
    return _make_user('admin@example.com', 'Admin', role=UserRole.ADMIN)
