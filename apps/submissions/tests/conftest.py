import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.quests.models import Quest, QuestCategory


def _make_user(email, name, **extra):
    return User.objects.create_user(
        email=email,
        password='TestPass123!',
        display_name=name,
        **extra,
    )


def _link(a, b):
    a.partner = b
    a.save(update_fields=['partner'])
    b.partner = a
    b.save(update_fields=['partner'])


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
def admin(db):
    return _make_user('admin@example.com', 'Admin', role=UserRole.ADMIN)


@pytest.fixture
def partners(alice, bob):
    """Alice and Bob partnered with each other."""
    _link(alice, bob)
    return alice, bob


@pytest.fixture
def pair_quest(db):
    return Quest.objects.create(title='Sunrise photo', category=QuestCategory.PAIR, points=10)


@pytest.fixture
def group_quest(db):
    return Quest.objects.create(title='Team picnic', category=QuestCategory.MULTIPLE_PAIR, points=30)


@pytest.fixture
def bonus_quest(db):
    return Quest.objects.create(title='Bonus round', category=QuestCategory.BONUS, points=5)
