import pytest
from datetime import timedelta
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.quests.models import Quest, QuestCategory, QuestStatus


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def user(db):
    return User.objects.create_user(
        email='testuser@example.com',
        password='TestPass123!',
        display_name='Test User',
    )


@pytest.fixture
def authenticated_client(api_client, user):
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def pair_quest(db):
    return Quest.objects.create(title='Sunrise photo', category=QuestCategory.PAIR, points=10)


@pytest.fixture
def group_quest(db):
    return Quest.objects.create(title='Team picnic', category=QuestCategory.MULTIPLE_PAIR, points=30)


@pytest.fixture
def expired_quest(db):
    return Quest.objects.create(
        title='Yesterday',
        category=QuestCategory.BONUS,
        points=5,
        expires_at=timezone.now() - timedelta(hours=1),
    )


@pytest.fixture
def inactive_quest(db):
    return Quest.objects.create(
        title='Paused',
        category=QuestCategory.PAIR,
        points=5,
        status=QuestStatus.INACTIVE,
    )
