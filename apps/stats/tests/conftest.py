import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.quests.models import Quest, QuestCategory
from apps.submissions.services import create_submission, review_submission


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
def participants(db):
    """Participants p1..p6, created in order."""
    return [
        User.objects.create_user(
            email=f'p{index}@example.com',
            password='TestPass123!',
            display_name=f'Participant {index}',
        )
        for index in range(1, 7)
    ]


@pytest.fixture
def admin(db):
    return User.objects.create_user(
        email='admin@example.com',
        password='TestPass123!',
        display_name='Admin',
        role=UserRole.ADMIN,
    )


@pytest.fixture
def make_quest(db):
    def make(category=QuestCategory.PAIR, points=20, title='Quest'):
        return Quest.objects.create(title=title, category=category, points=points)
    return make


@pytest.fixture
def approve(admin):
    """Submit ``quest`` as ``user`` and approve it; returns the submission."""
    def submit_and_approve(user, quest):
        submission = create_submission(user=user, quest_id=quest.id, proof_ref='proof')
        return review_submission(submission_id=submission.id, reviewer=admin, decision='approve')
    return submit_and_approve
