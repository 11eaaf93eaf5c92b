import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.groups.services import create_group
from apps.quests.models import Quest, QuestCategory
from apps.submissions.services import create_submission


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
def make_users(db):
    """Create ``count`` unpartnered participants."""
    def make(count, prefix='member'):
        return [
            _make_user(f'{prefix}{index}@example.com', f'{prefix.title()} {index}')
            for index in range(count)
        ]
    return make


@pytest.fixture
def submitter(db):
    return _make_user('submitter@example.com', 'Submitter')


@pytest.fixture
def submitter_partner(submitter):
    partner = _make_user('submitter.partner@example.com', 'Submitter Partner')
    _link(submitter, partner)
    return partner


@pytest.fixture
def couple(db):
    """Two partnered participants (not the submitter)."""
    first = _make_user('first@example.com', 'First')
    second = _make_user('second@example.com', 'Second')
    _link(first, second)
    return first, second


@pytest.fixture
def single(db):
    return _make_user('single@example.com', 'Single')


@pytest.fixture
def outsider(db):
    return _make_user('outsider@example.com', 'Outsider')


@pytest.fixture
def admin(db):
    return _make_user('admin@example.com', 'Admin', role=UserRole.ADMIN)


@pytest.fixture
def group_quest(db):
    return Quest.objects.create(title='Team picnic', category=QuestCategory.MULTIPLE_PAIR, points=30)


@pytest.fixture
def pair_quest(db):
    return Quest.objects.create(title='Sunrise photo', category=QuestCategory.PAIR, points=10)


@pytest.fixture
def submission(submitter, group_quest):
    """The submitter's pending submission for the group quest."""
    return create_submission(user=submitter, quest_id=group_quest.id, proof_ref='group-photo')


@pytest.fixture
def group(submitter, submission, group_quest, couple, single):
    """Group of the submitter, a couple and a single participant."""
    first, second = couple
    return create_group(
        quest_id=group_quest.id,
        submitter=submitter,
        submission_id=submission.id,
        participant_ids=[first.id, second.id, single.id],
    )
