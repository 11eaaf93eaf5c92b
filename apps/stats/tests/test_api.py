import pytest
import uuid
from django.urls import reverse
from rest_framework import status

from apps.quests.models import QuestCategory


@pytest.mark.django_db
class TestParticipantStats:
    """Tests for GET /api/stats/me/ and /api/stats/{id}/"""

    def test_my_stats(self, client_for, participants, make_quest, approve):
        p1 = participants[0]
        approve(p1, make_quest(category=QuestCategory.BONUS, points=12))

        response = client_for(p1).get(reverse('stats:my-stats'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {
            'user_id': str(p1.id),
            'total_points': 12,
            'rank': 1,
            'completed_quests': 1,
        }

    def test_stats_by_id(self, client_for, participants):
        p1, p2 = participants[:2]
        url = reverse('stats:participant-stats', args=[p2.id])
        response = client_for(p1).get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user_id'] == str(p2.id)
        assert response.data['total_points'] == 0

    def test_unknown_participant(self, client_for, participants):
        url = reverse('stats:participant-stats', args=[uuid.uuid4()])
        response = client_for(participants[0]).get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['kind'] == 'not_found'

    def test_unauthenticated(self, api_client):
        response = api_client.get(reverse('stats:my-stats'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestLeaderboard:
    """Tests for GET /api/stats/leaderboard/"""

    def test_leaderboard(self, client_for, participants, make_quest, approve):
        p1 = participants[0]
        approve(p1, make_quest(category=QuestCategory.BONUS, points=12))

        response = client_for(p1).get(reverse('stats:leaderboard'), {'limit': 2})

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 2
        assert response.data[0]['user_id'] == str(p1.id)
        assert response.data[0]['display_name'] == 'Participant 1'
        assert response.data[0]['total_points'] == 12

    def test_default_limit(self, client_for, participants, settings):
        settings.LEADERBOARD_DEFAULT_LIMIT = 4
        response = client_for(participants[0]).get(reverse('stats:leaderboard'))

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 4

    def test_invalid_limit(self, client_for, participants):
        response = client_for(participants[0]).get(reverse('stats:leaderboard'), {'limit': 0})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'limit' in response.data['fields']
