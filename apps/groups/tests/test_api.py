import pytest
import uuid
from django.urls import reverse
from rest_framework import status

from apps.groups.models import GroupSubmission, GroupParticipant
from apps.submissions.models import SubmissionStatus
from apps.submissions.services import create_submission


def group_url(group, name='groups:group-detail'):
    return reverse(name, kwargs={'pk': group.id})


# =============================================================================
# List / create
# =============================================================================

@pytest.mark.django_db
class TestGroupList:
    """Tests for GET /api/groups/"""

    def test_participant_sees_group(self, client_for, group, single):
        response = client_for(single).get(reverse('groups:group-list'))

        assert response.status_code == status.HTTP_200_OK
        assert [row['id'] for row in response.data['results']] == [str(group.id)]

    def test_outsider_sees_nothing(self, client_for, group, outsider):
        response = client_for(outsider).get(reverse('groups:group-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['results'] == []

    def test_unauthenticated(self, api_client):
        response = api_client.get(reverse('groups:group-list'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestGroupCreate:
    """Tests for POST /api/groups/"""

    def test_create(self, client_for, submitter, submission, group_quest, couple, single):
        first, second = couple
        data = {
            'quest_id': str(group_quest.id),
            'submission_id': str(submission.id),
            'participant_ids': [str(first.id), str(second.id), str(single.id)],
        }
        response = client_for(submitter).post(reverse('groups:group-list'), data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['submission_id'] == str(submission.id)
        assert response.data['represents_pairs'] == 3
        assert len(response.data['participants']) == 4

    def test_too_small(self, client_for, submitter, submission, group_quest, single):
        data = {
            'quest_id': str(group_quest.id),
            'submission_id': str(submission.id),
            'participant_ids': [str(single.id)],
        }
        response = client_for(submitter).post(reverse('groups:group-list'), data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['kind'] == 'invalid_argument'
        assert GroupSubmission.objects.count() == 0

    def test_wrong_category(self, client_for, submitter, pair_quest, single, outsider):
        own = create_submission(user=submitter, quest_id=pair_quest.id, proof_ref='x')
        data = {
            'quest_id': str(pair_quest.id),
            'submission_id': str(own.id),
            'participant_ids': [str(single.id), str(outsider.id)],
        }
        response = client_for(submitter).post(reverse('groups:group-list'), data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_second_group_conflicts(self, client_for, group, group_quest, outsider, single):
        own = create_submission(user=outsider, quest_id=group_quest.id, proof_ref='y')
        data = {
            'quest_id': str(group_quest.id),
            'submission_id': str(own.id),
            'participant_ids': [str(single.id), str(outsider.id)],
        }
        response = client_for(outsider).post(reverse('groups:group-list'), data, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['kind'] == 'conflict'


# =============================================================================
# Status
# =============================================================================

@pytest.mark.django_db
class TestGroupStatus:
    """Tests for GET /api/groups/{id}/"""

    def test_participant_view(self, client_for, group, single, submission):
        response = client_for(single).get(group_url(group))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['submission_id'] == str(submission.id)
        assert response.data['submission_status'] == SubmissionStatus.PENDING_REVIEW
        assert len(response.data['active']) == 4
        assert response.data['opted_out'] == []

    def test_outsider_forbidden(self, client_for, group, outsider):
        response = client_for(outsider).get(group_url(group))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_admin_can_view(self, client_for, group, admin):
        response = client_for(admin).get(group_url(group))
        assert response.status_code == status.HTTP_200_OK

    def test_unknown_group(self, client_for, single):
        url = reverse('groups:group-detail', kwargs={'pk': uuid.uuid4()})
        response = client_for(single).get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND


# =============================================================================
# Opt-out / opt-in
# =============================================================================

@pytest.mark.django_db
class TestOptOutEndpoint:
    """Tests for POST /api/groups/{id}/opt-out/ and /opt-in/"""

    def test_opt_out_with_partner(self, client_for, group, couple):
        first, second = couple
        response = client_for(first).post(group_url(group, 'groups:group-opt-out'))

        assert response.status_code == status.HTTP_200_OK
        changed = {row['user']['id'] for row in response.data['changed']}
        assert changed == {str(first.id), str(second.id)}
        assert 'partner' in response.data['message']
        assert GroupParticipant.objects.filter(group=group, opted_out=True).count() == 2

    def test_submitter_forbidden(self, client_for, group, submitter):
        response = client_for(submitter).post(group_url(group, 'groups:group-opt-out'))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['kind'] == 'forbidden'

    def test_non_participant_conflict(self, client_for, group, outsider):
        response = client_for(outsider).post(group_url(group, 'groups:group-opt-out'))

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_repeat_opt_out(self, client_for, group, single):
        client = client_for(single)
        client.post(group_url(group, 'groups:group-opt-out'))
        response = client.post(group_url(group, 'groups:group-opt-out'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['changed'] == []

    def test_opt_back_in(self, client_for, group, single):
        client = client_for(single)
        client.post(group_url(group, 'groups:group-opt-out'))
        response = client.post(group_url(group, 'groups:group-opt-in'))

        assert response.status_code == status.HTTP_200_OK
        assert [row['user']['id'] for row in response.data['changed']] == [str(single.id)]
        assert GroupParticipant.objects.get(group=group, user=single).opted_out is False
