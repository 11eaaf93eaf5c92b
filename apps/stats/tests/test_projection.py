import pytest
import uuid

from apps.accounts.services import UserNotFoundError
from apps.groups.services import create_group, opt_out, opt_in
from apps.partnerships.services import link_partners, unlink_partner
from apps.quests.models import QuestCategory
from apps.stats.projection import PointsProjection
from apps.submissions.services import create_submission, review_submission, delete_submission


def points(user):
    return PointsProjection.participant_stats(user_id=user.id)['total_points']


# =============================================================================
# Credit paths
# =============================================================================

@pytest.mark.django_db
class TestCreditPaths:

    def test_pair_quest_credits_both_partners(self, participants, make_quest, admin):
        p1, p2 = participants[:2]
        link_partners(user_id=p1.id, partner_id=p2.id)
        quest = make_quest(category=QuestCategory.PAIR, points=20)

        submission = create_submission(user=p1, quest_id=quest.id, proof_ref='proof')
        assert points(p1) == 0
        assert points(p2) == 0

        review_submission(submission_id=submission.id, reviewer=admin, decision='approve')

        assert points(p1) == 20
        assert points(p2) == 20
        assert PointsProjection.participant_stats(user_id=p2.id)['completed_quests'] == 1

    def test_bonus_quest_credits_owner_only(self, participants, make_quest, approve):
        p1, p2 = participants[:2]
        link_partners(user_id=p1.id, partner_id=p2.id)

        approve(p1, make_quest(category=QuestCategory.BONUS, points=7))

        assert points(p1) == 7
        assert points(p2) == 0

    def test_partner_credit_follows_current_partner(self, participants, make_quest, approve):
        p1, p2, p3 = participants[:3]
        link_partners(user_id=p1.id, partner_id=p2.id)
        approve(p1, make_quest(points=20))

        unlink_partner(user_id=p1.id)
        assert points(p2) == 0

        link_partners(user_id=p1.id, partner_id=p3.id)
        assert points(p3) == 20

    def test_same_quest_from_two_submissions_counts_once(self, participants, make_quest, approve):
        p1, p2 = participants[:2]
        link_partners(user_id=p1.id, partner_id=p2.id)
        quest = make_quest(category=QuestCategory.PAIR, points=20)
        approve(p1, quest)

        unlink_partner(user_id=p1.id)
        approve(p2, quest)
        link_partners(user_id=p1.id, partner_id=p2.id)

        for user in (p1, p2):
            stats = PointsProjection.participant_stats(user_id=user.id)
            assert stats['total_points'] == 20
            assert stats['completed_quests'] == 1

    def test_rejected_and_pending_award_nothing(self, participants, make_quest, admin):
        p1 = participants[0]
        pending = make_quest(category=QuestCategory.BONUS, points=5, title='Pending')
        rejected = make_quest(category=QuestCategory.BONUS, points=9, title='Rejected')

        create_submission(user=p1, quest_id=pending.id, proof_ref='a')
        submission = create_submission(user=p1, quest_id=rejected.id, proof_ref='b')
        review_submission(submission_id=submission.id, reviewer=admin, decision='reject')

        assert points(p1) == 0

    def test_deleted_submission_stops_counting(self, participants, make_quest, approve):
        p1, p2 = participants[:2]
        link_partners(user_id=p1.id, partner_id=p2.id)
        submission = approve(p1, make_quest(points=20))

        delete_submission(submission_id=submission.id, user=p1)

        assert points(p1) == 0
        assert points(p2) == 0


@pytest.mark.django_db
class TestGroupCredit:

    @pytest.fixture
    def group_setup(self, participants, make_quest):
        """Submitter p1 with p2, p3+p4 (partners) as group participants."""
        p1, p2, p3, p4 = participants[:4]
        link_partners(user_id=p1.id, partner_id=p2.id)
        link_partners(user_id=p3.id, partner_id=p4.id)
        quest = make_quest(category=QuestCategory.MULTIPLE_PAIR, points=30)
        submission = create_submission(user=p1, quest_id=quest.id, proof_ref='group')
        group = create_group(
            quest_id=quest.id,
            submitter=p1,
            submission_id=submission.id,
            participant_ids=[p1.id, p2.id, p3.id, p4.id],
        )
        return group, submission

    def test_opted_out_pair_gets_nothing(self, group_setup, participants, admin):
        group, submission = group_setup
        p1, p2, p3, p4 = participants[:4]

        opt_out(group_id=group.id, user=p3)
        review_submission(submission_id=submission.id, reviewer=admin, decision='approve')

        assert [points(p) for p in (p1, p2, p3, p4)] == [30, 30, 0, 0]

    def test_submitter_counted_once(self, group_setup, participants, admin):
        _, submission = group_setup
        review_submission(submission_id=submission.id, reviewer=admin, decision='approve')

        stats = PointsProjection.participant_stats(user_id=participants[0].id)
        assert stats['total_points'] == 30
        assert stats['completed_quests'] == 1

    def test_opt_in_after_approval_restores_credit(self, group_setup, participants, admin):
        group, submission = group_setup
        p3 = participants[2]
        opt_out(group_id=group.id, user=p3)
        review_submission(submission_id=submission.id, reviewer=admin, decision='approve')

        opt_in(group_id=group.id, user=p3)

        assert points(p3) == 30

    def test_deleted_group_submission_credits_nobody(self, group_setup, participants, admin):
        _, submission = group_setup
        review_submission(submission_id=submission.id, reviewer=admin, decision='approve')
        delete_submission(submission_id=submission.id, user=admin)

        assert all(points(p) == 0 for p in participants[:4])


# =============================================================================
# Ranking
# =============================================================================

@pytest.mark.django_db
class TestRanking:

    def test_unknown_user(self):
        with pytest.raises(UserNotFoundError):
            PointsProjection.participant_stats(user_id=uuid.uuid4())

    def test_ties_share_rank(self, participants, make_quest, approve):
        p1, p2, p3 = participants[:3]
        approve(p1, make_quest(category=QuestCategory.BONUS, points=10, title='A'))
        approve(p2, make_quest(category=QuestCategory.BONUS, points=10, title='B'))
        approve(p3, make_quest(category=QuestCategory.BONUS, points=5, title='C'))

        assert PointsProjection.participant_stats(user_id=p1.id)['rank'] == 1
        assert PointsProjection.participant_stats(user_id=p2.id)['rank'] == 1
        assert PointsProjection.participant_stats(user_id=p3.id)['rank'] == 3
        # nobody without points outranks anybody
        assert PointsProjection.participant_stats(user_id=participants[5].id)['rank'] == 4

    def test_leaderboard_order_and_limit(self, participants, make_quest, approve):
        p1, p2 = participants[:2]
        approve(p2, make_quest(category=QuestCategory.BONUS, points=15, title='A'))
        approve(p1, make_quest(category=QuestCategory.BONUS, points=5, title='B'))

        board = PointsProjection.leaderboard(limit=3)

        assert len(board) == 3
        assert [entry['user_id'] for entry in board[:2]] == [p2.id, p1.id]
        assert [entry['rank'] for entry in board] == [1, 2, 3]
        assert board[2]['total_points'] == 0

    def test_leaderboard_skips_admins(self, participants, admin):
        board = PointsProjection.leaderboard(limit=100)
        assert admin.id not in {entry['user_id'] for entry in board}
        assert len(board) == len(participants)

    def test_leaderboard_matches_participant_stats(self, participants, make_quest, approve):
        p1, p2 = participants[:2]
        link_partners(user_id=p1.id, partner_id=p2.id)
        approve(p1, make_quest(points=20))

        for entry in PointsProjection.leaderboard(limit=100):
            stats = PointsProjection.participant_stats(user_id=entry['user_id'])
            assert entry['total_points'] == stats['total_points']
            assert entry['rank'] == stats['rank']
