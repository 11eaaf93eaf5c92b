import pytest
import uuid

from apps.accounts.services import UserNotFoundError
from apps.activities.models import Activity, ActivityType
from apps.groups.models import GroupSubmission, GroupParticipant, MAX_GROUP_SIZE
from apps.groups.services import (
    count_represented_pairs,
    create_group,
    group_status,
    groups_for_user,
    opt_out,
    opt_in,
    GroupNotFoundError,
    GroupAlreadyExistsError,
    GroupSizeError,
    ParticipantAlreadySubmittedError,
    NotParticipantError,
    SubmitterCannotOptOutError,
    GroupClosedError,
)
from apps.partnerships.services import unlink_partner
from apps.quests.services import WrongQuestCategoryError
from apps.submissions.models import SubmissionStatus
from apps.submissions.services import (
    create_submission,
    delete_submission,
    review_submission,
    escalate_submission,
    SubmissionNotFoundError,
)


def _participants(group):
    return {row.user_id: row for row in GroupParticipant.objects.filter(group=group)}


# =============================================================================
# Group creation
# =============================================================================

@pytest.mark.django_db
class TestCreateGroup:

    def test_create_includes_submitter(self, group, submitter, couple, single):
        rows = _participants(group)

        assert set(rows) == {submitter.id, couple[0].id, couple[1].id, single.id}
        assert not any(row.opted_out for row in rows.values())
        assert rows[couple[0].id].partner_id == couple[1].id
        assert rows[single.id].partner_id is None

    def test_submission_flags(self, group, submission):
        submission.refresh_from_db()

        assert submission.is_group_submission is True
        assert submission.visible_to_partner is False
        # submitter, the couple and the single each count once
        assert submission.represents_pairs == 3

    def test_activity_for_every_participant(self, group):
        assert Activity.objects.filter(
            activity_type=ActivityType.GROUP_SUBMISSION_CREATED
        ).count() == 4

    def test_identical_retry_returns_existing(self, group, submitter, submission, group_quest, couple, single):
        again = create_group(
            quest_id=group_quest.id,
            submitter=submitter,
            submission_id=submission.id,
            participant_ids=[couple[0].id, couple[1].id, single.id],
        )
        assert again.id == group.id
        assert GroupSubmission.objects.count() == 1

    def test_duplicate_participants_are_ignored(self, submitter, submission, group_quest, single, outsider):
        group = create_group(
            quest_id=group_quest.id,
            submitter=submitter,
            submission_id=submission.id,
            participant_ids=[single.id, single.id, outsider.id],
        )
        assert len(_participants(group)) == 3

    def test_one_participant_rejected(self, submitter, submission, group_quest, single):
        with pytest.raises(GroupSizeError):
            create_group(
                quest_id=group_quest.id,
                submitter=submitter,
                submission_id=submission.id,
                participant_ids=[single.id],
            )
        assert GroupSubmission.objects.count() == 0

    def test_two_participants_accepted(self, submitter, submission, group_quest, single):
        group = create_group(
            quest_id=group_quest.id,
            submitter=submitter,
            submission_id=submission.id,
            participant_ids=[submitter.id, single.id],
        )
        assert len(_participants(group)) == 2

    def test_ten_participants_accepted(self, submitter, submission, group_quest, make_users):
        others = make_users(MAX_GROUP_SIZE - 1)
        group = create_group(
            quest_id=group_quest.id,
            submitter=submitter,
            submission_id=submission.id,
            participant_ids=[submitter.id] + [user.id for user in others],
        )
        assert len(_participants(group)) == MAX_GROUP_SIZE

    def test_eleven_participants_rejected(self, submitter, submission, group_quest, make_users):
        others = make_users(MAX_GROUP_SIZE + 1)
        with pytest.raises(GroupSizeError):
            create_group(
                quest_id=group_quest.id,
                submitter=submitter,
                submission_id=submission.id,
                participant_ids=[user.id for user in others],
            )

    def test_ten_others_plus_submitter_rejected(self, submitter, submission, group_quest, make_users):
        others = make_users(MAX_GROUP_SIZE)
        with pytest.raises(GroupSizeError):
            create_group(
                quest_id=group_quest.id,
                submitter=submitter,
                submission_id=submission.id,
                participant_ids=[user.id for user in others],
            )

    def test_wrong_category(self, submitter, pair_quest, single, outsider):
        submission = create_submission(user=submitter, quest_id=pair_quest.id, proof_ref='x')
        with pytest.raises(WrongQuestCategoryError):
            create_group(
                quest_id=pair_quest.id,
                submitter=submitter,
                submission_id=submission.id,
                participant_ids=[single.id, outsider.id],
            )

    def test_someone_elses_submission(self, submission, group_quest, single, outsider):
        with pytest.raises(SubmissionNotFoundError):
            create_group(
                quest_id=group_quest.id,
                submitter=single,
                submission_id=submission.id,
                participant_ids=[outsider.id, single.id],
            )

    @pytest.mark.parametrize('decision', ['approve', 'reject'])
    def test_reviewed_submission_cannot_be_wrapped(
        self, submitter, submission, group_quest, single, outsider, admin, decision
    ):
        review_submission(submission_id=submission.id, reviewer=admin, decision=decision)

        with pytest.raises(GroupClosedError):
            create_group(
                quest_id=group_quest.id,
                submitter=submitter,
                submission_id=submission.id,
                participant_ids=[single.id, outsider.id],
            )
        assert GroupSubmission.objects.count() == 0
        assert not GroupParticipant.objects.filter(user=single).exists()

    def test_escalated_submission_can_be_wrapped(self, submitter, submission, group_quest, single, outsider):
        escalate_submission(submission_id=submission.id)

        group = create_group(
            quest_id=group_quest.id,
            submitter=submitter,
            submission_id=submission.id,
            participant_ids=[single.id, outsider.id],
        )
        assert len(_participants(group)) == 3

    def test_second_group_for_quest(self, group, group_quest, outsider, single):
        own = create_submission(user=outsider, quest_id=group_quest.id, proof_ref='y')
        with pytest.raises(GroupAlreadyExistsError):
            create_group(
                quest_id=group_quest.id,
                submitter=outsider,
                submission_id=own.id,
                participant_ids=[outsider.id, single.id],
            )

    def test_participant_with_own_submission(self, submitter, submission, group_quest, single, outsider):
        create_submission(user=outsider, quest_id=group_quest.id, proof_ref='y')
        with pytest.raises(ParticipantAlreadySubmittedError):
            create_group(
                quest_id=group_quest.id,
                submitter=submitter,
                submission_id=submission.id,
                participant_ids=[single.id, outsider.id],
            )

    def test_unknown_participant(self, submitter, submission, group_quest, single):
        with pytest.raises(UserNotFoundError):
            create_group(
                quest_id=group_quest.id,
                submitter=submitter,
                submission_id=submission.id,
                participant_ids=[single.id, uuid.uuid4()],
            )


def test_count_represented_pairs_counts_partners_once(db, couple, single):
    first, second = couple
    assert count_represented_pairs([first, second, single]) == 2
    assert count_represented_pairs([first, single]) == 2
    assert count_represented_pairs([]) == 0


# =============================================================================
# Opt-out / opt-in
# =============================================================================

@pytest.mark.django_db
class TestOptOut:

    def test_single_opts_out(self, group, single):
        changed = opt_out(group_id=group.id, user=single)

        assert [row.user_id for row in changed] == [single.id]
        assert _participants(group)[single.id].opted_out is True
        assert _participants(group)[single.id].opted_out_at is not None

    def test_partner_cascades(self, group, couple):
        first, second = couple

        changed = opt_out(group_id=group.id, user=first)

        assert {row.user_id for row in changed} == {first.id, second.id}
        rows = _participants(group)
        assert rows[first.id].opted_out is True
        assert rows[second.id].opted_out is True
        assert Activity.objects.filter(
            activity_type=ActivityType.GROUP_SUBMISSION_OPTED_OUT
        ).count() == 2

    def test_cascade_uses_partner_recorded_at_creation(self, group, couple):
        first, second = couple
        unlink_partner(user_id=first.id)

        changed = opt_out(group_id=group.id, user=first)

        assert {row.user_id for row in changed} == {first.id, second.id}

    def test_submitter_cannot_opt_out(self, group, submitter):
        with pytest.raises(SubmitterCannotOptOutError):
            opt_out(group_id=group.id, user=submitter)
        assert _participants(group)[submitter.id].opted_out is False

    def test_submitters_partner_cannot_opt_out(self, submitter, submitter_partner, group_quest, single):
        submission = create_submission(user=submitter, quest_id=group_quest.id, proof_ref='z')
        group = create_group(
            quest_id=group_quest.id,
            submitter=submitter,
            submission_id=submission.id,
            participant_ids=[submitter_partner.id, single.id],
        )

        with pytest.raises(SubmitterCannotOptOutError):
            opt_out(group_id=group.id, user=submitter_partner)
        assert not any(row.opted_out for row in _participants(group).values())

    def test_already_opted_out_is_noop(self, group, single):
        opt_out(group_id=group.id, user=single)
        assert opt_out(group_id=group.id, user=single) == []

    def test_not_participant(self, group, outsider):
        with pytest.raises(NotParticipantError):
            opt_out(group_id=group.id, user=outsider)

    def test_unknown_group(self, single):
        with pytest.raises(GroupNotFoundError):
            opt_out(group_id=uuid.uuid4(), user=single)

    def test_after_approval(self, group, submission, single, admin):
        review_submission(submission_id=submission.id, reviewer=admin, decision='approve')
        with pytest.raises(GroupClosedError):
            opt_out(group_id=group.id, user=single)

    def test_after_deletion_everyone_else_is_out(self, group, submission, submitter, single):
        delete_submission(submission_id=submission.id, user=submitter)
        # already opted out by the deletion
        assert opt_out(group_id=group.id, user=single) == []


@pytest.mark.django_db
class TestOptIn:

    def test_opt_back_in_with_partner(self, group, couple):
        first, second = couple
        opt_out(group_id=group.id, user=first)

        changed = opt_in(group_id=group.id, user=second)

        assert {row.user_id for row in changed} == {first.id, second.id}
        rows = _participants(group)
        assert rows[first.id].opted_out is False
        assert rows[second.id].opted_out_at is None

    def test_already_in_is_noop(self, group, single):
        assert opt_in(group_id=group.id, user=single) == []

    def test_rejected_submission(self, group, submission, single, admin):
        opt_out(group_id=group.id, user=single)
        review_submission(submission_id=submission.id, reviewer=admin, decision='reject')

        with pytest.raises(GroupClosedError):
            opt_in(group_id=group.id, user=single)

    def test_deleted_submission(self, group, submission, submitter, single):
        delete_submission(submission_id=submission.id, user=submitter)
        with pytest.raises(GroupClosedError):
            opt_in(group_id=group.id, user=single)

    def test_approved_submission_allows_opt_in(self, group, submission, single, admin):
        opt_out(group_id=group.id, user=single)
        review_submission(submission_id=submission.id, reviewer=admin, decision='approve')

        changed = opt_in(group_id=group.id, user=single)
        assert [row.user_id for row in changed] == [single.id]


# =============================================================================
# Queries
# =============================================================================

@pytest.mark.django_db
class TestGroupQueries:

    def test_status_partitions_participants(self, group, single, submission):
        opt_out(group_id=group.id, user=single)

        result = group_status(group_id=group.id)

        assert result['submission'].id == submission.id
        assert result['submission'].status == SubmissionStatus.PENDING_REVIEW
        assert {row.user_id for row in result['opted_out']} == {single.id}
        assert len(result['active']) == 3

    def test_groups_for_user(self, group, single, outsider, admin):
        assert list(groups_for_user(user=single)) == [group]
        assert list(groups_for_user(user=outsider)) == []
        assert list(groups_for_user(user=admin)) == [group]
