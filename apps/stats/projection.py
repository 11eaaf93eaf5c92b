"""
Points Projection
=================

Read-only totals derived from the submission ledger and group tables. There
is no stored points column anywhere: every read recomputes from the
approved, non-deleted submissions.

A participant is credited with a submission through one of three paths.
Each quest counts at most once per participant, even when two approved
submissions reach them for the same quest (one of their own and one from a
former partner, say):

    owner      the participant owns the submission
    partner    the owner's *current* partner, when ``visible_to_partner`` is set
    group      an active (not opted-out) participant of the wrapping group

Classes:
    PointsProjection: Static methods for participant totals and rankings.

Example:
    Getting a participant's standing::

        from apps.stats.projection import PointsProjection

        >>> PointsProjection.participant_stats(user_id=user.id)
        {'user_id': UUID('...'), 'total_points': 45, 'rank': 2, 'completed_quests': 3}

Note:
    The three credit paths are read with a single UNION statement, so a
    result never mixes two different committed states of the ledger.
"""

from collections import defaultdict

from django.db.models import F

from apps.accounts.models import User
from apps.accounts.services import UserNotFoundError
from apps.groups.models import GroupParticipant
from apps.submissions.models import Submission, SubmissionStatus


class PointsProjection:
    """
    Derived points view.

    Methods:
        credit_rows: Queryset of distinct (participant, quest, submission, points) rows.
        totals: Per-participant total points and completed quest count.
        participant_stats: Total, rank and completed count for one participant.
        leaderboard: Participants ordered by total points.

    Note:
        All methods return plain dictionaries or lists, suitable for JSON
        serialization in API responses.
    """

    @staticmethod
    def credit_rows():
        """
        Build the UNION of the three credit paths.

        UNION (not UNION ALL) drops duplicate rows, so a participant who is
        both owner and group member of the same submission is counted once.

        Returns:
            Values queryset of dicts with ``participant``, ``credited_quest``,
            ``credited_submission`` and ``points`` keys
        """
        owned = (
            Submission.objects.approved()
            .order_by()
            .values(
                participant=F('user_id'),
                credited_quest=F('quest_id'),
                credited_submission=F('id'),
                points=F('points_awarded'),
            )
        )
        via_partner = (
            Submission.objects.approved()
            .filter(visible_to_partner=True, user__partner__isnull=False)
            .order_by()
            .values(
                participant=F('user__partner'),
                credited_quest=F('quest_id'),
                credited_submission=F('id'),
                points=F('points_awarded'),
            )
        )
        via_group = (
            GroupParticipant.objects
            .filter(
                opted_out=False,
                group__submission__is_deleted=False,
                group__submission__status=SubmissionStatus.APPROVED,
            )
            .order_by()
            .values(
                participant=F('user_id'),
                credited_quest=F('group__quest'),
                credited_submission=F('group__submission'),
                points=F('group__submission__points_awarded'),
            )
        )
        return owned.union(via_partner, via_group)

    @staticmethod
    def totals():
        """
        Aggregate the credit rows per participant.

        Rows are first collapsed per (participant, quest), keeping the
        highest award, so a quest is never counted twice.

        Returns:
            dict: ``{user_id: {'total_points': int, 'completed_quests': int}}``
            for every participant with at least one credited submission
        """
        best = {}
        for row in PointsProjection.credit_rows():
            key = (row['participant'], row['credited_quest'])
            best[key] = max(best.get(key, 0), row['points'])

        result = defaultdict(lambda: {'total_points': 0, 'completed_quests': 0})
        for (participant, _), points in best.items():
            entry = result[participant]
            entry['total_points'] += points
            entry['completed_quests'] += 1
        return dict(result)

    @staticmethod
    def participant_stats(user_id):
        """
        Points, rank and completed quest count of one participant.

        Rank is 1 + the number of participants with a strictly greater
        total, so tied participants share a rank.

        Args:
            user_id: UUID of the participant

        Returns:
            dict: ``user_id``, ``total_points``, ``rank``, ``completed_quests``

        Raises:
            UserNotFoundError: If the user doesn't exist
        """
        if not User.objects.filter(id=user_id).exists():
            raise UserNotFoundError(f"User with ID {user_id} not found")

        totals = PointsProjection.totals()
        own = totals.get(user_id) or {'total_points': 0, 'completed_quests': 0}
        higher = sum(
            1 for entry in totals.values()
            if entry['total_points'] > own['total_points']
        )
        return {
            'user_id': user_id,
            'total_points': own['total_points'],
            'rank': higher + 1,
            'completed_quests': own['completed_quests'],
        }

    @staticmethod
    def leaderboard(limit=10):
        """
        Active participants ordered by total points.

        Participants without points are listed too (after everyone with
        points) so a fresh event still shows its roster.

        Args:
            limit: Maximum number of entries

        Returns:
            list: dicts with ``rank``, ``user_id``, ``display_name``,
            ``telegram_username``, ``total_points``, ``completed_quests``
        """
        totals = PointsProjection.totals()
        empty = {'total_points': 0, 'completed_quests': 0}

        participants = list(User.objects.participants().order_by('created_at'))
        participants.sort(
            key=lambda u: (
                -totals.get(u.id, empty)['total_points'],
                -totals.get(u.id, empty)['completed_quests'],
            )
        )

        all_totals = sorted((entry['total_points'] for entry in totals.values()), reverse=True)
        entries = []
        for user in participants[:limit]:
            own = totals.get(user.id, empty)
            higher = sum(1 for points in all_totals if points > own['total_points'])
            entries.append({
                'rank': higher + 1,
                'user_id': user.id,
                'display_name': user.get_display_name(),
                'telegram_username': user.telegram_username,
                'total_points': own['total_points'],
                'completed_quests': own['completed_quests'],
            })
        return entries
