"""
Groups app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and concurrency protection.
"""

from .exceptions import (
    GroupsServiceError,
    GroupNotFoundError,
    GroupAlreadyExistsError,
    GroupSizeError,
    ParticipantAlreadySubmittedError,
    NotParticipantError,
    SubmitterCannotOptOutError,
    GroupClosedError,
)

from .group_management import (
    create_group,
    count_represented_pairs,
    get_group_by_id,
    group_status,
    groups_for_user,
)

from .membership_management import (
    opt_out,
    opt_in,
)


__all__ = [
    # Exceptions
    'GroupsServiceError',
    'GroupNotFoundError',
    'GroupAlreadyExistsError',
    'GroupSizeError',
    'ParticipantAlreadySubmittedError',
    'NotParticipantError',
    'SubmitterCannotOptOutError',
    'GroupClosedError',

    # Group Management
    'create_group',
    'count_represented_pairs',
    'get_group_by_id',
    'group_status',
    'groups_for_user',

    # Membership Management
    'opt_out',
    'opt_in',
]
