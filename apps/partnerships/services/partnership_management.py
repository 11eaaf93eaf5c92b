"""
Partnership management service.

A partnership is the pair of reciprocal ``User.partner`` references. Every
change rewrites both sides inside one transaction with the affected user
rows locked, so no reader ever sees a one-sided partnership.
"""

from typing import List, Optional
from uuid import UUID

import structlog
from django.db import transaction, IntegrityError
from django.utils import timezone

from apps.accounts.models import User
from apps.accounts.services import lock_users
from apps.activities.models import ActivityType
from apps.activities.services import record_activities

from .exceptions import SelfPartnershipError, AlreadyPartneredError, NoPartnerError

logger = structlog.get_logger(__name__)

# A force change touches at most the pair and each side's old partner
_MAX_LOCK_ROUNDS = 3


def _lock_with_partners(user_ids) -> dict:
    """
    Lock the given users together with whoever they are currently partnered to.

    The partner closure is read without locks first and then locked with a
    single ``lock_users`` call, so every transaction takes its row locks in
    id order. Only a partner that changed between the read and the lock
    costs an extra, out-of-order round.
    """
    wanted = {UUID(str(user_id)) for user_id in user_ids}
    for _ in range(_MAX_LOCK_ROUNDS):
        partners = set(
            User.objects.filter(id__in=wanted, partner__isnull=False)
            .values_list('partner_id', flat=True)
        )
        if partners <= wanted:
            break
        wanted |= partners

    users = lock_users(user_ids=wanted)
    for _ in range(_MAX_LOCK_ROUNDS):
        missing = {
            user.partner_id for user in users.values()
            if user.partner_id and user.partner_id not in users
        }
        if not missing:
            break
        users.update(lock_users(user_ids=missing))
    return users


def _set_partner(user: User, partner: Optional[User], now) -> None:
    user.partner = partner
    user.updated_at = now
    user.save(update_fields=['partner', 'updated_at'])


@transaction.atomic
def link_partners(
    *,
    user_id: UUID,
    partner_id: UUID,
    performed_by: Optional[User] = None
) -> User:
    """
    Make two unpartnered users partners of each other.

    Linking users who are already partnered to each other is a no-op, and a
    half-written link (only one side set) is completed rather than refused.

    Args:
        user_id: First user
        partner_id: Second user
        performed_by: Admin acting on their behalf (defaults to ``user``)

    Returns:
        The first user, with ``partner`` set

    Raises:
        SelfPartnershipError: If both ids are the same user
        UserNotFoundError: If either user doesn't exist
        AlreadyPartneredError: If either user has a different partner
    """
    if str(user_id) == str(partner_id):
        raise SelfPartnershipError("You cannot partner with yourself")

    users = lock_users(user_ids=[user_id, partner_id])
    user = users[UUID(str(user_id))]
    partner = users[UUID(str(partner_id))]

    if user.partner_id == partner.id and partner.partner_id == user.id:
        return user

    if user.partner_id not in (None, partner.id):
        raise AlreadyPartneredError("You already have a partner", user_id=str(user.id))
    if partner.partner_id not in (None, user.id):
        raise AlreadyPartneredError("That user already has a partner", user_id=str(partner.id))

    now = timezone.now()
    try:
        with transaction.atomic():
            if user.partner_id != partner.id:
                _set_partner(user, partner, now)
            if partner.partner_id != user.id:
                _set_partner(partner, user, now)
    except IntegrityError:
        raise AlreadyPartneredError("One of the users is already partnered")

    actor = performed_by or user
    record_activities([
        {
            'user': user,
            'activity_type': ActivityType.PARTNERSHIP_CREATED,
            'description': f"Partnered with {partner.get_display_name()}",
            'metadata': {'partner_id': str(partner.id)},
            'created_by': actor,
        },
        {
            'user': partner,
            'activity_type': ActivityType.PARTNERSHIP_CREATED,
            'description': f"Partnered with {user.get_display_name()}",
            'metadata': {'partner_id': str(user.id)},
            'created_by': actor,
        },
    ])

    logger.info(
        "partnership_linked",
        user_id=str(user.id),
        partner_id=str(partner.id),
        performed_by=str(actor.id),
    )
    return user


@transaction.atomic
def unlink_partner(*, user_id: UUID, performed_by: Optional[User] = None) -> User:
    """
    Dissolve the user's partnership on both sides.

    Returns:
        The former partner

    Raises:
        UserNotFoundError: If the user doesn't exist
        NoPartnerError: If the user has no partner
    """
    users = _lock_with_partners([user_id])
    user = users[UUID(str(user_id))]

    if user.partner_id is None:
        raise NoPartnerError("You don't have a partner")

    former = users[user.partner_id]
    now = timezone.now()
    _set_partner(user, None, now)
    if former.partner_id == user.id:
        _set_partner(former, None, now)

    actor = performed_by or user
    record_activities([
        {
            'user': user,
            'activity_type': ActivityType.PARTNERSHIP_REMOVED,
            'description': f"Partnership with {former.get_display_name()} was removed",
            'metadata': {'partner_id': str(former.id)},
            'created_by': actor,
        },
        {
            'user': former,
            'activity_type': ActivityType.PARTNERSHIP_REMOVED,
            'description': f"Partnership with {user.get_display_name()} was removed",
            'metadata': {'partner_id': str(user.id)},
            'created_by': actor,
        },
    ])

    logger.info(
        "partnership_unlinked",
        user_id=str(user.id),
        partner_id=str(former.id),
        performed_by=str(actor.id),
    )
    return former


@transaction.atomic
def force_change_partner(*, user_id: UUID, partner_id: UUID, performed_by: User) -> List[dict]:
    """
    Admin override: partner two users, breaking whatever partnerships they had.

    Every broken partnership is logged for both of its former members.

    Args:
        user_id: User to re-partner
        partner_id: Their new partner
        performed_by: Admin performing the change

    Returns:
        The broken partnerships as ``{'user_id', 'old_partner_id'}`` dicts

    Raises:
        SelfPartnershipError: If both ids are the same user
        UserNotFoundError: If either user doesn't exist
    """
    if str(user_id) == str(partner_id):
        raise SelfPartnershipError("Cannot link user to themselves")

    users = _lock_with_partners([user_id, partner_id])
    user = users[UUID(str(user_id))]
    partner = users[UUID(str(partner_id))]

    if user.partner_id == partner.id and partner.partner_id == user.id:
        return []

    broken = []
    for member, other in ((user, partner), (partner, user)):
        if member.partner_id and member.partner_id != other.id:
            broken.append({'user_id': member.id, 'old_partner_id': member.partner_id})

    # The partner column is unique: clear every stale reference before re-linking
    now = timezone.now()
    affected = {user.id, partner.id}
    stale = [
        u for u in users.values()
        if u.partner_id is not None and (u.id in affected or u.partner_id in affected)
    ]
    for stale_user in stale:
        _set_partner(stale_user, None, now)

    _set_partner(user, partner, now)
    _set_partner(partner, user, now)

    entries = []
    for item in broken:
        member = users[item['user_id']]
        old_partner = users[item['old_partner_id']]
        entries.append({
            'user': member,
            'activity_type': ActivityType.PARTNERSHIP_FORCE_CHANGED,
            'description': f"Partnership with {old_partner.get_display_name()} was forcibly broken by admin",
            'metadata': {'old_partner_id': str(old_partner.id)},
            'created_by': performed_by,
        })
        entries.append({
            'user': old_partner,
            'activity_type': ActivityType.PARTNERSHIP_FORCE_BROKEN,
            'description': f"Partnership with {member.get_display_name()} was forcibly broken by admin",
            'metadata': {'old_partner_id': str(member.id)},
            'created_by': performed_by,
        })
    for member, other in ((user, partner), (partner, user)):
        entries.append({
            'user': member,
            'activity_type': ActivityType.PARTNERSHIP_FORCE_CREATED,
            'description': f"Force partnered with {other.get_display_name()} by admin",
            'metadata': {'partner_id': str(other.id)},
            'created_by': performed_by,
        })
    record_activities(entries)

    logger.info(
        "partnership_force_changed",
        user_id=str(user.id),
        partner_id=str(partner.id),
        broken=len(broken),
        performed_by=str(performed_by.id),
    )
    return broken
