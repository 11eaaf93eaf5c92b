"""Services for the partnership manager."""

from .exceptions import (
    PartnershipsServiceError,
    SelfPartnershipError,
    AlreadyPartneredError,
    NoPartnerError,
)
from .partnership_management import (
    link_partners,
    unlink_partner,
    force_change_partner,
)

__all__ = [
    # Exceptions
    'PartnershipsServiceError',
    'SelfPartnershipError',
    'AlreadyPartneredError',
    'NoPartnerError',
    # Services
    'link_partners',
    'unlink_partner',
    'force_change_partner',
]
