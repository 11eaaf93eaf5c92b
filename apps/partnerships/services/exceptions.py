"""
Domain-specific exceptions for partnership services.

The partnership routes answer every refused link or unlink with HTTP 400,
so these keep their taxonomy ``kind`` but override the status code.
"""

from rest_framework import status

from config.exceptions import Conflict, NotFound, ServiceError


class PartnershipsServiceError(ServiceError):
    """Base exception for partnership services."""
    pass


class SelfPartnershipError(PartnershipsServiceError, Conflict):
    """Raised when a user tries to partner with themself."""
    status_code = status.HTTP_400_BAD_REQUEST


class AlreadyPartneredError(PartnershipsServiceError, Conflict):
    """Raised when either user already has a different partner."""
    status_code = status.HTTP_400_BAD_REQUEST


class NoPartnerError(PartnershipsServiceError, NotFound):
    """Raised when unlinking a user who has no partner."""
    status_code = status.HTTP_400_BAD_REQUEST
