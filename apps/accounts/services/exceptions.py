"""Domain-specific exceptions for accounts services."""

from rest_framework import status

from config.exceptions import Forbidden, InvalidArgument, NotFound, ServiceError


class AccountsServiceError(ServiceError):
    """Base exception for accounts services."""
    pass


class UserRegistrationError(AccountsServiceError, InvalidArgument):
    """Raised when user registration fails."""
    pass


class InvalidCredentialsError(AccountsServiceError, InvalidArgument):
    """Raised when authentication credentials are invalid."""
    kind = 'unauthorized'
    status_code = status.HTTP_401_UNAUTHORIZED


class InactiveAccountError(AccountsServiceError, Forbidden):
    """Raised when account is deactivated."""
    pass


class UserNotFoundError(AccountsServiceError, NotFound):
    """Raised when user does not exist."""
    pass
