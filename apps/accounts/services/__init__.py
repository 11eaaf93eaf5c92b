"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
    UserNotFoundError,
)
from .user_registration import register_user
from .user_authentication import authenticate_user, get_user_by_id, lock_users

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UserRegistrationError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'UserNotFoundError',
    # Services
    'register_user',
    'authenticate_user',
    'get_user_by_id',
    'lock_users',
]
