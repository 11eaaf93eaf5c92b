"""User authentication service."""

from uuid import UUID

from django.db import transaction
from django.contrib.auth import get_user_model
from django.utils import timezone

from .exceptions import InvalidCredentialsError, InactiveAccountError, UserNotFoundError

User = get_user_model()


@transaction.atomic
def authenticate_user(*, email: str, password: str) -> User:
    """
    Authenticate user with email and password.

    Uses select_for_update() to prevent race conditions when updating last_login.

    Args:
        email: User's email
        password: User's password

    Returns:
        Authenticated User instance

    Raises:
        InvalidCredentialsError: If credentials are invalid
        InactiveAccountError: If account is deactivated
    """
    # Get user with lock to prevent race conditions on last_login
    try:
        user = (
            User.objects
            .select_for_update()
            .get(email__iexact=email)
        )
    except User.DoesNotExist:
        raise InvalidCredentialsError("Invalid email or password")

    # Check password
    if not user.check_password(password):
        raise InvalidCredentialsError("Invalid email or password")

    # Check if active
    if not user.is_active:
        raise InactiveAccountError("Account is deactivated")

    # Update last login
    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])

    return user


def get_user_by_id(*, user_id: UUID) -> User:
    """
    Get an active user by ID.

    Raises:
        UserNotFoundError: If the user doesn't exist or is deactivated
    """
    try:
        return User.objects.select_related('partner').get(id=user_id, is_active=True)
    except User.DoesNotExist:
        raise UserNotFoundError(f"User with ID {user_id} not found")


def lock_users(*, user_ids) -> dict:
    """
    Lock the given user rows for the rest of the current transaction.

    Rows are locked in id order within the call. Two transactions that each
    lock their whole set in one call can never deadlock; a second call locks
    its rows after the first call's, whatever their ids. Must be called inside
    ``transaction.atomic()``.

    Returns:
        Mapping of user id to the freshly read, locked User

    Raises:
        UserNotFoundError: If any of the ids does not exist
    """
    wanted = sorted({UUID(str(user_id)) for user_id in user_ids})
    users = {
        user.id: user
        for user in User.objects.select_for_update().filter(id__in=wanted).order_by('id')
    }
    for user_id in wanted:
        if user_id not in users:
            raise UserNotFoundError(f"User with ID {user_id} not found")
    return users
