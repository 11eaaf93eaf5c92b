"""User registration service."""

import structlog
from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from .exceptions import UserRegistrationError

User = get_user_model()

logger = structlog.get_logger(__name__)


@transaction.atomic
def register_user(
    *,
    email: str,
    password: str,
    display_name: str = "",
    telegram_username: str = ""
) -> User:
    """
    Register a new participant.

    New accounts always start as participants without a partner; roles and
    partnerships are changed through their own services.

    Args:
        email: User's email address
        password: User's password (will be hashed)
        display_name: Optional display name
        telegram_username: Optional bot handle

    Returns:
        Created User instance

    Raises:
        UserRegistrationError: If the email is already registered
    """
    if User.objects.filter(email__iexact=email).exists():
        raise UserRegistrationError("A user with this email already exists")

    try:
        user = User.objects.create_user(
            email=email,
            password=password,
            display_name=display_name,
            telegram_username=telegram_username,
        )
    except IntegrityError:
        raise UserRegistrationError("A user with this email already exists")

    logger.info("user_registered", user_id=str(user.id))
    return user
