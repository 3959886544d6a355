"""User registration service."""

import logging
from typing import Optional

from django.db import transaction, IntegrityError

from apps.accounts.models import User
from apps.core.storage import DatabaseStorage

from .exceptions import UserRegistrationError

logger = logging.getLogger(__name__)


def register_user(
    *,
    username: str,
    password: str,
    storage: DatabaseStorage,
    email: Optional[str] = None
) -> User:
    """
    Register a new user.

    Args:
        username: Unique username
        password: User's password (will be hashed)
        storage: Data access layer
        email: Optional address used for notifications

    Returns:
        Created User instance

    Raises:
        UserRegistrationError: If the username is already taken
    """
    try:
        with transaction.atomic():
            user = storage.create_user(
                username=username,
                password=password,
                email=email or None,
            )
    except IntegrityError:
        raise UserRegistrationError(f"Username {username} is already taken")

    logger.info("Registered user %s", user.username)
    return user
