"""Account management service."""

import logging

from apps.accounts.models import User
from apps.core.storage import DatabaseStorage

logger = logging.getLogger(__name__)


def update_user_email(*, user: User, email: str, storage: DatabaseStorage) -> User:
    """
    Set or replace the email address used for notifications.

    Accounts created before email was collected can backfill it here.
    Username and password are never changed by this service.
    """
    updated = storage.update_user_email(user.id, email)
    logger.info("User %s updated their email address", updated.username)
    return updated
