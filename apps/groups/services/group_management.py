"""
Group management service.

Handles group creation and lookup.
"""

import logging
from typing import List
from uuid import UUID

from django.db import transaction

from apps.accounts.models import User
from apps.core.storage import DatabaseStorage
from apps.groups.models import Group

from .exceptions import GroupNotFoundError

logger = logging.getLogger(__name__)


def create_group(*, name: str, creator: User, storage: DatabaseStorage) -> Group:
    """
    Create a new group and add the creator as its first member.

    Both rows are written in one transaction so a group never exists
    without at least one member.

    Args:
        name: Group name
        creator: User creating the group
        storage: Data access layer

    Returns:
        Created Group instance
    """
    with transaction.atomic():
        group = storage.create_group(name=name)
        storage.add_user_to_group(user_id=creator.id, group_id=group.id)

    logger.info("User %s created group %s", creator.username, group.id)
    return group


def get_group_by_id(*, group_id: UUID, storage: DatabaseStorage) -> Group:
    """
    Get a group by ID.

    Raises:
        GroupNotFoundError: If group doesn't exist
    """
    group = storage.get_group(group_id)
    if group is None:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")
    return group


def get_groups_for_user(*, user: User, storage: DatabaseStorage) -> List[Group]:
    """Return every group the user is a member of, oldest first."""
    return storage.get_groups_for_user(user.id)
