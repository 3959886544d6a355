"""
Membership management service.

Adding a member writes the membership first and only then emails the new
member; a failed email never undoes the membership.
"""

import logging
from typing import List
from uuid import UUID

from django.db import transaction, IntegrityError

from apps.accounts.models import User
from apps.core.storage import DatabaseStorage
from apps.groups.models import GroupMember
from apps.notifications.dispatcher import NotificationDispatcher, NotificationKind
from apps.notifications.exceptions import DeliveryFailedError

from .exceptions import (
    GroupNotFoundError,
    UserNotFoundError,
    AlreadyMemberError,
    NotMemberError,
)

logger = logging.getLogger(__name__)


def add_member(
    *,
    group_id: UUID,
    username: str,
    added_by: User,
    storage: DatabaseStorage,
    dispatcher: NotificationDispatcher
) -> GroupMember:
    """
    Add a user to a group by username and notify them.

    Args:
        group_id: UUID of the group
        username: Username of the user to add
        added_by: Authenticated user performing the action
        storage: Data access layer
        dispatcher: Notification dispatcher

    Returns:
        Created GroupMember instance

    Raises:
        UserNotFoundError: If no user has this username
        GroupNotFoundError: If group doesn't exist
        NotMemberError: If added_by is not a member of the group
        AlreadyMemberError: If the user is already in the group
    """
    user = storage.get_user_by_username(username)
    if user is None:
        raise UserNotFoundError(f"User {username} not found")

    group = storage.get_group(group_id)
    if group is None:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    if not storage.is_group_member(user_id=added_by.id, group_id=group.id):
        raise NotMemberError(f"Only members of {group.name} can add members")

    if storage.is_group_member(user_id=user.id, group_id=group.id):
        raise AlreadyMemberError(f"User is already a member of {group.name}")

    try:
        with transaction.atomic():
            membership = storage.add_user_to_group(user_id=user.id, group_id=group.id)
    except IntegrityError:
        # Concurrent add of the same user won the race
        raise AlreadyMemberError(f"User is already a member of {group.name}")

    logger.info("User %s added %s to group %s", added_by.username, user.username, group.id)

    try:
        dispatcher.notify(
            NotificationKind.MEMBER_ADDED,
            recipient=user,
            group=group,
            actor_name=added_by.get_display_name(),
        )
    except DeliveryFailedError as e:
        logger.warning("Membership %s kept despite notification failure: %s", membership.id, e)

    return membership


def get_group_members(
    *,
    group_id: UUID,
    user: User,
    storage: DatabaseStorage
) -> List[GroupMember]:
    """
    Get all members of a group, visible to members only.

    Raises:
        GroupNotFoundError: If group doesn't exist
        NotMemberError: If user is not a member of the group
    """
    group = storage.get_group(group_id)
    if group is None:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    if not storage.is_group_member(user_id=user.id, group_id=group.id):
        raise NotMemberError(f"User is not a member of {group.name}")

    return storage.get_group_members(group.id)
