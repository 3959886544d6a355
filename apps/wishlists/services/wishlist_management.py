"""
Wishlist workflow services.

Every data change is committed before any notification is sent, and a
failed notification (recipient lookup included) is logged without touching
the committed change.

Purchase marking takes no lock: two members buying the same item at the
same time both succeed and the later write wins.
"""

import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from django.db import transaction

from apps.accounts.models import User
from apps.core.exceptions import StoreFailedError
from apps.core.storage import DatabaseStorage
from apps.groups.services.exceptions import GroupNotFoundError, NotMemberError
from apps.notifications.dispatcher import NotificationDispatcher, NotificationKind
from apps.notifications.exceptions import DeliveryFailedError
from apps.wishlists.exceptions import WishlistItemNotFoundError
from apps.wishlists.models import WishlistItem, ItemStatus
from apps.wishlists.serializers import WishlistItemSerializer
from apps.wishlists.visibility import sanitize_item

logger = logging.getLogger(__name__)

# Fields a client may set when creating an item
EDITABLE_FIELDS = (
    'name',
    'url',
    'price',
    'description',
    'image_url',
    'is_surprise',
    'metadata',
)


def _require_group(storage: DatabaseStorage, group_id):
    group = storage.get_group(group_id)
    if group is None:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")
    return group


def _require_membership(storage: DatabaseStorage, user: User, group) -> None:
    if not storage.is_group_member(user_id=user.id, group_id=group.id):
        raise NotMemberError(f"You must be a member of {group.name}")


def _notify_quietly(dispatcher: NotificationDispatcher, kind, **context) -> None:
    try:
        dispatcher.notify(kind, **context)
    except DeliveryFailedError as e:
        logger.warning("Continuing after %s notification failure: %s", kind, e)


def add_wishlist_item(
    *,
    group_id: UUID,
    user: User,
    fields: Dict[str, Any],
    storage: DatabaseStorage,
    dispatcher: NotificationDispatcher
) -> WishlistItem:
    """
    Add an item to the user's own wishlist in a group.

    Owner and group are always taken from ``user`` and ``group_id``; any
    ``user``/``group`` keys in ``fields`` are dropped. Unless the item is a
    surprise, every other group member is emailed about it.

    Args:
        group_id: UUID of the group
        user: Authenticated user, becomes the item's owner
        fields: Item attributes (name required)
        storage: Data access layer
        dispatcher: Notification dispatcher

    Returns:
        Created WishlistItem with status "available"

    Raises:
        GroupNotFoundError: If group doesn't exist
        NotMemberError: If user is not a member of the group
    """
    group = _require_group(storage, group_id)
    _require_membership(storage, user, group)

    data = {key: value for key, value in fields.items() if key in EDITABLE_FIELDS}
    if data.get('metadata') is None:
        data['metadata'] = {}

    with transaction.atomic():
        item = storage.create_wishlist_item(
            **data,
            user=user,
            group=group,
            status=ItemStatus.AVAILABLE,
        )

    logger.info("User %s added item %s in group %s", user.username, item.id, group.id)

    if item.is_surprise:
        return item

    try:
        recipients = [
            membership.user
            for membership in storage.get_group_members(group.id)
            if membership.user_id != user.id
        ]
    except StoreFailedError:
        logger.exception("Could not load recipients for item %s; no notifications sent", item.id)
        return item

    for recipient in recipients:
        _notify_quietly(
            dispatcher,
            NotificationKind.ITEM_ADDED,
            recipient=recipient,
            group=group,
            item=item,
            actor_name=user.get_display_name(),
        )

    return item


def mark_purchased(
    *,
    item_id: UUID,
    user: User,
    receipt: Optional[str],
    storage: DatabaseStorage,
    dispatcher: NotificationDispatcher
) -> WishlistItem:
    """
    Mark an item as gotten by the user and tell the owner something was bought.

    Calling it again overwrites ``gotten_by`` and ``receipt``.

    Args:
        item_id: UUID of the item
        user: Authenticated user who bought the item
        receipt: Opaque proof of purchase (may be None)
        storage: Data access layer
        dispatcher: Notification dispatcher

    Returns:
        Updated WishlistItem

    Raises:
        WishlistItemNotFoundError: If item doesn't exist
        NotMemberError: If user is not a member of the item's group
    """
    item = storage.get_wishlist_item(item_id)
    if item is None:
        raise WishlistItemNotFoundError(f"Wishlist item {item_id} not found")

    group = _require_group(storage, item.group_id)
    _require_membership(storage, user, group)

    with transaction.atomic():
        item = storage.update_wishlist_item(
            item.id,
            status=ItemStatus.GOTTEN,
            gotten_by=user,
            receipt=receipt,
        )

    logger.info("User %s marked item %s as gotten", user.username, item.id)

    try:
        owner = storage.get_user(item.user_id)
    except StoreFailedError:
        logger.exception("Could not load owner of item %s; no notification sent", item.id)
        return item

    if owner is not None:
        _notify_quietly(
            dispatcher,
            NotificationKind.ITEM_PURCHASED,
            recipient=owner,
            group=group,
        )

    return item


def get_owner_wishlist(
    *,
    group_id: UUID,
    owner_id: UUID,
    user: User,
    storage: DatabaseStorage
) -> List[Dict[str, Any]]:
    """
    Get one member's wishlist in a group, as the requesting user may see it.

    Args:
        group_id: UUID of the group
        owner_id: UUID of the wishlist owner
        user: Authenticated user viewing the list
        storage: Data access layer

    Returns:
        List of serialized items, each passed through ``sanitize_item`` with
        ``user`` as the viewer

    Raises:
        GroupNotFoundError: If group doesn't exist
        NotMemberError: If user is not a member of the group
    """
    group = _require_group(storage, group_id)
    _require_membership(storage, user, group)

    items = storage.get_wishlist_items(user_id=owner_id, group_id=group.id)
    return [
        sanitize_item(WishlistItemSerializer(item).data, user.id)
        for item in items
    ]
