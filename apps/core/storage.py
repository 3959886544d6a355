"""
Data access layer.

``DatabaseStorage`` is the only code that talks to the ORM for the four
wishlist entities. Workflow services receive an instance instead of
querying models directly, so tests can swap it out and views can build it
once per process via ``get_storage()``.

Lookups return ``None`` when no row matches (including malformed ids);
writes are single-row. Database failures surface as ``StoreFailedError``,
except ``IntegrityError`` which callers translate into domain errors.
"""

import functools
import logging
import uuid
from typing import List, Optional

from django.db import DatabaseError, IntegrityError

from apps.accounts.models import User
from apps.groups.models import Group, GroupMember
from apps.wishlists.exceptions import WishlistItemNotFoundError
from apps.wishlists.models import WishlistItem

from .exceptions import StoreFailedError

logger = logging.getLogger(__name__)


def _coerce_id(value) -> Optional[uuid.UUID]:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        return None


def store_operation(func):
    """Translate unexpected database errors into StoreFailedError."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except IntegrityError:
            raise
        except DatabaseError as e:
            logger.exception("Store operation %s failed", func.__name__)
            raise StoreFailedError() from e

    return wrapper


class DatabaseStorage:
    """Django ORM implementation of the wishlist data-access contract."""

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    @store_operation
    def get_user(self, user_id) -> Optional[User]:
        pk = _coerce_id(user_id)
        if pk is None:
            return None
        return User.objects.filter(id=pk).first()

    @store_operation
    def get_user_by_username(self, username: str) -> Optional[User]:
        if not username:
            return None
        return User.objects.filter(username=username).first()

    @store_operation
    def create_user(self, *, username: str, password: str, email: Optional[str] = None) -> User:
        return User.objects.create_user(username=username, password=password, email=email)

    @store_operation
    def update_user_email(self, user_id, email: str) -> Optional[User]:
        user = self.get_user(user_id)
        if user is None:
            return None
        user.email = email
        user.save(update_fields=['email'])
        return user

    # ------------------------------------------------------------------
    # Groups
    # ------------------------------------------------------------------

    @store_operation
    def create_group(self, *, name: str) -> Group:
        return Group.objects.create(name=name)

    @store_operation
    def get_group(self, group_id) -> Optional[Group]:
        pk = _coerce_id(group_id)
        if pk is None:
            return None
        return Group.objects.filter(id=pk).first()

    @store_operation
    def get_groups_for_user(self, user_id) -> List[Group]:
        pk = _coerce_id(user_id)
        if pk is None:
            return []
        return list(
            Group.objects
            .filter(memberships__user_id=pk)
            .order_by('created_at')
            .distinct()
        )

    # ------------------------------------------------------------------
    # Group members
    # ------------------------------------------------------------------

    @store_operation
    def add_user_to_group(self, *, user_id, group_id) -> GroupMember:
        return GroupMember.objects.create(user_id=user_id, group_id=group_id)

    @store_operation
    def get_group_members(self, group_id) -> List[GroupMember]:
        pk = _coerce_id(group_id)
        if pk is None:
            return []
        return list(
            GroupMember.objects
            .filter(group_id=pk)
            .select_related('user')
            .order_by('joined_at')
        )

    @store_operation
    def is_group_member(self, *, user_id, group_id) -> bool:
        user_pk = _coerce_id(user_id)
        group_pk = _coerce_id(group_id)
        if user_pk is None or group_pk is None:
            return False
        return GroupMember.objects.filter(user_id=user_pk, group_id=group_pk).exists()

    # ------------------------------------------------------------------
    # Wishlist items
    # ------------------------------------------------------------------

    @store_operation
    def create_wishlist_item(self, **fields) -> WishlistItem:
        return WishlistItem.objects.create(**fields)

    @store_operation
    def get_wishlist_item(self, item_id) -> Optional[WishlistItem]:
        pk = _coerce_id(item_id)
        if pk is None:
            return None
        return WishlistItem.objects.filter(id=pk).first()

    @store_operation
    def get_wishlist_items(self, *, user_id, group_id) -> List[WishlistItem]:
        user_pk = _coerce_id(user_id)
        group_pk = _coerce_id(group_id)
        if user_pk is None or group_pk is None:
            return []
        return list(
            WishlistItem.objects
            .filter(user_id=user_pk, group_id=group_pk)
            .order_by('created_at')
        )

    @store_operation
    def update_wishlist_item(self, item_id, **fields) -> WishlistItem:
        """
        Apply a partial update to one item.

        Raises:
            WishlistItemNotFoundError: If no item has this id
        """
        item = self.get_wishlist_item(item_id)
        if item is None:
            raise WishlistItemNotFoundError(f"Wishlist item {item_id} not found")

        for field, value in fields.items():
            setattr(item, field, value)
        item.save(update_fields=[*fields, 'updated_at'])
        return item


@functools.lru_cache(maxsize=None)
def get_storage() -> DatabaseStorage:
    """Process-wide storage instance used by the HTTP layer."""
    return DatabaseStorage()
