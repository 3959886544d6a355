"""Services for wishlist business logic."""

from .wishlist_management import (
    add_wishlist_item,
    mark_purchased,
    get_owner_wishlist,
)

__all__ = [
    'add_wishlist_item',
    'mark_purchased',
    'get_owner_wishlist',
]
