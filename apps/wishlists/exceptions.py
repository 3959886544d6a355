"""
Domain exceptions for wishlists app.

NotFound errors are DRF APIExceptions so they reach the client with the
right status code without per-view try/except blocks.
"""
from rest_framework.exceptions import APIException


class WishlistItemNotFoundError(APIException):
    """Wishlist item not found."""
    status_code = 404
    default_detail = 'Item not found.'
    default_code = 'item_not_found'
