"""
Owner-blind view of wishlist items.

A wishlist owner must never learn whether (or by whom) their items were
bought. ``sanitize_item`` is the single place that rule lives; every
serializer that returns items to a client goes through it.
"""

from typing import Any, Dict, Mapping

# Fields only other group members may see. updated_at only moves on purchase.
PURCHASE_FIELDS = ('status', 'gotten_by', 'receipt', 'updated_at')


def _same_id(a, b) -> bool:
    if a is None or b is None:
        return False
    return str(a) == str(b)


def sanitize_item(data: Mapping[str, Any], requester_id) -> Dict[str, Any]:
    """
    Return the view of a serialized item that ``requester_id`` may see.

    Args:
        data: Serialized item; ``data['user']`` is the owner's id
        requester_id: Id of the user viewing the item

    Returns:
        New dict. Purchase fields are omitted when the requester owns the
        item; otherwise every field is kept as-is.
    """
    view = dict(data)
    if _same_id(view.get('user'), requester_id):
        for field in PURCHASE_FIELDS:
            view.pop(field, None)
    return view
