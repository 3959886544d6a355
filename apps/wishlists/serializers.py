from rest_framework import serializers
from .models import WishlistItem, ItemStatus
from .visibility import sanitize_item


# =============================================================================
# Input Serializers
# =============================================================================

class WishlistItemCreateSerializer(serializers.ModelSerializer):
    """
    Validate input for adding an item to the requester's wishlist.

    Owner and group come from the authenticated user and the URL, so any
    ``user``/``group`` keys in the payload are ignored.
    """

    metadata = serializers.DictField(required=False)

    class Meta:
        model = WishlistItem
        fields = [
            'name',
            'url',
            'price',
            'description',
            'image_url',
            'is_surprise',
            'metadata',
        ]
        extra_kwargs = {
            'url': {'required': False, 'allow_null': True, 'allow_blank': True},
            'price': {'required': False, 'allow_null': True, 'allow_blank': True},
            'description': {'required': False, 'allow_null': True, 'allow_blank': True},
            'image_url': {'required': False, 'allow_null': True, 'allow_blank': True},
            'is_surprise': {'required': False},
        }


class MarkPurchasedInputSerializer(serializers.Serializer):
    """
    Validate input for marking an item as purchased.

    Fields:
        receipt (str): Opaque proof of purchase, e.g. a data URL of a photo
        status (str): Optional; only "gotten" is accepted
    """

    receipt = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    status = serializers.CharField(required=False)

    def validate_status(self, value):
        if value != ItemStatus.GOTTEN:
            raise serializers.ValidationError('Items can only be marked as gotten.')
        return value


# =============================================================================
# Output Serializers
# =============================================================================

class WishlistItemSerializer(serializers.ModelSerializer):
    """Full item representation, purchase fields included."""

    class Meta:
        model = WishlistItem
        fields = [
            'id',
            'user',
            'group',
            'name',
            'url',
            'price',
            'description',
            'image_url',
            'status',
            'gotten_by',
            'receipt',
            'is_surprise',
            'metadata',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class PublicWishlistItemSerializer(WishlistItemSerializer):
    """
    Item representation as seen by the requesting user.

    Requires ``request`` in the serializer context; the owner never gets
    status, gotten_by, receipt or updated_at back.
    """

    def to_representation(self, instance):
        data = super().to_representation(instance)
        request = self.context.get('request')
        # Without a known viewer, fall back to the owner's (most restricted) view
        requester_id = request.user.id if request is not None else data.get('user')
        return sanitize_item(data, requester_id)
