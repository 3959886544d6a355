from django.db import models
import uuid


class ItemStatus(models.TextChoices):
    AVAILABLE = 'available', 'Available'
    GOTTEN = 'gotten', 'Gotten'


class WishlistItem(models.Model):
    """An item on one user's wishlist within one group."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Owner and the group the item is shared with
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='wishlist_items'
    )
    group = models.ForeignKey(
        'groups.Group',
        on_delete=models.CASCADE,
        related_name='wishlist_items'
    )

    # Item details
    name = models.TextField()
    url = models.TextField(null=True, blank=True)
    price = models.TextField(null=True, blank=True)
    description = models.TextField(null=True, blank=True)
    image_url = models.TextField(null=True, blank=True)

    # Purchase state, never shown to the owner
    status = models.CharField(
        max_length=20,
        choices=ItemStatus.choices,
        default=ItemStatus.AVAILABLE
    )
    gotten_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='gotten_items'
    )
    receipt = models.TextField(null=True, blank=True)

    is_surprise = models.BooleanField(default=False)
    metadata = models.JSONField(default=dict, blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'wishlist_items'
        indexes = [
            models.Index(fields=['user', 'group'], name='wishlist_it_user_id_8c3e1b_idx'),
            models.Index(fields=['group', 'status'], name='wishlist_it_group_i_4a7d2c_idx'),
        ]
        ordering = ['created_at']

    def __str__(self):
        return f"{self.name} ({self.user.get_display_name()})"

    @property
    def is_gotten(self):
        return self.status == ItemStatus.GOTTEN
