from django.contrib import admin
from django.utils.html import format_html

from .models import WishlistItem, ItemStatus


@admin.register(WishlistItem)
class WishlistItemAdmin(admin.ModelAdmin):
    """Admin interface for wishlist items."""

    list_display = [
        'name',
        'user',
        'group',
        'price',
        'status_badge',
        'gotten_by',
        'is_surprise',
        'created_at',
    ]
    list_filter = ['status', 'is_surprise', 'group', 'created_at']
    search_fields = ['name', 'description', 'user__username', 'group__name']
    readonly_fields = ['created_at', 'updated_at']
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    fieldsets = (
        ('Item', {
            'fields': ('name', 'url', 'price', 'description', 'image_url', 'is_surprise')
        }),
        ('Ownership', {
            'fields': ('user', 'group')
        }),
        ('Purchase', {
            'fields': ('status', 'gotten_by', 'receipt'),
            'classes': ('collapse',),
        }),
        ('Metadata', {
            'fields': ('metadata', 'created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    def status_badge(self, obj):
        """Display purchase status as colored badge."""
        if obj.status == ItemStatus.GOTTEN:
            return format_html(
                '<span style="background: #6B8E5E; color: white; padding: 3px 8px; '
                'border-radius: 10px; font-size: 11px;">Gotten</span>'
            )
        return format_html(
            '<span style="background: #E5C49A; color: #2C1810; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">Available</span>'
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('user', 'group', 'gotten_by')
