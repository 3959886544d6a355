from django.contrib import admin
from apps.groups.models import Group, GroupMember


class GroupMemberInline(admin.TabularInline):
    """Inline admin for group members."""
    model = GroupMember
    extra = 0
    fields = ['user', 'joined_at']
    readonly_fields = ['joined_at']


@admin.register(Group)
class GroupAdmin(admin.ModelAdmin):
    """Admin interface for Groups."""

    list_display = ['name', 'member_count', 'created_at']
    list_filter = ['created_at']
    search_fields = ['name', 'memberships__user__username']
    readonly_fields = ['created_at']
    inlines = [GroupMemberInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    def member_count(self, obj):
        """Show number of members."""
        return obj.memberships.count()
    member_count.short_description = 'Members'


@admin.register(GroupMember)
class GroupMemberAdmin(admin.ModelAdmin):
    """Admin interface for Group Members."""

    list_display = ['user', 'group', 'joined_at']
    list_filter = ['joined_at']
    search_fields = ['user__username', 'group__name']
    readonly_fields = ['joined_at']
    ordering = ['-joined_at']

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('user', 'group')
