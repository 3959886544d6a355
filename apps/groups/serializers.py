from rest_framework import serializers
from .models import Group, GroupMember
from apps.accounts.models import User


class UserMinimalSerializer(serializers.ModelSerializer):
    """Minimal user info for nested serialization."""

    class Meta:
        model = User
        fields = ['id', 'username']
        read_only_fields = fields


class GroupSerializer(serializers.ModelSerializer):
    """Main serializer for groups."""

    class Meta:
        model = Group
        fields = ['id', 'name', 'created_at']
        read_only_fields = ['id', 'created_at']


class GroupCreateSerializer(serializers.ModelSerializer):
    """Serializer for creating groups."""

    class Meta:
        model = Group
        fields = ['name']


class GroupMemberSerializer(serializers.ModelSerializer):
    """Member information within a group."""

    user = UserMinimalSerializer(read_only=True)

    class Meta:
        model = GroupMember
        fields = ['id', 'user', 'group', 'joined_at']
        read_only_fields = fields


class AddMemberSerializer(serializers.Serializer):
    """Serializer for adding a member by username."""

    username = serializers.CharField(max_length=150, required=True)
