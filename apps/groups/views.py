from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.core.storage import get_storage
from apps.notifications.dispatcher import get_dispatcher

from .serializers import (
    GroupSerializer,
    GroupCreateSerializer,
    GroupMemberSerializer,
    AddMemberSerializer,
)

from apps.groups.services import (
    create_group,
    get_groups_for_user,
    add_member,
    get_group_members,
    # Exceptions
    GroupNotFoundError,
    UserNotFoundError,
    AlreadyMemberError,
    NotMemberError,
)


class GroupViewSet(viewsets.ViewSet):
    """
    ViewSet for groups and their memberships.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Get all groups the user is a member of
    create: Create a new group (creator becomes first member)
    members: List members (GET) or add a member by username (POST)
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: GroupSerializer(many=True)}, tags=['groups'])
    def list(self, request):
        """List groups where the user is a member."""
        groups = get_groups_for_user(user=request.user, storage=get_storage())
        serializer = GroupSerializer(groups, many=True)
        return Response(serializer.data)

    @extend_schema(request=GroupCreateSerializer, responses={201: GroupSerializer}, tags=['groups'])
    def create(self, request):
        """Create a new group."""
        serializer = GroupCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        group = create_group(
            name=serializer.validated_data['name'],
            creator=request.user,
            storage=get_storage(),
        )

        output_serializer = GroupSerializer(group)
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    @extend_schema(
        methods=['GET'],
        responses={200: GroupMemberSerializer(many=True)},
        tags=['groups'],
    )
    @extend_schema(
        methods=['POST'],
        request=AddMemberSerializer,
        responses={201: GroupMemberSerializer},
        tags=['groups'],
    )
    @action(detail=True, methods=['get', 'post'])
    def members(self, request, pk=None):
        """List group members, or add one by username."""
        if request.method == 'POST':
            return self._add_member(request, pk)

        try:
            memberships = get_group_members(
                group_id=pk,
                user=request.user,
                storage=get_storage(),
            )
        except GroupNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except NotMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        serializer = GroupMemberSerializer(memberships, many=True)
        return Response(serializer.data)

    def _add_member(self, request, pk):
        serializer = AddMemberSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            membership = add_member(
                group_id=pk,
                username=serializer.validated_data['username'],
                added_by=request.user,
                storage=get_storage(),
                dispatcher=get_dispatcher(),
            )
        except (UserNotFoundError, GroupNotFoundError) as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (AlreadyMemberError, NotMemberError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        output_serializer = GroupMemberSerializer(membership)
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)
