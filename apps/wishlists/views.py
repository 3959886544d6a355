from rest_framework import status, serializers as drf_serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.core.storage import get_storage
from apps.groups.services.exceptions import GroupNotFoundError, NotMemberError
from apps.notifications.dispatcher import get_dispatcher

from .serializers import (
    WishlistItemCreateSerializer,
    MarkPurchasedInputSerializer,
    PublicWishlistItemSerializer,
)
from .services import add_wishlist_item, mark_purchased, get_owner_wishlist


# Response serializers for API documentation
class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


@extend_schema(
    request=WishlistItemCreateSerializer,
    responses={
        201: PublicWishlistItemSerializer,
        400: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="Add an item to the current user's wishlist in a group.",
    tags=['wishlists'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def create_item(request, group_id):
    """Create a wishlist item owned by the current user."""
    serializer = WishlistItemCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        item = add_wishlist_item(
            group_id=group_id,
            user=request.user,
            fields=serializer.validated_data,
            storage=get_storage(),
            dispatcher=get_dispatcher(),
        )
    except GroupNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except NotMemberError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    output_serializer = PublicWishlistItemSerializer(item, context={'request': request})
    return Response(output_serializer.data, status=status.HTTP_201_CREATED)


@extend_schema(
    responses={
        200: PublicWishlistItemSerializer(many=True),
        403: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description=(
        "Get a member's wishlist in a group. Purchase status is omitted when "
        "the requester is viewing their own list."
    ),
    tags=['wishlists'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def owner_wishlist(request, group_id, user_id):
    """Get one user's wishlist within a group."""
    try:
        items = get_owner_wishlist(
            group_id=group_id,
            owner_id=user_id,
            user=request.user,
            storage=get_storage(),
        )
    except GroupNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except NotMemberError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return Response(items)


@extend_schema(
    request=MarkPurchasedInputSerializer,
    responses={
        200: PublicWishlistItemSerializer,
        400: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="Mark an item as purchased by the current user.",
    tags=['wishlists'],
)
@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def update_item(request, item_id):
    """
    Mark a wishlist item as gotten.

    PATCH /api/wishlist/{id}/
    Body: {"receipt": "data:image/png;base64,...", "status": "gotten"}
    """
    serializer = MarkPurchasedInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        item = mark_purchased(
            item_id=item_id,
            user=request.user,
            receipt=serializer.validated_data.get('receipt'),
            storage=get_storage(),
            dispatcher=get_dispatcher(),
        )
    except GroupNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except NotMemberError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    output_serializer = PublicWishlistItemSerializer(item, context={'request': request})
    return Response(output_serializer.data)
