import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.core.storage import DatabaseStorage
from apps.groups.models import Group, GroupMember
from apps.notifications.dispatcher import NotificationDispatcher
from apps.wishlists.models import WishlistItem


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def storage():
    return DatabaseStorage()


@pytest.fixture
def sent_messages():
    """Messages captured by the ``dispatcher`` fixture."""
    return []


@pytest.fixture
def dispatcher(sent_messages):
    """Dispatcher that records messages instead of emailing them."""
    return NotificationDispatcher(send=sent_messages.append)


@pytest.fixture
def owner(db):
    """User whose wishlist is under test."""
    return User.objects.create_user(
        username='alice',
        password='TestPass123!',
        email='alice@example.com',
    )


@pytest.fixture
def buyer(db):
    """Another group member who buys gifts."""
    return User.objects.create_user(
        username='bob',
        password='TestPass123!',
        email='bob@example.com',
    )


@pytest.fixture
def second_buyer(db):
    return User.objects.create_user(
        username='dave',
        password='TestPass123!',
        email='dave@example.com',
    )


@pytest.fixture
def outsider(db):
    """User who is not in the group."""
    return User.objects.create_user(
        username='carol',
        password='TestPass123!',
        email='carol@example.com',
    )


@pytest.fixture
def group(db, owner, buyer, second_buyer):
    """Group with owner, buyer and second_buyer as members."""
    group = Group.objects.create(name='Family')
    for user in (owner, buyer, second_buyer):
        GroupMember.objects.create(user=user, group=group)
    return group


@pytest.fixture
def item(group, owner):
    """An available item on the owner's wishlist."""
    return WishlistItem.objects.create(
        user=owner,
        group=group,
        name='Pour-over kettle',
        price='$45',
    )


@pytest.fixture
def owner_client(owner):
    return _client_for(owner)


@pytest.fixture
def buyer_client(buyer):
    return _client_for(buyer)


@pytest.fixture
def second_buyer_client(second_buyer):
    return _client_for(second_buyer)


@pytest.fixture
def outsider_client(outsider):
    return _client_for(outsider)
