import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.core.storage import DatabaseStorage
from apps.groups.models import Group, GroupMember
from apps.notifications.dispatcher import NotificationDispatcher


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
def group_creator(db):
    """Create and return the user who founded the test group."""
    return User.objects.create_user(
        username='alice',
        password='TestPass123!',
        email='alice@example.com',
    )


@pytest.fixture
def member_user(db):
    """Create and return a second member of the test group."""
    return User.objects.create_user(
        username='bob',
        password='TestPass123!',
        email='bob@example.com',
    )


@pytest.fixture
def group_other_user(db):
    """Create and return a user not in any group."""
    return User.objects.create_user(
        username='carol',
        password='TestPass123!',
        email='carol@example.com',
    )


@pytest.fixture
def authenticated_client(group_creator):
    """Return API client authenticated as the group creator."""
    return _client_for(group_creator)


@pytest.fixture
def member_client(member_user):
    """Return API client authenticated as group member."""
    return _client_for(member_user)


@pytest.fixture
def other_client(group_other_user):
    """Return API client authenticated as non-member user."""
    return _client_for(group_other_user)


@pytest.fixture
def group(db, group_creator):
    """Create and return a test group with its creator as the only member."""
    group = Group.objects.create(name='Family')
    GroupMember.objects.create(user=group_creator, group=group)
    return group


@pytest.fixture
def group_with_members(group, member_user):
    """Group with creator and one more member."""
    GroupMember.objects.create(user=member_user, group=group)
    return group
