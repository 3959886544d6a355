import pytest
from apps.accounts.models import User
from apps.groups.models import Group
from apps.wishlists.models import WishlistItem


@pytest.fixture
def recipient(db):
    return User.objects.create_user(
        username='bob',
        password='TestPass123!',
        email='bob@example.com',
    )


@pytest.fixture
def recipient_without_email(db):
    return User.objects.create_user(username='noemail', password='TestPass123!')


@pytest.fixture
def group(db):
    return Group.objects.create(name='Family')


@pytest.fixture
def item(group, recipient):
    owner = User.objects.create_user(username='alice', password='TestPass123!', email='alice@example.com')
    return WishlistItem.objects.create(user=owner, group=group, name='Pour-over kettle', price='$45')
