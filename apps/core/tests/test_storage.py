import pytest
from uuid import uuid4
from unittest.mock import patch

from django.db import DatabaseError, IntegrityError

from apps.accounts.models import User
from apps.core.exceptions import StoreFailedError
from apps.core.storage import DatabaseStorage, get_storage
from apps.groups.models import Group, GroupMember
from apps.wishlists.exceptions import WishlistItemNotFoundError
from apps.wishlists.models import WishlistItem, ItemStatus


@pytest.fixture
def storage():
    return DatabaseStorage()


@pytest.fixture
def user(db):
    return User.objects.create_user(username='alice', password='TestPass123!')


@pytest.fixture
def group(db, user):
    group = Group.objects.create(name='Family')
    GroupMember.objects.create(user=user, group=group)
    return group


@pytest.mark.django_db
class TestLookups:

    def test_missing_rows_return_none(self, storage):
        assert storage.get_user(uuid4()) is None
        assert storage.get_group(uuid4()) is None
        assert storage.get_wishlist_item(uuid4()) is None
        assert storage.get_user_by_username('nobody') is None

    def test_malformed_ids_return_none(self, storage):
        assert storage.get_user('not-a-uuid') is None
        assert storage.get_group('42') is None
        assert storage.get_wishlist_item(None) is None
        assert storage.is_group_member(user_id='x', group_id='y') is False
        assert storage.get_wishlist_items(user_id='x', group_id='y') == []

    def test_lookup_accepts_string_ids(self, storage, user):
        assert storage.get_user(str(user.id)) == user

    def test_is_group_member(self, storage, user, group):
        other = User.objects.create_user(username='bob', password='TestPass123!')

        assert storage.is_group_member(user_id=user.id, group_id=group.id)
        assert not storage.is_group_member(user_id=other.id, group_id=group.id)

    def test_get_groups_for_user(self, storage, user, group):
        assert storage.get_groups_for_user(user.id) == [group]


@pytest.mark.django_db
class TestWrites:

    def test_create_user_hashes_password(self, storage):
        user = storage.create_user(username='bob', password='TestPass123!')

        assert user.check_password('TestPass123!')
        assert user.email is None

    def test_duplicate_username_raises_integrity_error(self, storage, user):
        with pytest.raises(IntegrityError):
            storage.create_user(username='alice', password='TestPass123!')

    def test_update_user_email(self, storage, user):
        updated = storage.update_user_email(user.id, 'alice@example.com')

        assert updated.email == 'alice@example.com'
        user.refresh_from_db()
        assert user.email == 'alice@example.com'

    def test_update_wishlist_item(self, storage, user, group):
        item = WishlistItem.objects.create(user=user, group=group, name='Kettle')

        updated = storage.update_wishlist_item(item.id, status=ItemStatus.GOTTEN, receipt='r')

        assert updated.status == ItemStatus.GOTTEN
        item.refresh_from_db()
        assert item.receipt == 'r'
        assert item.name == 'Kettle'

    def test_update_missing_item(self, storage):
        with pytest.raises(WishlistItemNotFoundError):
            storage.update_wishlist_item(uuid4(), status=ItemStatus.GOTTEN)


@pytest.mark.django_db
class TestStoreFailures:

    def test_database_error_becomes_store_failed(self, storage):
        with patch.object(Group.objects, 'create', side_effect=DatabaseError('disk full')):
            with pytest.raises(StoreFailedError):
                storage.create_group(name='Family')

    def test_integrity_error_passes_through(self, storage):
        with patch.object(Group.objects, 'create', side_effect=IntegrityError('dup')):
            with pytest.raises(IntegrityError):
                storage.create_group(name='Family')


def test_get_storage_is_shared():
    assert get_storage() is get_storage()
