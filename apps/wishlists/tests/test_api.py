import pytest
from uuid import uuid4
from django.urls import reverse
from rest_framework import status
from apps.wishlists.models import WishlistItem, ItemStatus


# =============================================================================
# Create Item Tests
# =============================================================================

@pytest.mark.django_db
class TestCreateItem:
    """Tests for POST /api/groups/{group_id}/wishlist/"""

    def test_create_item_notifies_members(self, owner_client, group, owner, mailoutbox):
        url = reverse('wishlists:item-create', kwargs={'group_id': group.id})
        response = owner_client.post(url, {'name': 'Kettle', 'price': '$45'}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['name'] == 'Kettle'
        assert response.data['user'] == owner.id
        # Owner's own response never carries purchase state
        assert 'status' not in response.data

        assert sorted(m.to[0] for m in mailoutbox) == ['bob@example.com', 'dave@example.com']
        assert all(m.subject == 'New Item in Family' for m in mailoutbox)

    def test_create_item_ignores_user_and_group_in_body(self, owner_client, group, owner, buyer):
        url = reverse('wishlists:item-create', kwargs={'group_id': group.id})
        response = owner_client.post(
            url,
            {'name': 'Kettle', 'user': str(buyer.id), 'group': str(uuid4())},
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        item = WishlistItem.objects.get(id=response.data['id'])
        assert item.user == owner
        assert item.group == group

    def test_create_surprise_item_sends_nothing(self, owner_client, group, mailoutbox):
        url = reverse('wishlists:item-create', kwargs={'group_id': group.id})
        response = owner_client.post(url, {'name': 'Tickets', 'is_surprise': True}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert mailoutbox == []

    def test_create_item_with_metadata(self, owner_client, group):
        url = reverse('wishlists:item-create', kwargs={'group_id': group.id})
        response = owner_client.post(
            url,
            {'name': 'Shirt', 'metadata': {'size': 'M', 'color': 'blue'}},
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['metadata'] == {'size': 'M', 'color': 'blue'}

    def test_create_item_with_long_name_and_price(self, owner_client, group):
        url = reverse('wishlists:item-create', kwargs={'group_id': group.id})
        response = owner_client.post(
            url,
            {'name': 'Kettle' * 80, 'price': 'about $' + '9' * 150},
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['name'] == 'Kettle' * 80

    def test_create_item_requires_name(self, owner_client, group):
        url = reverse('wishlists:item-create', kwargs={'group_id': group.id})
        response = owner_client.post(url, {'price': '$10'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'name' in response.data

    def test_create_item_as_non_member(self, outsider_client, group):
        url = reverse('wishlists:item-create', kwargs={'group_id': group.id})
        response = outsider_client.post(url, {'name': 'Kettle'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert not WishlistItem.objects.exists()

    def test_create_item_unknown_group(self, owner_client):
        url = reverse('wishlists:item-create', kwargs={'group_id': uuid4()})
        response = owner_client.post(url, {'name': 'Kettle'}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_create_item_unauthenticated(self, api_client, group):
        url = reverse('wishlists:item-create', kwargs={'group_id': group.id})
        response = api_client.post(url, {'name': 'Kettle'}, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Owner Wishlist Tests
# =============================================================================

@pytest.mark.django_db
class TestOwnerWishlist:
    """Tests for GET /api/groups/{group_id}/wishlist/{user_id}/"""

    def _url(self, item):
        return reverse(
            'wishlists:owner-wishlist',
            kwargs={'group_id': item.group_id, 'user_id': item.user_id},
        )

    def test_owner_never_sees_purchase_state(self, owner_client, buyer_client, item):
        buyer_client.patch(
            reverse('wishlists:item-update', kwargs={'item_id': item.id}),
            {'status': 'gotten'},
            format='json',
        )

        response = owner_client.get(self._url(item))

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1
        for field in ('status', 'gotten_by', 'receipt', 'updated_at'):
            assert field not in response.data[0]

    def test_member_sees_purchase_state(self, second_buyer_client, item, buyer):
        item.status = ItemStatus.GOTTEN
        item.gotten_by = buyer
        item.save()

        response = second_buyer_client.get(self._url(item))

        assert response.status_code == status.HTTP_200_OK
        assert response.data[0]['status'] == 'gotten'
        assert response.data[0]['gotten_by'] == buyer.id

    def test_non_member_forbidden(self, outsider_client, item):
        response = outsider_client.get(self._url(item))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_unknown_group(self, owner_client, owner):
        url = reverse('wishlists:owner-wishlist', kwargs={'group_id': uuid4(), 'user_id': owner.id})
        response = owner_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_empty_wishlist(self, buyer_client, group, owner):
        url = reverse('wishlists:owner-wishlist', kwargs={'group_id': group.id, 'user_id': owner.id})
        response = buyer_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data == []


# =============================================================================
# Mark Purchased Tests
# =============================================================================

@pytest.mark.django_db
class TestMarkPurchased:
    """Tests for PATCH /api/wishlist/{item_id}/"""

    def test_mark_purchased(self, buyer_client, item, buyer, mailoutbox):
        url = reverse('wishlists:item-update', kwargs={'item_id': item.id})
        response = buyer_client.patch(
            url,
            {'status': 'gotten', 'receipt': 'data:image/png;base64,AAAA'},
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'gotten'
        assert response.data['gotten_by'] == buyer.id

        item.refresh_from_db()
        assert item.status == ItemStatus.GOTTEN
        assert item.receipt == 'data:image/png;base64,AAAA'

        assert len(mailoutbox) == 1
        mail = mailoutbox[0]
        assert mail.to == ['alice@example.com']
        assert mail.subject == 'Item Marked as Purchased'
        assert 'bob' not in mail.body
        assert 'Pour-over kettle' not in mail.body

    def test_second_buyer_overwrites(self, buyer_client, second_buyer_client, item, second_buyer):
        url = reverse('wishlists:item-update', kwargs={'item_id': item.id})
        buyer_client.patch(url, {'receipt': 'first'}, format='json')
        response = second_buyer_client.patch(url, {'receipt': 'second'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        item.refresh_from_db()
        assert item.gotten_by == second_buyer
        assert item.receipt == 'second'

    def test_status_other_than_gotten_rejected(self, buyer_client, item):
        url = reverse('wishlists:item-update', kwargs={'item_id': item.id})
        response = buyer_client.patch(url, {'status': 'available'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        item.refresh_from_db()
        assert item.status == ItemStatus.AVAILABLE

    def test_unknown_item(self, buyer_client):
        url = reverse('wishlists:item-update', kwargs={'item_id': uuid4()})
        response = buyer_client.patch(url, {'status': 'gotten'}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_non_member_cannot_mark(self, outsider_client, item, mailoutbox):
        url = reverse('wishlists:item-update', kwargs={'item_id': item.id})
        response = outsider_client.patch(url, {'status': 'gotten'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        item.refresh_from_db()
        assert item.status == ItemStatus.AVAILABLE
        assert mailoutbox == []

    def test_owner_marking_own_item_gets_sanitized_response(self, owner_client, item):
        url = reverse('wishlists:item-update', kwargs={'item_id': item.id})
        response = owner_client.patch(url, {'status': 'gotten'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert 'status' not in response.data
