from django.urls import path
from . import views

app_name = 'wishlists'

urlpatterns = [
    # POST   /api/groups/{group_id}/wishlist/             - Add item to own wishlist
    # GET    /api/groups/{group_id}/wishlist/{user_id}/   - View a member's wishlist
    # PATCH  /api/wishlist/{item_id}/                     - Mark item as purchased
    path('groups/<uuid:group_id>/wishlist/', views.create_item, name='item-create'),
    path('groups/<uuid:group_id>/wishlist/<uuid:user_id>/', views.owner_wishlist, name='owner-wishlist'),
    path('wishlist/<uuid:item_id>/', views.update_item, name='item-update'),
]
