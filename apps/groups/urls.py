from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'groups'

# Router for ViewSets
router = SimpleRouter()
router.register(r'', views.GroupViewSet, basename='group')

urlpatterns = [
    # Group ViewSet routes
    # GET    /api/groups/                - List user's groups
    # POST   /api/groups/                - Create group

    # Custom group actions
    # GET    /api/groups/{id}/members/   - List members
    # POST   /api/groups/{id}/members/   - Add member by username

    # Include router URLs
    path('', include(router.urls)),
]
