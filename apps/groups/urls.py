from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'groups'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.GroupViewSet, basename='group')

urlpatterns = [
    # Group ViewSet routes
    # GET    /api/groups/                - List user's group submissions
    # POST   /api/groups/                - Create group submission
    # GET    /api/groups/{id}/           - Status and participant partition

    # Custom group actions
    # POST   /api/groups/{id}/opt-out/   - Opt caller (and partner) out
    # POST   /api/groups/{id}/opt-in/    - Opt caller (and partner) back in

    # Include router URLs
    path('', include(router.urls)),
]
