from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'quests'

router = DefaultRouter()
router.register(r'', views.QuestViewSet, basename='quest')

urlpatterns = [
    # GET /api/quests/       - List open quests
    # GET /api/quests/{id}/  - Quest detail
    path('', include(router.urls)),
]
