from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'submissions'

router = DefaultRouter()
router.register(r'', views.SubmissionViewSet, basename='submission')

urlpatterns = [
    # GET    /api/submissions/                          - Visible submissions
    # POST   /api/submissions/                          - Create submission
    # GET    /api/submissions/{id}/                     - Detail
    # DELETE /api/submissions/{id}/                     - Soft-delete / group opt-out
    # POST   /api/submissions/{id}/review/              - Approve or reject (admin)
    # POST   /api/submissions/{id}/escalate/            - Send to manual review (admin)
    # GET    /api/submissions/review-queue/             - Awaiting decision (admin)
    # GET    /api/submissions/quest-status/{quest_id}/  - Pair-aware quest status
    path('', include(router.urls)),
]
