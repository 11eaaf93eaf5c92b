from django.contrib import admin
from .models import Submission


@admin.register(Submission)
class SubmissionAdmin(admin.ModelAdmin):
    """
    Admin interface for submissions.

    Status and points are read-only: approvals go through the review API so
    points are awarded exactly once and the decision is logged.
    """

    list_display = [
        'user',
        'quest',
        'status',
        'points_awarded',
        'is_group_submission',
        'is_deleted',
        'submitted_at',
    ]
    list_filter = ['status', 'is_group_submission', 'is_deleted', 'submitted_at']
    search_fields = ['user__email', 'user__display_name', 'quest__title', 'proof_ref']
    date_hierarchy = 'submitted_at'
    ordering = ['-submitted_at']
    raw_id_fields = ['user', 'quest']
    readonly_fields = [
        'status',
        'points_awarded',
        'visible_to_partner',
        'is_group_submission',
        'represents_pairs',
        'reviewed_by',
        'reviewed_at',
        'is_deleted',
        'deleted_at',
        'deleted_by',
        'submitted_at',
        'updated_at',
    ]

    def has_delete_permission(self, request, obj=None):
        return False

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('user', 'quest')
