from django.contrib import admin
from .models import Activity


@admin.register(Activity)
class ActivityAdmin(admin.ModelAdmin):
    """Read-only view of the audit log."""

    list_display = ['activity_type', 'user', 'quest', 'created_by', 'created_at']
    list_filter = ['activity_type', 'created_at']
    search_fields = ['user__email', 'user__display_name', 'description']
    date_hierarchy = 'created_at'
    raw_id_fields = ['user', 'created_by', 'quest', 'submission']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('user', 'created_by', 'quest')
