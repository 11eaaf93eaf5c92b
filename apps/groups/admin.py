from django.contrib import admin
from apps.groups.models import GroupSubmission, GroupParticipant


class GroupParticipantInline(admin.TabularInline):
    """Inline admin for group participants."""
    model = GroupParticipant
    extra = 0
    fields = ['user', 'partner', 'opted_out', 'opted_out_at', 'joined_at']
    readonly_fields = ['user', 'partner', 'opted_out_at', 'joined_at']
    can_delete = False


@admin.register(GroupSubmission)
class GroupSubmissionAdmin(admin.ModelAdmin):
    """Admin interface for group submissions."""

    list_display = [
        'quest',
        'submitter',
        'participant_count',
        'submission_status',
        'created_at',
    ]
    list_filter = ['created_at']
    search_fields = ['quest__title', 'submitter__email']
    readonly_fields = ['quest', 'submission', 'submitter', 'created_at', 'updated_at']
    inlines = [GroupParticipantInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    def participant_count(self, obj):
        """Show number of active participants."""
        return obj.participants.filter(opted_out=False).count()
    participant_count.short_description = 'Active participants'

    def submission_status(self, obj):
        return obj.submission.status
    submission_status.short_description = 'Status'

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('quest', 'submission', 'submitter')
