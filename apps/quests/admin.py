from django.contrib import admin
from .models import Quest, QuestStatus


@admin.register(Quest)
class QuestAdmin(admin.ModelAdmin):
    list_display = ['title', 'category', 'points', 'status', 'expires_at', 'created_at']
    list_filter = ['category', 'status']
    search_fields = ['title', 'description']
    ordering = ['-created_at']
    readonly_fields = ['created_by', 'created_at', 'updated_at']

    actions = ['archive_quests']

    @admin.action(description='Archive selected quests')
    def archive_quests(self, request, queryset):
        count = queryset.update(status=QuestStatus.ARCHIVED)
        self.message_user(request, f'Archived {count} quest(s).')

    def save_model(self, request, obj, form, change):
        if not change:
            obj.created_by = request.user
        super().save_model(request, obj, form, change)
