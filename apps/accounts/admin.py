from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for participants and administrators.

    The partner reference is read-only here: partnerships must go through
    the partnership services so both sides stay reciprocal and the change is
    recorded in the activity log.
    """

    list_display = [
        'email',
        'display_name',
        'role_badge',
        'partner',
        'is_active',
        'created_at',
        'last_login',
    ]

    list_filter = [
        'role',
        'is_active',
        'is_staff',
        'created_at',
    ]

    search_fields = [
        'email',
        'display_name',
        'telegram_username',
    ]

    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'display_name', 'telegram_username', 'password')
        }),
        ('Quest', {
            'fields': ('role', 'partner'),
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'display_name', 'role', 'password1', 'password2'),
        }),
    )

    readonly_fields = [
        'partner',
        'created_at',
        'last_login',
    ]

    filter_horizontal = ['groups', 'user_permissions']

    def role_badge(self, obj):
        """Display role as colored badge."""
        if obj.is_admin:
            return format_html(
                '<span style="background: #A47449; color: white; padding: 3px 8px; '
                'border-radius: 10px; font-size: 11px;">Admin</span>'
            )
        return format_html(
            '<span style="background: #ccc; color: #666; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">Participant</span>'
        )
    role_badge.short_description = 'Role'
    role_badge.admin_order_field = 'role'

    actions = [
        'activate_users',
        'deactivate_users',
    ]

    @admin.action(description='Activate selected users')
    def activate_users(self, request, queryset):
        count = queryset.update(is_active=True)
        self.message_user(request, f'Activated {count} user(s).')

    @admin.action(description='Deactivate selected users')
    def deactivate_users(self, request, queryset):
        """Deactivate selected users (superusers are skipped)."""
        safe_queryset = queryset.filter(is_superuser=False)
        count = safe_queryset.update(is_active=False)
        skipped = queryset.count() - count
        msg = f'Deactivated {count} user(s).'
        if skipped:
            msg += f' Skipped {skipped} superuser(s).'
        self.message_user(request, msg)

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('partner')
