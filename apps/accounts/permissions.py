from rest_framework import permissions


class IsAdminRole(permissions.BasePermission):
    """
    Permission check for platform administrators.

    Admin-only routes (forced partner changes, submission review, the
    activity feed of other users) use this instead of ``IsAdminUser`` because
    the role lives on ``User.role`` rather than ``is_staff``.
    """

    message = 'Administrator role required.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_admin)
