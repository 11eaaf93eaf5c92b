from rest_framework import permissions


class IsGroupParticipant(permissions.BasePermission):
    """
    Permission: User must be listed in the group (opted out or not), or be an admin.
    """

    def has_object_permission(self, request, view, obj):
        # obj is a GroupSubmission instance
        return request.user.is_admin or obj.has_participant(request.user)
