"""Services for the activity log."""

from .activity_log import record_activity, record_activities, list_activities

__all__ = [
    'record_activity',
    'record_activities',
    'list_activities',
]
