"""
Notification history storage re-exports.
"""
from core.db.notifications.notifications_store import (
    create_notification,
    get_notifications_for_user,
)

__all__ = [
    "create_notification",
    "get_notifications_for_user",
]
