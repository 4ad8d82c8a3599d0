"""
Notification Module

Match lifecycle notifications over email and in-app channels, sent
synchronously or through a Redis queue.
"""

from notification.channels import (
    NotificationChannel,
    EmailChannel,
    InAppChannel,
    NotificationChannelFactory,
)

from notification.service import (
    NotificationService,
    process_notification_task,
)

__all__ = [
    'NotificationChannel',
    'EmailChannel',
    'InAppChannel',
    'NotificationChannelFactory',
    'NotificationService',
    'process_notification_task',
]
