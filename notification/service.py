#!/usr/bin/env python3
"""
Notification Service - Match lifecycle notifications.

Builds plain-text messages for match events and delivers them through the
configured channels, either via a Redis queue (rq) or synchronously when
the queue is disabled or Redis is unreachable.

Usage:
    from notification.service import NotificationService

    service = NotificationService(channels=['email'], base_url='https://...')
    service.notify_match_event('match_accepted', context)
"""

import logging
import uuid
from typing import Any, Dict, List, Optional

from redis import Redis
from rq import Queue, Retry

from notification.channels import NotificationChannelFactory
from notification.message_builder import (
    NotificationMessageBuilder,
    MatchNotificationContent,
    MATCH_CREATED,
)

logger = logging.getLogger(__name__)

QUEUE_NAME = 'notifications'


class NotificationService:
    """
    Coordinates message building, channel selection and queueing.
    """

    def __init__(
        self,
        channels: Optional[List[str]] = None,
        base_url: str = "http://localhost:8080",
        redis_url: Optional[str] = None,
        use_async_queue: bool = True
    ):
        self.channels = channels or ['email']
        self.builder = NotificationMessageBuilder(base_url)
        self.redis_url = redis_url or 'redis://localhost:6379/0'

        if not use_async_queue:
            logger.info("Async queue disabled via config. Using sync mode.")
            self.redis_conn = None
            self.queue = None
            self.async_mode = False
            return

        try:
            self.redis_conn = Redis.from_url(self.redis_url)
            # Validate connection with ping before using
            self.redis_conn.ping()
            self.queue = Queue(QUEUE_NAME, connection=self.redis_conn)
            self.async_mode = True
            logger.info("Notification service connected to Redis")
        except Exception as e:
            logger.error(f"Redis connection failed: {e}. Falling back to sync mode.")
            self.redis_conn = None
            self.queue = None
            self.async_mode = False

    def send_notification(
        self,
        channel_type: str,
        recipient: str,
        subject: str,
        body: str,
        event_type: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> Optional[str]:
        """
        Queue or send one notification.

        Returns:
            Job id when queued, notification id when sent synchronously
        """
        notification_data = {
            'channel_type': channel_type,
            'recipient': recipient,
            'subject': subject,
            'body': body,
            'event_type': event_type,
            'metadata': metadata or {},
        }

        if self.async_mode:
            job = self.queue.enqueue(
                process_notification_task,
                notification_data,
                job_timeout='5m',
                result_ttl=86400,
                retry=Retry(max=3, interval=[30, 60, 120])
            )
            logger.info(f"Queued {event_type} notification as job {job.id}")
            return job.id

        return process_notification_task(notification_data)

    def notify_match_event(self, event: str, context: Dict[str, Any]) -> Dict[str, Optional[str]]:
        """
        Notify the affected party about a match event on every channel.

        The organisation hears about new interest; the volunteer hears about
        acceptance and rejection.
        """
        content = MatchNotificationContent(**context)
        message = self.builder.build(event, content)
        in_app_recipient = content.organisation_name if event == MATCH_CREATED else content.volunteer_name

        results = {}
        for channel in self.channels:
            recipient = message.recipient if channel == 'email' else in_app_recipient
            if not recipient:
                logger.info(f"No {channel} recipient for {event} on match {content.match_id}")
                results[channel] = None
                continue
            try:
                results[channel] = self.send_notification(
                    channel_type=channel,
                    recipient=recipient,
                    subject=message.subject,
                    body=message.body,
                    event_type=event,
                    metadata={'match_id': content.match_id}
                )
            except Exception as e:
                logger.error(f"Failed to send {channel} notification: {e}")
                results[channel] = None

        return results


# Worker task - must be at module level for RQ
def process_notification_task(notification_data: Dict[str, Any]) -> str:
    """Deliver one notification (called by the RQ worker or inline)."""
    notification_id = str(uuid.uuid4())
    channel_type = notification_data['channel_type']

    logger.info(f"Processing notification {notification_id} via {channel_type}")

    channel = NotificationChannelFactory.get_channel(channel_type)
    success = channel.send(
        notification_data['recipient'],
        notification_data['subject'],
        notification_data['body'],
        notification_data.get('metadata', {})
    )

    if success:
        logger.info(f"Notification {notification_id} sent successfully")
    else:
        logger.error(f"Notification {notification_id} failed to send")

    return notification_id
