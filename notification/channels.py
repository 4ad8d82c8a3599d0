#!/usr/bin/env python3
"""
Notification Channels

Each channel delivers a plain-text notification to one recipient:
- email:  SMTP (configured through SMTP_* environment variables)
- in_app: logged for the in-app inbox

Usage:
    from notification.channels import NotificationChannelFactory

    channel = NotificationChannelFactory.get_channel('email')
    channel.send(recipient, subject, body, metadata)
"""

from abc import ABC, abstractmethod
from typing import Dict, Any
import logging
import os

import smtplib
from email.mime.text import MIMEText

logger = logging.getLogger(__name__)


def _mask_email(email: str) -> str:
    """
    Mask email address for safe logging.

    Shows only domain, e.g., "***@example.com"
    """
    if '@' not in email:
        return "***"
    _, domain = email.rsplit('@', 1)
    return f"***@{domain}"


class NotificationChannel(ABC):
    """Abstract base class for all notification channels."""

    @property
    @abstractmethod
    def channel_type(self) -> str:
        """Return the channel type identifier."""
        pass

    @abstractmethod
    def send(self, recipient: str, subject: str, body: str, metadata: Dict[str, Any]) -> bool:
        """
        Send a notification through this channel.

        Returns:
            True if sent successfully, False otherwise
        """
        pass

    def validate_config(self) -> bool:
        return True


class EmailChannel(NotificationChannel):
    """Email notification channel via SMTP."""

    @property
    def channel_type(self) -> str:
        return 'email'

    def validate_config(self) -> bool:
        required_vars = ['SMTP_SERVER', 'SMTP_PORT', 'SMTP_USERNAME', 'SMTP_PASSWORD']
        return all(os.environ.get(var) for var in required_vars)

    def send(self, recipient: str, subject: str, body: str, metadata: Dict[str, Any]) -> bool:
        if not recipient:
            logger.warning("Email skipped - no recipient address")
            return False

        if not self.validate_config():
            logger.error("Email not configured - SMTP environment variables not set")
            return False

        try:
            msg = MIMEText(body, 'plain', 'utf-8')
            msg['From'] = os.environ.get('FROM_EMAIL', 'noreply@volunteermatch.app')
            msg['To'] = recipient
            msg['Subject'] = subject

            with smtplib.SMTP(os.environ['SMTP_SERVER'], int(os.environ['SMTP_PORT'])) as server:
                server.starttls()
                server.login(os.environ['SMTP_USERNAME'], os.environ['SMTP_PASSWORD'])
                server.send_message(msg)

            logger.info(f"Email sent to {_mask_email(recipient)}")
            return True

        except Exception as e:
            logger.error(f"Failed to send email to {_mask_email(recipient)}: {e}")
            return False


class InAppChannel(NotificationChannel):
    """In-app notification channel."""

    @property
    def channel_type(self) -> str:
        return 'in_app'

    def send(self, recipient: str, subject: str, body: str, metadata: Dict[str, Any]) -> bool:
        logger.info(f"[IN_APP] Recipient: {recipient}, Title: {subject}")
        return True


class NotificationChannelFactory:
    """Registry of available channels."""

    _channels: Dict[str, type] = {
        'email': EmailChannel,
        'in_app': InAppChannel,
    }

    @classmethod
    def get_channel(cls, channel_type: str) -> NotificationChannel:
        """
        Get a notification channel instance by type.

        Raises:
            ValueError: If channel type is not registered
        """
        channel_class = cls._channels.get(channel_type.lower())
        if not channel_class:
            raise ValueError(f"Unknown channel type: {channel_type}. "
                             f"Available: {', '.join(cls._channels.keys())}")
        return channel_class()

    @classmethod
    def register_channel(cls, channel_type: str, channel_class: type):
        if not issubclass(channel_class, NotificationChannel):
            raise ValueError("Channel class must extend NotificationChannel")
        cls._channels[channel_type.lower()] = channel_class
        logger.info(f"Registered new channel type: {channel_type}")

    @classmethod
    def list_channels(cls) -> list:
        return list(cls._channels.keys())
