"""
Outbound email notifications.

Senders return a DeliveryResult instead of raising on provider failure.
"""

from locrelay.services.notifications.base import DeliveryResult, NotificationSender
from locrelay.services.notifications.sendgrid_provider import SendGridSender
from locrelay.services.notifications.resolver import get_notification_sender

__all__ = [
    "DeliveryResult",
    "NotificationSender",
    "SendGridSender",
    "get_notification_sender",
]
