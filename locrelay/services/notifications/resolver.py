import logging
from typing import Optional

from locrelay.core.settings import settings
from .base import NotificationSender
from .sendgrid_provider import SendGridSender

logger = logging.getLogger(__name__)

_sender_instance: Optional[NotificationSender] = None


def get_notification_sender() -> NotificationSender:
    """
    Resolve the active notification sender.

    SendGrid is the only provider. Missing credentials are not checked here;
    they surface as ConfigurationMissing on startup or at first send.
    """
    global _sender_instance
    if _sender_instance is not None:
        return _sender_instance

    _sender_instance = SendGridSender(settings)
    logger.info(f"Notification sender initialized: {_sender_instance.name}")
    return _sender_instance
