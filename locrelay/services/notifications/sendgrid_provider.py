import logging
from typing import Any, Dict

import requests

from locrelay.core.errors import DeliverySendError
from locrelay.core.settings import Settings
from locrelay.models.email import EmailMessage
from locrelay.utils.sanitize import (
    ADDRESS_MAX,
    BODY_MAX,
    FROM_NAME_MAX,
    REPLY_TO_MAX,
    SUBJECT_MAX,
    safe_str,
)
from .base import DeliveryResult, NotificationSender, delivered, failed

logger = logging.getLogger(__name__)


class SendGridSender(NotificationSender):
    """
    SendGrid v3 Mail Send provider.

    - Bearer-authenticated JSON POST, one attempt, no retry.
    - Bounded by EMAIL_TIMEOUT_SECONDS.
    - Every free-text field goes through safe_str before it is sent.
    - Never raises on provider errors; returns a failed DeliveryResult.
    """

    name = "sendgrid"

    def __init__(self, config: Settings):
        self.config = config
        self.api_url = config.SENDGRID_API_URL
        self.timeout = config.EMAIL_TIMEOUT_SECONDS

    def build_payload(self, message: EmailMessage) -> Dict[str, Any]:
        sender: Dict[str, str] = {"email": safe_str(message.from_email, ADDRESS_MAX)}
        if message.from_name:
            sender["name"] = safe_str(message.from_name, FROM_NAME_MAX)

        payload: Dict[str, Any] = {
            "personalizations": [{"to": [{"email": safe_str(message.to, ADDRESS_MAX)}]}],
            "from": sender,
            "subject": safe_str(message.subject, SUBJECT_MAX),
            "content": [{"type": "text/plain", "value": safe_str(message.body, BODY_MAX)}],
        }

        if message.reply_to:
            payload["reply_to"] = {"email": safe_str(message.reply_to, REPLY_TO_MAX)}

        return payload

    def send(self, message: EmailMessage) -> DeliveryResult:
        api_key = self.config.get_required("SENDGRID_API_KEY")
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        payload = self.build_payload(message)

        try:
            resp = requests.post(self.api_url, json=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"SendGrid request failed: {e}")
            return failed(self.name, DeliverySendError(None, str(e)))

        if not 200 <= resp.status_code < 300:
            body = resp.text
            logger.warning(f"SendGrid API error {resp.status_code}")
            return failed(self.name, DeliverySendError(resp.status_code, body))

        logger.info(f"email_sent provider=sendgrid status={resp.status_code}")
        return delivered(self.name, resp.status_code)
