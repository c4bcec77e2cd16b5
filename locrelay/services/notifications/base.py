from abc import ABC, abstractmethod
from typing import Optional
import logging

from locrelay.core.errors import DeliverySendError
from locrelay.models.email import EmailMessage

logger = logging.getLogger(__name__)


class DeliveryResult:
    """
    Outcome of one send attempt.

    Failed results carry the DeliverySendError with the provider status
    code and raw body; callers branch on `ok` instead of catching.
    """

    def __init__(
        self,
        ok: bool,
        provider: str,
        status_code: Optional[int] = None,
        error: Optional[DeliverySendError] = None
    ):
        self.ok = ok
        self.provider = provider
        self.status_code = status_code
        self.error = error

    @property
    def detail(self) -> str:
        return str(self.error) if self.error else ""


class NotificationSender(ABC):
    """
    Abstract email sender.

    Contract:
    - Input: EmailMessage
    - Output: DeliveryResult
    - One attempt per call, no retry.
    - MUST NOT raise for provider rejections or transport failures;
      those come back as a failed DeliveryResult.
    """

    name = "abstract"

    @abstractmethod
    def send(self, message: EmailMessage) -> DeliveryResult:
        raise NotImplementedError


def delivered(provider: str, status_code: int) -> DeliveryResult:
    return DeliveryResult(ok=True, provider=provider, status_code=status_code)


def failed(provider: str, error: DeliverySendError) -> DeliveryResult:
    return DeliveryResult(ok=False, provider=provider, status_code=error.status_code, error=error)
