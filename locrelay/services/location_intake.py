"""
Location Intake - validates a browser submission and relays it by email.

ORDER OF CHECKS:
1. Token (403 invalid_token) - nothing else happens for unknown tokens
2. Coordinates (400 bad_coords)
3. Receipt is logged, then the email is sent

Send failures never escape as exceptions; the caller gets 500 email_failed
and the provider detail stays in the server log.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from locrelay.core.errors import AuthorizationFailure, DeliverySendError, ValidationFailure
from locrelay.core.settings import Settings
from locrelay.models.email import EmailMessage
from locrelay.models.location import LocationReport, format_number, is_number, to_iso
from locrelay.services.notifications.base import DeliveryResult, NotificationSender, failed
from locrelay.services.token_registry import TokenRegistry

logger = logging.getLogger(__name__)


class IntakeResponse:
    """Status code and JSON body for the intake endpoint."""

    def __init__(self, status_code: int, body: Dict[str, Any]):
        self.status_code = status_code
        self.body = body

    @classmethod
    def accepted(cls) -> "IntakeResponse":
        return cls(200, {"ok": True})

    @classmethod
    def email_failed(cls) -> "IntakeResponse":
        return cls(500, {"ok": False, "error": "email_failed"})


def build_subject(report: LocationReport) -> str:
    return f"📍 Localização recebida ({report.token})"


def build_body(report: LocationReport, when: str) -> str:
    acc = format_number(report.acc) if report.acc is not None else "n/a"
    return (
        f"Token: {report.token}\n"
        f"Quando: {when}\n"
        f"Latitude: {format_number(report.lat)}\n"
        f"Longitude: {format_number(report.lon)}\n"
        f"Precisão: {acc} m\n"
        f"Maps: {report.maps_url}"
    )


class LocationIntakeHandler:
    """
    Handles one POST /api/location body.

    The registry, sender and settings are injected so the handler holds
    no global state of its own.
    """

    def __init__(self, registry: TokenRegistry, sender: NotificationSender, config: Settings):
        self.registry = registry
        self.sender = sender
        self.config = config

    def parse(self, payload: Any) -> LocationReport:
        """
        Check token and coordinates and build a LocationReport.

        Raises:
            AuthorizationFailure: token missing or unknown
            ValidationFailure: lat/lon missing or not numeric
        """
        if not isinstance(payload, dict):
            payload = {}

        token = payload.get("token")
        if not token or not self.registry.is_valid(token):
            logger.warning("Rejected location submission: invalid token")
            raise AuthorizationFailure()

        lat = payload.get("lat")
        lon = payload.get("lon")
        if not is_number(lat) or not is_number(lon):
            logger.warning(f"Rejected location submission for {token}: bad coordinates")
            raise ValidationFailure()

        acc = payload.get("acc")
        ts = payload.get("ts")
        return LocationReport(
            token=token,
            lat=lat,
            lon=lon,
            acc=acc if is_number(acc) else None,
            ts=ts if is_number(ts) else None,
        )

    def build_message(self, report: LocationReport, when: str) -> EmailMessage:
        return EmailMessage(
            to=self.config.get_required("TO_EMAIL"),
            from_email=self.config.get_required("FROM_EMAIL"),
            from_name=self.config.get_optional("FROM_NAME"),
            reply_to=self.config.get_optional("REPLY_TO"),
            subject=build_subject(report),
            body=build_body(report, when),
        )

    async def handle(self, payload: Any, now: Optional[datetime] = None) -> IntakeResponse:
        """
        Validate, log and relay a submission.

        Args:
            payload: Decoded JSON body
            now: Receipt time (defaults to the current UTC time)

        Returns:
            IntakeResponse: 200 {ok: true} or 500 email_failed

        Raises:
            AuthorizationFailure, ValidationFailure: before any send is attempted
        """
        report = self.parse(payload)
        when = to_iso(report.received_at(now or datetime.now(timezone.utc)))
        acc = format_number(report.acc) if report.acc is not None else None

        logger.info(
            f"location_received token={report.token} lat={format_number(report.lat)} "
            f"lon={format_number(report.lon)} acc={acc} when={when}"
        )

        message = self.build_message(report, when)

        # requests is blocking; keep it off the event loop
        loop = asyncio.get_event_loop()
        try:
            result: DeliveryResult = await loop.run_in_executor(None, self.sender.send, message)
        except DeliverySendError as e:
            result = failed(getattr(self.sender, "name", "unknown"), e)

        if not result.ok:
            logger.error(f"email_failed token={report.token} status={result.status_code} detail={result.detail}")
            return IntakeResponse.email_failed()

        return IntakeResponse.accepted()
