"""
Unit tests for the location intake handler.
"""

import asyncio
import threading
import pytest
from datetime import datetime, timezone

from locrelay.core.errors import AuthorizationFailure, DeliverySendError, ValidationFailure
from locrelay.models.location import LocationReport, format_number, to_iso
from locrelay.services.location_intake import LocationIntakeHandler, build_body
from locrelay.services.notifications.base import NotificationSender, delivered

RECEIVED = datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)


class RaisingSender(NotificationSender):
    name = "raising"

    def send(self, message):
        raise DeliverySendError(502, "bad gateway")


@pytest.fixture
def handler(registry, sender, test_settings):
    return LocationIntakeHandler(registry=registry, sender=sender, config=test_settings)


class TestParse:

    def test_non_dict_payload_is_unauthorized(self, handler):
        with pytest.raises(AuthorizationFailure):
            handler.parse(["ABC123", 1, 2])

    def test_bad_coords(self, handler):
        with pytest.raises(ValidationFailure):
            handler.parse({"token": "ABC123", "lat": 1, "lon": float("nan")})

    def test_non_numeric_accuracy_is_dropped(self, handler):
        report = handler.parse({"token": "ABC123", "lat": 1, "lon": 2, "acc": "12"})
        assert report.acc is None

    def test_integer_coordinates_accepted(self, handler):
        report = handler.parse({"token": "ABC123", "lat": 10, "lon": -20})
        assert report.maps_url == "https://www.google.com/maps?q=10,-20"


class TestHandle:

    @pytest.mark.asyncio
    async def test_accepted(self, handler, sender):
        response = await handler.handle({"token": "ABC123", "lat": -23.55, "lon": -46.63}, now=RECEIVED)

        assert response.status_code == 200
        assert response.body == {"ok": True}
        assert "Quando: 2024-01-02T03:04:05.678Z" in sender.messages[0].body

    @pytest.mark.asyncio
    async def test_message_uses_configured_sender_identity(self, handler, sender):
        await handler.handle({"token": "ABC123", "lat": 1, "lon": 2})

        message = sender.messages[0]
        assert message.from_email == "relay@example.com"
        assert message.from_name == "Location Relay"
        assert message.reply_to == "owner@example.com"
        assert message.subject == "📍 Localização recebida (ABC123)"

    @pytest.mark.asyncio
    async def test_zero_timestamp_falls_back_to_receipt_time(self, handler, sender):
        await handler.handle({"token": "ABC123", "lat": 1, "lon": 2, "ts": 0}, now=RECEIVED)
        assert "Quando: 2024-01-02T03:04:05.678Z" in sender.messages[0].body

    @pytest.mark.asyncio
    async def test_out_of_range_timestamp_falls_back_to_receipt_time(self, handler, sender):
        await handler.handle({"token": "ABC123", "lat": 1, "lon": 2, "ts": 1e20}, now=RECEIVED)
        assert "Quando: 2024-01-02T03:04:05.678Z" in sender.messages[0].body

    @pytest.mark.asyncio
    async def test_sender_raising_delivery_error_is_email_failed(self, registry, test_settings):
        handler = LocationIntakeHandler(registry=registry, sender=RaisingSender(), config=test_settings)
        response = await handler.handle({"token": "ABC123", "lat": 1, "lon": 2})

        assert response.status_code == 500
        assert response.body == {"ok": False, "error": "email_failed"}

    @pytest.mark.asyncio
    async def test_receipt_logged_even_when_send_fails(self, registry, test_settings, caplog):
        handler = LocationIntakeHandler(registry=registry, sender=RaisingSender(), config=test_settings)
        with caplog.at_level("INFO", logger="locrelay"):
            await handler.handle({"token": "ABC123", "lat": 1.5, "lon": 2.5, "acc": 8})

        messages = [r.getMessage() for r in caplog.records]
        assert any(m.startswith("location_received token=ABC123 lat=1.5 lon=2.5 acc=8 when=") for m in messages)
        assert any(m.startswith("email_failed") and "bad gateway" in m for m in messages)

    @pytest.mark.asyncio
    async def test_unknown_token_never_reaches_sender(self, handler, sender):
        with pytest.raises(AuthorizationFailure):
            await handler.handle({"token": "XYZ", "lat": 1, "lon": 2})
        assert sender.messages == []


class TestFormatting:

    def test_body_layout(self):
        report = LocationReport(token="ABC123", lat=-23.55, lon=-46.63, acc=12.3, ts=1700000000000)
        body = build_body(report, to_iso(report.received_at()))

        assert body.splitlines() == [
            "Token: ABC123",
            "Quando: 2023-11-14T22:13:20.000Z",
            "Latitude: -23.55",
            "Longitude: -46.63",
            "Precisão: 12.3 m",
            "Maps: https://www.google.com/maps?q=-23.55,-46.63",
        ]

    @pytest.mark.parametrize("value, expected", [(10.0, "10"), (-23.55, "-23.55"), (7, "7"), (0.5, "0.5")])
    def test_format_number(self, value, expected):
        assert format_number(value) == expected

    def test_iso_timestamp_pads_early_years(self):
        report = LocationReport(token="ABC123", lat=1, lon=2, ts=-60000000000000)
        assert to_iso(report.received_at()) == "0068-09-03T13:20:00.000Z"


class BlockingSender(NotificationSender):
    """Waits for another coroutine to release it, recording the thread it ran on."""

    name = "blocking"

    def __init__(self):
        self.release = threading.Event()
        self.released = None
        self.thread = None

    def send(self, message):
        self.thread = threading.current_thread()
        self.released = self.release.wait(timeout=2)
        return delivered(self.name, 202)


class TestConcurrency:

    @pytest.mark.asyncio
    async def test_send_runs_off_the_event_loop_thread(self, registry, test_settings):
        blocking = BlockingSender()
        handler = LocationIntakeHandler(registry=registry, sender=blocking, config=test_settings)

        async def release_sender():
            await asyncio.sleep(0.05)
            blocking.release.set()

        response, _ = await asyncio.gather(
            handler.handle({"token": "ABC123", "lat": 1, "lon": 2}),
            release_sender(),
        )

        assert response.status_code == 200
        assert blocking.released is True
        assert blocking.thread is not threading.current_thread()
