"""
Pydantic models for location submissions.

A LocationReport is only built after the intake handler has checked the
token and coordinates; it is never stored.
"""

import math
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field

MAPS_URL = "https://www.google.com/maps?q={lat},{lon}"


def is_number(value: Any) -> bool:
    """True for finite ints/floats. Booleans are not numbers here."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def format_number(value: float) -> str:
    """Render a number the way the JSON client sent it (10.0 -> "10")."""
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return str(value)


def to_iso(moment: datetime) -> str:
    """UTC ISO-8601 with millisecond precision, e.g. 2023-11-14T22:13:20.000Z"""
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class LocationReport(BaseModel):
    """A single validated coordinate submission."""
    token: str = Field(..., description="Access token the page was issued for")
    lat: float = Field(..., description="Latitude in degrees")
    lon: float = Field(..., description="Longitude in degrees")
    acc: Optional[float] = Field(None, description="Accuracy radius in meters")
    ts: Optional[float] = Field(None, description="Client timestamp, epoch milliseconds")

    def received_at(self, now: Optional[datetime] = None) -> datetime:
        """
        Timestamp of the report.

        Falls back to `now` (or the current time) when ts is absent, zero,
        or outside the range datetime can represent.
        """
        fallback = now or datetime.now(timezone.utc)
        if not self.ts:
            return fallback
        try:
            return datetime.fromtimestamp(self.ts / 1000.0, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return fallback

    @property
    def maps_url(self) -> str:
        return MAPS_URL.format(lat=format_number(self.lat), lon=format_number(self.lon))
