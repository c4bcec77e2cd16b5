"""
Error taxonomy for Location Relay.

Client errors carry the status code and error code the API reports.
DeliverySendError is only ever carried inside a DeliveryResult and logged;
callers see "email_failed" and nothing from the provider.
"""

from typing import Optional


class LocationRelayError(Exception):
    """Base class for errors that map to a structured API response."""

    status_code: int = 500
    error_code: str = "server_error"


class ConfigurationMissing(LocationRelayError):
    """A required setting is absent."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Missing required setting: {name}")


class AuthorizationFailure(LocationRelayError):
    status_code = 403
    error_code = "invalid_token"


class ValidationFailure(LocationRelayError):
    status_code = 400
    error_code = "bad_coords"


class DeliverySendError(Exception):
    """
    The email provider rejected the request or could not be reached.

    Args:
        status_code: provider HTTP status, None on transport failure
        body: raw provider response body (or transport error text)
    """

    def __init__(self, status_code: Optional[int], body: str = ""):
        self.status_code = status_code
        self.body = body
        if status_code is None:
            message = f"Email transport error: {body}"
        else:
            message = f"Email API error {status_code}: {body}"
        super().__init__(message)
