"""
Custom exception types for the WiziShop API client.

These exceptions allow callers to distinguish between a malformed
credential, a rejected argument, a failed login and a failed API
request.  Errors wrapping an HTTP failure keep the original
``requests`` request and response for diagnostics.
"""

from __future__ import annotations

from typing import Any, Optional

import requests


class WiziShopError(Exception):
    """Base exception for all WiziShop client errors."""


class MalformedCredentialError(WiziShopError, ValueError):
    """Raised when a token string is not a well-formed three-segment JWT."""


class InvalidArgumentError(WiziShopError, ValueError):
    """Raised when a caller-supplied argument is rejected before any request is sent."""


class WiziShopHTTPError(WiziShopError):
    """Base class for errors raised from an HTTP round-trip.

    Parameters
    ----------
    message : str
        Human readable description of the failure.
    request : requests.PreparedRequest, optional
        The request that failed, when one was sent.
    response : requests.Response, optional
        The response received, if the server answered at all.
    """

    def __init__(
        self,
        message: str,
        request: Optional[requests.PreparedRequest] = None,
        response: Optional[requests.Response] = None,
    ) -> None:
        super().__init__(message)
        self.request = request
        self.response = response

    @classmethod
    def from_request_exception(cls, exc: requests.RequestException) -> "WiziShopHTTPError":
        """Wrap a ``requests`` exception, keeping its request and response."""
        return cls(str(exc), request=exc.request, response=exc.response)

    @property
    def status_code(self) -> Optional[int]:
        """HTTP status of the response, or ``None`` on connection failures."""
        if self.response is None:
            return None
        return self.response.status_code

    @property
    def error_message(self) -> Optional[str]:
        """The ``message`` field of the server's JSON error body.

        Returns ``None`` when there is no response or its body is not a
        JSON object, and an empty string when the object carries no
        ``message`` key.
        """
        if self.response is None:
            return None
        try:
            body: Any = self.response.json()
        except ValueError:
            return None
        if not body or not isinstance(body, dict):
            return None
        return body.get("message", "")


class AuthenticationError(WiziShopHTTPError):
    """Raised when the login request fails or returns no token."""


class ApiError(WiziShopHTTPError):
    """Raised when an HTTP request to the WiziShop API returns an error status."""
