"""Shared fixtures for the wizishop_api_client tests.

Token and response builders, a fake transport replaying scripted
responses, and a client bound to it.
"""

from __future__ import annotations

import base64
import json
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest
import requests

from wizishop_api_client import Credential, WiziShopClient

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def base64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def build_token(payload: Any, header: Any = None, signature: str = "Signature") -> str:
    """Encode a compact JWT without signing it."""
    if header is None:
        header = {"alg": "RS256", "typ": "JWS"}
    return ".".join(
        [
            base64url_encode(json.dumps(header).encode("utf-8")),
            base64url_encode(json.dumps(payload).encode("utf-8")),
            signature,
        ]
    )


def build_response(
    status: int = 200,
    json_body: Any = None,
    content: bytes = b"",
    content_type: str | None = None,
) -> requests.Response:
    """Build a :class:`requests.Response` without any network access."""
    response = requests.Response()
    response.status_code = status
    response.url = "https://api.wizishop.test/v2/shops/131/"
    response.encoding = "utf-8"
    if json_body is not None:
        response._content = json.dumps(json_body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    else:
        response._content = content
        if content_type:
            response.headers["Content-Type"] = content_type
    return response


class FakeTransport:
    """Transport double replaying scripted responses in order.

    Responses with an error status raise :class:`requests.HTTPError`
    like :class:`~wizishop_api_client.transport.HttpTransport` does;
    scripted exceptions are raised as-is.
    """

    def __init__(self) -> None:
        self.responses: list[Any] = []
        self.calls: list[tuple[str, str, Any]] = []
        self.closed = False

    def queue(self, *responses: Any) -> None:
        self.responses.extend(responses)

    def _reply(self, method: str, path: str, data: Any) -> requests.Response:
        self.calls.append((method, path, data))
        if not self.responses:
            raise AssertionError(f"Unexpected {method} {path}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        response.raise_for_status()
        return response

    def get(self, path: str, params: Any = None) -> requests.Response:
        return self._reply("GET", path, params)

    def post(self, path: str, json: Any = None) -> requests.Response:
        return self._reply("POST", path, json)

    def patch(self, path: str, json: Any = None) -> requests.Response:
        return self._reply("PATCH", path, json)

    def delete(self, path: str) -> requests.Response:
        return self._reply("DELETE", path, None)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def make_token() -> Callable[..., str]:
    return build_token


@pytest.fixture
def make_response() -> Callable[..., requests.Response]:
    return build_response


@pytest.fixture
def payload() -> dict[str, Any]:
    return {
        "exp": int((NOW + timedelta(days=30)).timestamp()),
        "username": "test",
        "id_shop": 131,
        "ac_shop": 11,
        "user_id": 0,
        "iat": int(NOW.timestamp()),
    }


@pytest.fixture
def credential(payload: dict[str, Any]) -> Credential:
    return Credential.from_string(build_token(payload))


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def client(credential: Credential, transport: FakeTransport) -> WiziShopClient:
    return WiziShopClient(credential, transport=transport)
