"""
Login flow of the WiziShop API.

:func:`authenticate` exchanges a username and password for a token at
the ``auth/login`` endpoint and returns a :class:`WiziShopClient` bound
to the shop the token belongs to.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from .client import WiziShopClient
from .credential import Credential
from .exceptions import AuthenticationError

logger = logging.getLogger(__name__)

LOGIN_PATH = "auth/login"


def request_token(
    username: str,
    password: str,
    *,
    api_url: Optional[str] = None,
    timeout: Optional[float] = None,
) -> Credential:
    """Log in and return the decoded token.

    Raises
    ------
    AuthenticationError
        If the login request fails or the response holds no token.
    MalformedCredentialError
        If the returned token cannot be decoded.
    """
    if not username:
        raise ValueError("username must be provided")
    if not password:
        raise ValueError("password must be provided")

    api_url = api_url or WiziShopClient.API_URL
    url = f"{api_url.rstrip('/')}/{LOGIN_PATH}"
    try:
        response = requests.post(
            url,
            json={"username": username, "password": password},
            timeout=timeout,
        )
        response.raise_for_status()
    except requests.RequestException as exc:
        raise AuthenticationError(
            f"Authentication problem: {exc}",
            request=exc.request,
            response=exc.response,
        ) from exc

    try:
        token_info: Dict[str, Any] = response.json()
    except ValueError as exc:
        raise AuthenticationError(
            "Authentication response is not valid JSON",
            request=response.request,
            response=response,
        ) from exc

    token = token_info.get("token") if isinstance(token_info, dict) else None
    if not token:
        raise AuthenticationError(
            "Authentication response did not contain a token",
            request=response.request,
            response=response,
        )

    credential = Credential.from_string(token)
    logger.debug("Authenticated %s for shop %s", username, credential.shop_id)
    return credential


def authenticate(
    username: str,
    password: str,
    *,
    api_url: Optional[str] = None,
    timeout: Optional[float] = None,
    **config: Any,
) -> WiziShopClient:
    """Log in and return a client for the user's shop.

    Parameters
    ----------
    username, password : str
        WiziShop API credentials.
    api_url : str, optional
        Override the API root URL, for both the login request and the
        returned client.
    timeout : float, optional
        Timeout in seconds for the login request and the client's
        requests.
    **config
        Extra keyword arguments passed to :class:`WiziShopClient`.
    """
    credential = request_token(username, password, api_url=api_url, timeout=timeout)
    return WiziShopClient(credential, api_url=api_url, timeout=timeout, **config)
