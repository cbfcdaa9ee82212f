"""
HTTP transport used by :class:`~wizishop_api_client.client.WiziShopClient`.

:class:`HttpTransport` wraps a :class:`requests.Session` configured with
a base URL, default headers and an optional timeout.  Every verb
returns the raw :class:`requests.Response`; non-success statuses raise
:class:`requests.HTTPError` so the client can decide how each endpoint
treats them.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)


class HttpTransport:
    """A minimal HTTP transport bound to one base URL.

    Parameters
    ----------
    base_url : str
        URL every relative path is joined to.  A trailing slash is
        added when missing.
    headers : dict, optional
        Default headers sent with every request.
    timeout : float, optional
        Timeout in seconds for each underlying HTTP request.
    session : requests.Session, optional
        Session to send requests with.  A new one is created when
        omitted.
    """

    def __init__(
        self,
        base_url: str,
        *,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not base_url:
            raise ValueError("base_url must be provided")
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.timeout = timeout
        self.session = session or requests.Session()
        if headers:
            self.session.headers.update(headers)

    def __enter__(self) -> "HttpTransport":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def _prepare_url(self, path: str) -> str:
        """Build the full request URL from a relative or absolute path.

        Absolute URLs are returned as-is; anything else is joined to
        ``base_url`` after stripping leading slashes.
        """
        if path.startswith("http://") or path.startswith("https://"):
            return path
        return self.base_url + path.lstrip("/")

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
    ) -> requests.Response:
        """Send a request and return the response.

        Raises
        ------
        requests.HTTPError
            If the response status is not a success code.
        requests.RequestException
            If the request could not be sent at all.
        """
        url = self._prepare_url(path)
        logger.debug("%s %s params=%s", method.upper(), url, params)
        response = self.session.request(
            method=method.upper(),
            url=url,
            params=params,
            json=json,
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response

    # ------------------------------------------------------------------
    # Verb helpers
    # ------------------------------------------------------------------
    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Optional[Any] = None) -> requests.Response:
        return self.request("POST", path, json=json)

    def patch(self, path: str, json: Optional[Any] = None) -> requests.Response:
        return self.request("PATCH", path, json=json)

    def delete(self, path: str) -> requests.Response:
        return self.request("DELETE", path)
