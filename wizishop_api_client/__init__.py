"""
Python client for interacting with the WiziShop REST API.

This package provides a :func:`authenticate` function that logs in
with a WiziShop username and password and returns a
:class:`WiziShopClient` bound to the user's shop.  The client exposes
one method per API endpoint (brands, SKUs, customers, newsletter
subscribers, orders and order status transitions) and walks paginated
collections transparently.

Examples
--------

```python
from datetime import datetime

from wizishop_api_client import ApiError, authenticate

client = authenticate("username", "password")

try:
    orders = client.get_orders({"start_date": datetime(2024, 1, 1)})
except ApiError as exc:
    print(exc.error_message)
```

Tokens are short-lived and are not refreshed by the client; check
``client.credential.is_expired()`` and call :func:`authenticate`
again when needed.
"""

from .auth import authenticate, request_token
from .client import WiziShopClient
from .constants import OrderStatus
from .credential import Credential
from .exceptions import (
    ApiError,
    AuthenticationError,
    InvalidArgumentError,
    MalformedCredentialError,
    WiziShopError,
    WiziShopHTTPError,
)
from .pagination import assemble_results
from .transport import HttpTransport

__version__ = WiziShopClient.VERSION

__all__ = [
    "ApiError",
    "AuthenticationError",
    "Credential",
    "HttpTransport",
    "InvalidArgumentError",
    "MalformedCredentialError",
    "OrderStatus",
    "WiziShopClient",
    "WiziShopError",
    "WiziShopHTTPError",
    "assemble_results",
    "authenticate",
    "request_token",
]
