"""
Client implementation for the WiziShop REST API.

This module defines the :class:`WiziShopClient` class which performs
authenticated requests against the endpoints of one WiziShop shop.
The client is built from a :class:`~wizishop_api_client.credential.Credential`
(usually by :func:`~wizishop_api_client.auth.authenticate`): the shop
identifier found in the token selects the API base URL and the raw
token is sent as a bearer credential with every request.

Usage
-----

.. code-block:: python

    from wizishop_api_client import authenticate

    client = authenticate("username", "password")

    # Every page of the collection is fetched transparently
    for order in client.get_orders({"status_code": 20}):
        print(order["id"])

    # Passing ``page`` or ``limit`` opts out of auto-pagination
    first_page = client.get_skus({"page": 1, "limit": 10})

List methods walk every page of a collection, 100 items at a time, and
return a single list.  A ``404`` answer on a read means "nothing
found" for this API and is returned as an empty result instead of an
error.  Every other failure raises
:class:`~wizishop_api_client.exceptions.ApiError`.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from datetime import date as _date, time as _time, datetime as _datetime

from .constants import (
    DATE_FORMAT,
    MAX_ORDER_STATUS_CODE,
    MIN_ORDER_STATUS_CODE,
    STOCK_UPDATE_METHODS,
)
from .credential import Credential
from .exceptions import ApiError, InvalidArgumentError
from .pagination import PAGE_SIZE, ResultPage, assemble_results, extract_results
from .transport import HttpTransport

logger = logging.getLogger(__name__)

# Filters of the order list that accept a date or datetime.
ORDER_DATE_FILTERS = ("start_date", "end_date")


def _status_of(exc: requests.RequestException) -> Optional[int]:
    if exc.response is None:
        return None
    return exc.response.status_code


def format_date(value: Any) -> Any:
    """Serialize a ``date`` or ``datetime`` filter as ``YYYY-MM-DD HH:MM:SS``.

    Dates are sent as midnight of that day.  Any other value, such as
    a pre-formatted string, is returned unchanged.
    """
    if isinstance(value, _datetime):
        return value.strftime(DATE_FORMAT)
    if isinstance(value, _date):
        return _datetime.combine(value, _time.min).strftime(DATE_FORMAT)
    return value


def validate_status_code(value: Any) -> int:
    """Return ``value`` as an order status code or raise :class:`InvalidArgumentError`.

    Integers, integral floats and numeric strings are accepted.
    """
    code = value
    if isinstance(value, str):
        try:
            code = int(value)
        except ValueError as exc:
            raise InvalidArgumentError(
                "Order status code should be an integer, got %r" % (value,)
            ) from exc
    elif isinstance(value, float) and value.is_integer():
        code = int(value)
    if isinstance(code, bool) or not isinstance(code, int):
        raise InvalidArgumentError("Order status code should be an integer, got %r" % (value,))
    code = int(code)
    if code < MIN_ORDER_STATUS_CODE or code > MAX_ORDER_STATUS_CODE:
        raise InvalidArgumentError(
            "Order status code should be between %d and %d"
            % (MIN_ORDER_STATUS_CODE, MAX_ORDER_STATUS_CODE)
        )
    return code


class WiziShopClient:
    """A client for the endpoints of one WiziShop shop.

    Parameters
    ----------
    credential : Credential
        The decoded token returned by the login endpoint.  Its
        ``id_shop`` claim selects the shop the client talks to.
    transport : object, optional
        Object exposing ``get``, ``post``, ``patch`` and ``delete``
        that return :class:`requests.Response` objects and raise
        :class:`requests.RequestException` on failure.  When omitted,
        an :class:`~wizishop_api_client.transport.HttpTransport` is
        built from the other arguments.
    api_url : str, optional
        Override the API root URL (``API_URL`` by default).
    base_url : str, optional
        Override the full base URL derived from ``api_url``,
        ``api_version`` and the shop identifier.
    api_version : str, optional
        API version path segment.  Defaults to ``API_VERSION``.
    user_agent : str, optional
        Override the ``User-Agent`` header.
    timeout : float, optional
        Timeout in seconds for each HTTP request.
    not_found_as_empty : bool, optional
        When true (the default), a ``404`` on a single resource read
        returns an empty result instead of raising :class:`ApiError`.
        Collection reads always treat ``404`` as an empty collection.

    Notes
    -----
    The client holds no mutable state once built.  It does not refresh
    its token: check ``client.credential.is_expired()`` and
    authenticate again when needed.
    """

    #: Version of this client, advertised in the ``User-Agent`` header
    VERSION = "1.0.1"
    #: API root URL (ending with /)
    API_URL = "https://api.wizishop.com/"
    API_VERSION = "v2"

    def __init__(
        self,
        credential: Credential,
        *,
        transport: Optional[Any] = None,
        api_url: Optional[str] = None,
        base_url: Optional[str] = None,
        api_version: Optional[str] = None,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
        not_found_as_empty: bool = True,
    ) -> None:
        if credential is None:
            raise ValueError("credential must be provided")

        self.credential = credential
        self.api_url = api_url or self.API_URL
        self.api_version = api_version or self.API_VERSION
        self.base_url = base_url or self._build_base_url()
        self.user_agent = user_agent or self.default_user_agent()
        self.not_found_as_empty = not_found_as_empty

        if transport is None:
            transport = HttpTransport(
                self.base_url,
                headers=self.default_headers(),
                timeout=timeout,
            )
        self.transport = transport

    def __enter__(self) -> "WiziShopClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Release the transport's connections, if it holds any."""
        close = getattr(self.transport, "close", None)
        if close is not None:
            close()

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def _build_base_url(self) -> str:
        """Return ``<api_url><api_version>/shops/<id_shop>/``.

        The ``shops/<id_shop>/`` part is left out when the token
        carries no shop identifier.
        """
        api_url = self.api_url if self.api_url.endswith("/") else self.api_url + "/"
        base_url = f"{api_url}{self.api_version.strip('/')}/"
        shop_id = self.credential.shop_id
        if shop_id:
            base_url += f"shops/{shop_id}/"
        return base_url

    def default_user_agent(self) -> str:
        return f"{requests.utils.default_user_agent()} wizishop-python-sdk/{self.VERSION}"

    def default_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.credential.token}",
            "User-Agent": self.user_agent,
            "Accept": "application/json",
        }

    # ------------------------------------------------------------------
    # Fetch policies
    # ------------------------------------------------------------------
    def _is_tolerated_not_found(self, exc: requests.RequestException) -> bool:
        return self.not_found_as_empty and _status_of(exc) == 404

    def _decode(self, response: requests.Response) -> Any:
        """Decode a JSON response body.

        An empty body decodes to ``{}``.

        Raises
        ------
        ApiError
            If the body is not valid JSON.
        """
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(
                "Invalid JSON in response: %s" % exc,
                request=response.request,
                response=response,
            ) from exc

    def _get_single_result(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET one resource and return its decoded body.

        A ``404`` returns ``{}`` when ``not_found_as_empty`` is set.

        Raises
        ------
        ApiError
            For any other failed request.
        """
        try:
            response = self.transport.get(path, params=params or None)
        except requests.RequestException as exc:
            if self._is_tolerated_not_found(exc):
                logger.debug("%s not found, returning an empty result", path)
                return {}
            raise ApiError.from_request_exception(exc) from exc
        return self._decode(response)

    def _get_all_results(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET every page of a collection and return the concatenated items.

        When ``params`` already holds a ``page`` or ``limit``, the caller
        asked for one specific page: a single request is sent and its
        decoded body is returned as-is.  A ``404`` returns ``[]`` in
        both cases, whatever ``not_found_as_empty`` says.

        Raises
        ------
        ApiError
            If any page fails with a status other than ``404`` or is
            not a JSON object.  No partial result is returned.
        """
        params = dict(params or {})

        def fetch_page(page: int) -> ResultPage:
            response = self.transport.get(path, params={**params, "limit": PAGE_SIZE, "page": page})
            result_page = self._decode(response)
            if not isinstance(result_page, dict):
                raise ApiError(
                    "Unexpected result page for %s: %r" % (path, result_page),
                    request=response.request,
                    response=response,
                )
            return result_page

        try:
            if "page" in params or "limit" in params:
                return self._decode(self.transport.get(path, params=params))
            return assemble_results(fetch_page, extract_results)
        except requests.RequestException as exc:
            # The API answers 404 when a collection has no items
            if _status_of(exc) == 404:
                return []
            raise ApiError.from_request_exception(exc) from exc

    def _get_document(self, path: str, params: Optional[Dict[str, Any]] = None) -> bytes:
        """GET a binary document (PDF) and return its raw content."""
        try:
            response = self.transport.get(path, params=params or None)
        except requests.RequestException as exc:
            if self._is_tolerated_not_found(exc):
                return b""
            raise ApiError.from_request_exception(exc) from exc
        return response.content

    def _send(self, method: str, path: str, json: Optional[Any] = None) -> requests.Response:
        """Send a state-changing request, wrapping failures in :class:`ApiError`."""
        try:
            if method == "DELETE":
                return self.transport.delete(path)
            return getattr(self.transport, method.lower())(path, json=json)
        except requests.RequestException as exc:
            raise ApiError.from_request_exception(exc) from exc

    # ------------------------------------------------------------------
    # Brands
    # ------------------------------------------------------------------
    def get_brand(self, brand_id: Any, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._get_single_result(f"brands/{brand_id}", params)

    def get_brands(self, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._get_all_results("brands", params)

    def create_brand(self, name: str, image_url: Optional[str] = None) -> Any:
        """Create a brand and return it."""
        fields: Dict[str, Any] = {"name": name}
        if image_url is not None:
            fields["image_url"] = image_url
        return self._decode(self._send("POST", "brands", json=fields))

    def update_brand(
        self,
        brand_id: Any,
        name: str,
        url: Optional[str] = None,
        image_url: Optional[str] = None,
    ) -> Any:
        """Rename a brand, optionally changing its URL and image.

        Only the optional fields that are given are sent.
        """
        fields: Dict[str, Any] = {"name": name}
        if url is not None:
            fields["url"] = url
        if image_url is not None:
            fields["image_url"] = image_url
        return self._decode(self._send("PATCH", f"brands/{brand_id}", json=fields))

    def delete_brand(self, brand_id: Any) -> bool:
        """Delete a brand.  Returns ``True`` when the API answers ``204 No Content``."""
        response = self._send("DELETE", f"brands/{brand_id}")
        return response.status_code == 204

    # ------------------------------------------------------------------
    # SKUs
    # ------------------------------------------------------------------
    def get_sku(self, sku: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._get_single_result(f"skus/{sku}", params)

    def get_skus(self, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._get_all_results("skus", params)

    def get_detailed_skus(self, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._get_all_results("skus", {**(params or {}), "detailed": 1})

    def update_sku_stock(self, sku: str, stock: int, method: str = "replace") -> Any:
        """Update the stock of a SKU.

        Parameters
        ----------
        sku : str
            The SKU reference.
        stock : int
            Stock value.
        method : str, optional
            How ``stock`` is applied: ``"replace"`` (default),
            ``"increase"`` or ``"decrease"``.

        Raises
        ------
        InvalidArgumentError
            If ``method`` is not one of the accepted values.  No
            request is sent in that case.
        """
        if method not in STOCK_UPDATE_METHODS:
            raise InvalidArgumentError("Update stock method cannot be %r" % (method,))
        return self._decode(
            self._send("PATCH", f"skus/{sku}", json={"method": method, "stock": stock})
        )

    # ------------------------------------------------------------------
    # Customers and newsletter
    # ------------------------------------------------------------------
    def get_customer(self, customer_id: Any, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._get_single_result(f"customers/{customer_id}", params)

    def get_customers(self, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._get_all_results("customers", params)

    def get_newsletter_subscribers(self, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._get_all_results("newsletter/subscribers", params)

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------
    def get_orders(self, params: Optional[Dict[str, Any]] = None) -> Any:
        """Return the orders of the shop.

        Parameters
        ----------
        params : dict, optional
            Query filters.  ``status_code`` must be an
            :class:`~wizishop_api_client.constants.OrderStatus` value
            between 0 and 50.  ``start_date`` and ``end_date`` accept
            a ``datetime``, a ``date`` or a string already formatted as
            ``YYYY-MM-DD HH:MM:SS``.

        Raises
        ------
        InvalidArgumentError
            If ``status_code`` is out of range.  No request is sent in
            that case.
        """
        params = dict(params or {})
        if "status_code" in params:
            params["status_code"] = validate_status_code(params["status_code"])
        for key in ORDER_DATE_FILTERS:
            if key in params:
                params[key] = format_date(params[key])
        return self._get_all_results("orders", params)

    def get_order(self, order_id: Any, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._get_single_result(f"orders/{order_id}", params)

    def get_invoice_for_order(self, order_id: Any, params: Optional[Dict[str, Any]] = None) -> bytes:
        """Return the invoice of an order as PDF data."""
        return self._get_document(f"orders/{order_id}/invoice", params)

    def get_picking_slip_for_order(
        self, order_id: Any, params: Optional[Dict[str, Any]] = None
    ) -> bytes:
        """Return the picking slip of an order as PDF data."""
        return self._get_document(f"orders/{order_id}/picking-slip", params)

    def get_delivery_slip_for_order(
        self, order_id: Any, params: Optional[Dict[str, Any]] = None
    ) -> bytes:
        """Return the delivery slip of an order as PDF data."""
        return self._get_document(f"orders/{order_id}/delivery-slip", params)

    # ------------------------------------------------------------------
    # Order status transitions
    # ------------------------------------------------------------------
    def _transition_order(self, order_id: Any, action: str, json: Optional[Any] = None) -> Any:
        """Move an order to another status and return the updated order."""
        return self._decode(self._send("POST", f"orders/{order_id}/{action}", json=json))

    def pending_payment_order(self, order_id: Any) -> Any:
        """Change order status to "pending payment" (status_code: 5)."""
        return self._transition_order(order_id, "pending-payment")

    def pending_payment_verification_order(self, order_id: Any) -> Any:
        """Change order status to "payment awaiting verification" (status_code: 10)."""
        return self._transition_order(order_id, "pending-payment-verification")

    def pending_replenishment_order(self, order_id: Any) -> Any:
        """Change order status to "awaiting replenishment" (status_code: 11)."""
        return self._transition_order(order_id, "pending-replenishment")

    def pending_preparation_order(self, order_id: Any) -> Any:
        """Change order status to "awaiting preparation" (status_code: 20)."""
        return self._transition_order(order_id, "pending-preparation")

    def preparing_order(self, order_id: Any) -> Any:
        """Change order status to "preparing" (status_code: 25)."""
        return self._transition_order(order_id, "preparing")

    def partially_sent_order(
        self, order_id: Any, tracking_numbers: Optional[List[Dict[str, Any]]] = None
    ) -> Any:
        """Change order status to "partially sent" (status_code: 29)."""
        json = None
        if tracking_numbers is not None:
            json = {"tracking_numbers": tracking_numbers}
        return self._transition_order(order_id, "partially-sent", json=json)

    def ship_order(self, order_id: Any, tracking_numbers: List[Dict[str, Any]]) -> Any:
        """Change order status to "sent" (status_code: 30).

        Parameters
        ----------
        order_id : int
            Order id.
        tracking_numbers : list of dict
            One entry per shipment, for example::

                [{"shipping_id": 39, "tracking_number": "XVBFD-2"}]

        Returns
        -------
        dict
            Order details with the new status.
        """
        return self._transition_order(
            order_id, "ship", json={"tracking_numbers": tracking_numbers}
        )

    def delivered_order(self, order_id: Any) -> Any:
        """Change order status to "delivered" (status_code: 35)."""
        return self._transition_order(order_id, "delivered")

    def return_order(self, order_id: Any) -> Any:
        """Change order status to "being returned" (status_code: 40)."""
        return self._transition_order(order_id, "return")

    def returned_order(self, order_id: Any) -> Any:
        """Change order status to "returned" (status_code: 45)."""
        return self._transition_order(order_id, "returned")

    def refunded_order(self, order_id: Any) -> Any:
        """Change order status to "refunded" (status_code: 46)."""
        return self._transition_order(order_id, "refunded")
