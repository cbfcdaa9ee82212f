"""Enumerations and fixed values of the WiziShop API."""

from enum import IntEnum


class OrderStatus(IntEnum):
    """Order status codes used to filter and transition orders."""

    ABANDONED = 0
    PENDING_PAYMENT = 5
    PENDING_PAYMENT_VERIFICATION = 10
    PENDING_REPLENISHMENT = 11
    PENDING_PREPARATION = 20
    PREPARING = 25
    PARTIALLY_SENT = 29
    SENT = 30
    DELIVERED = 35
    BEING_RETURNED = 40
    RETURNED = 45
    REFUNDED = 46
    CANCELED = 50


MIN_ORDER_STATUS_CODE = 0
MAX_ORDER_STATUS_CODE = 50

# Accepted values for the ``method`` of a stock update.
STOCK_UPDATE_METHODS = ("replace", "increase", "decrease")

# Format of date filters sent in query strings.
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
