"""List the orders awaiting preparation of a WiziShop shop.

Reads WIZISHOP_USERNAME, WIZISHOP_PASSWORD and, optionally,
WIZISHOP_API_URL from the environment.
"""

import logging
import os
from datetime import datetime, timedelta

from wizishop_api_client import ApiError, OrderStatus, authenticate

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def main() -> None:
    client = authenticate(
        os.environ["WIZISHOP_USERNAME"],
        os.environ["WIZISHOP_PASSWORD"],
        api_url=os.environ.get("WIZISHOP_API_URL"),
    )

    with client:
        try:
            orders = client.get_orders(
                {
                    "status_code": OrderStatus.PENDING_PREPARATION,
                    "start_date": datetime.now() - timedelta(days=30),
                }
            )
        except ApiError as exc:
            print(exc.error_message or exc)
            return

        print(f"{len(orders)} order(s) awaiting preparation")
        for order in orders[:5]:
            print(f"  - {order.get('id')}")


if __name__ == "__main__":
    main()
