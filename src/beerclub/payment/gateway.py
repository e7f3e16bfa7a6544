"""HTTP payment gateway.

Submits an order total to an external payment server as a JSON-encoded
number. The server's response body is handed back untouched on success.
No retry, timeout or authentication is applied.
"""

import requests
import structlog

logger = structlog.get_logger(__name__)


class PaymentServerError(Exception):
    """The payment server answered with an error status (>= 400)."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"payment server error: {status_code}")
        self.status_code = status_code


def process_payment(
    payment_server: str,
    total: float,
    session: requests.Session | None = None,
) -> bytes:
    """Send the total to an external payment API.

    Args:
        payment_server: URL of the payment endpoint.
        total: Amount to charge.
        session: Optional ``requests.Session`` to send through.

    Returns:
        The raw response body.

    Raises:
        PaymentServerError: the server responded with a status code >= 400.
        requests.RequestException: the request could not be completed.
    """
    http = session or requests
    response = http.post(payment_server, json=total)

    if response.status_code >= 400:
        logger.warning(
            "Payment rejected by payment server",
            payment_server=payment_server,
            total=total,
            status_code=response.status_code,
        )
        raise PaymentServerError(response.status_code)

    logger.info("Payment processed", payment_server=payment_server, total=total)
    return response.content
