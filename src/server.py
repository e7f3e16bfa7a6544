"""Beerclub subscription runner.

Wires a subscription to an order handler around a sample cart, lets the timer
fire for a while, then reports the placed orders. When a payment server is
given, each placed order's subtotal is charged against it.

Usage:
    python src/server.py                                  # 1s interval, run 5s
    python src/server.py --interval 0.5 --duration 3
    python src/server.py --payment-server http://localhost:9000/pay
"""

import argparse
import time
from datetime import timedelta

import requests
import structlog

from beerclub.cart.cart import Beer, Cart, Case
from beerclub.domain import beerclub
from beerclub.payment.gateway import PaymentServerError, process_payment
from beerclub.pipeline import OrderPipeline
from beerclub.utils.logging import configure_logging

logger = structlog.get_logger(__name__)


def sample_cart() -> Cart:
    cart = Cart.create()
    cart.add_case(Case(count=4, beer=Beer(brand="Duvel", name="Tripel Hop", ounces=11.0), price=14.99))
    cart.add_case(Case(count=30, beer=Beer(brand="Labatt", name="Blue Light", ounces=12.0), price=24.99))
    return cart


def charge_orders(payment_server, orders):
    """Charge every placed order, returning the number of successful charges."""
    charged = 0
    with requests.Session() as session:
        for cart in orders:
            try:
                process_payment(payment_server, cart.subtotal(), session=session)
            except (PaymentServerError, requests.RequestException) as exc:
                logger.error("Failed to charge order", cart_id=str(cart.id), error=str(exc))
                continue
            charged += 1
    return charged


def run(interval, duration, payment_server=None):
    with beerclub.domain_context():
        pipeline = OrderPipeline(sample_cart(), timedelta(seconds=interval))
        with pipeline:
            time.sleep(duration)

        orders = list(pipeline.processed_orders)
        logger.info("Subscription run complete", placed_orders=len(orders))

        if payment_server:
            charged = charge_orders(payment_server, orders)
            logger.info("Charged placed orders", charged=charged, failed=len(orders) - charged)

    return orders


def main():
    parser = argparse.ArgumentParser(description="Beerclub subscription runner")
    parser.add_argument("--interval", type=float, default=1.0, help="Seconds between cart firings (default: 1)")
    parser.add_argument("--duration", type=float, default=5.0, help="Seconds to keep the subscription running")
    parser.add_argument("--payment-server", help="Payment endpoint to charge each placed order against")
    args = parser.parse_args()

    configure_logging()
    beerclub.init()
    run(args.interval, args.duration, payment_server=args.payment_server)


if __name__ == "__main__":
    main()
