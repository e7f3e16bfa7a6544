"""Order pipeline — wires one subscription to one order handler.

The pipeline owns the channel between the two and both threads. Stopping it
cancels the subscription timer first, so any cart already handed off is still
placed, then closes the channel to let the handler drain and exit.
"""

import threading
from datetime import timedelta

import structlog

from beerclub.cart.cart import Cart
from beerclub.channel.channel import MessageChannel
from beerclub.order.handler import OrderHandler
from beerclub.subscription.subscription import Subscription

logger = structlog.get_logger(__name__)


class OrderPipeline:
    def __init__(
        self,
        cart: Cart,
        interval: timedelta,
        log: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self.log = log or logger
        self.channel = MessageChannel()
        self.subscription = Subscription(cart, interval, self.channel, log=self.log)
        self.handler = OrderHandler(self.channel, log=self.log)

        self._cancelled = threading.Event()
        self._producer: threading.Thread | None = None
        self._consumer: threading.Thread | None = None

    @property
    def processed_orders(self) -> list[Cart]:
        return self.handler.processed_orders

    def start(self) -> None:
        if self._producer is not None:
            raise RuntimeError("Order pipeline already started")

        self._consumer = self.handler.start()
        self._producer = self.subscription.start(self._cancelled)
        self.log.info("Order pipeline started")

    def stop(self, timeout: float | None = None) -> None:
        """Cancel the subscription, close the channel and wait for both threads."""
        self._cancelled.set()
        if self._producer is not None:
            self._producer.join(timeout)
            if self._producer.is_alive():
                self.log.warning(
                    "Subscription timer still waiting on the order handler, closing channel will drop its cart",
                    timeout=timeout,
                )

        self.channel.close()
        if self._consumer is not None:
            self._consumer.join(timeout)

        self.log.info("Order pipeline stopped", processed_count=len(self.processed_orders))

    def __enter__(self) -> "OrderPipeline":
        self.start()
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.stop()
