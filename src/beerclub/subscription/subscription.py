"""Beer subscription — fires the current cart into the order channel on a timer.

The subscription holds a cart and an interval, both replaceable at any time by
an outside updater. A timer loop reads the cart at each tick and hands it to
the order handler over the shared channel:

    Running → (cancelled | channel closed) → Terminated

The interval is re-read at every wait, so a new interval applies from the next
tick onward. A wait already in progress is not rescheduled.
"""

import contextvars
import threading
from datetime import timedelta

import structlog

from beerclub.cart.cart import Cart
from beerclub.channel.channel import ChannelClosed, MessageChannel

logger = structlog.get_logger(__name__)


def _validate_interval(interval: timedelta) -> timedelta:
    if interval <= timedelta(0):
        raise ValueError(f"Subscription interval must be positive, got {interval}")
    return interval


class Subscription:
    def __init__(
        self,
        cart: Cart,
        interval: timedelta,
        channel: MessageChannel,
        log: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self._lock = threading.Lock()
        self._cart = cart
        self._interval = _validate_interval(interval)
        self._channel = channel
        self.log = (log or logger).bind(component="subscription")

    @property
    def cart(self) -> Cart:
        with self._lock:
            return self._cart

    @cart.setter
    def cart(self, cart: Cart) -> None:
        with self._lock:
            self._cart = cart

    @property
    def interval(self) -> timedelta:
        with self._lock:
            return self._interval

    @interval.setter
    def interval(self, interval: timedelta) -> None:
        _validate_interval(interval)
        with self._lock:
            self._interval = interval

    def run(self, cancelled: threading.Event) -> None:
        """Fire the current cart every interval until cancelled.

        Sending blocks until the order handler takes the cart, so a slow
        handler holds back the next tick.
        """
        self.log.info("Subscription timer started", interval_seconds=self.interval.total_seconds())

        while not cancelled.wait(self.interval.total_seconds()):
            cart = self.cart
            try:
                self._channel.send(cart)
            except ChannelClosed:
                self.log.warning("Message channel closed, stopping subscription timer", cart=repr(cart))
                return
            self.log.debug("Fired cart to order handler", cart=repr(cart))

        self.log.info("Subscription timer cancelled")

    def start(self, cancelled: threading.Event) -> threading.Thread:
        """Run the timer loop on a daemon thread."""
        ctx = contextvars.copy_context()
        thread = threading.Thread(
            target=ctx.run,
            args=(self.run, cancelled),
            name="subscription-timer",
            daemon=True,
        )
        thread.start()
        return thread
