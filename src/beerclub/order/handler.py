"""Order handler — consumes fired carts and records them as placed orders.

Listens on the order channel until the channel is closed. Every cart that
arrives is placed; anything else is logged and dropped. Neither a rejected
order nor a malformed message stops the loop.
"""

import contextvars
import threading
from typing import assert_never

import structlog
from protean.exceptions import ValidationError

from beerclub.cart.cart import Cart
from beerclub.channel.channel import MessageChannel
from beerclub.channel.message import MalformedMessage, Message, OrderMessage, wrap

logger = structlog.get_logger(__name__)


class OrderHandler:
    def __init__(
        self,
        channel: MessageChannel,
        log: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self.processed_orders: list[Cart] = []
        self._channel = channel
        self.log = (log or logger).bind(component="order_handler")

    def place_order(self, cart: Cart) -> None:
        """Place the order in the warehouse.

        Raises ``ValidationError`` when the order is rejected. Every cart is
        accepted for now.
        """
        self.processed_orders.append(cart)

    def handle(self, message: Message) -> None:
        """Process a single message taken off the channel."""
        message = wrap(message)
        if isinstance(message, OrderMessage):
            try:
                self.place_order(message.cart)
            except ValidationError as exc:
                self.log.error(
                    "Error placing order",
                    cart_id=str(message.cart.id),
                    error=str(exc),
                )
                return
            self.log.info(
                "Successfully placed order",
                cart_id=str(message.cart.id),
                processed_count=len(self.processed_orders),
            )
        elif isinstance(message, MalformedMessage):
            self.log.error(
                "Received invalid message on message channel",
                payload=repr(message.payload),
            )
        else:
            assert_never(message)

    def run(self) -> None:
        """Handle messages until the channel is closed."""
        for message in self._channel:
            self.handle(message)

        self.log.debug("Message channel closed", processed_count=len(self.processed_orders))

    def start(self) -> threading.Thread:
        """Run the consumer loop on a daemon thread."""
        ctx = contextvars.copy_context()
        thread = threading.Thread(
            target=ctx.run,
            args=(self.run,),
            name="order-handler",
            daemon=True,
        )
        thread.start()
        return thread
