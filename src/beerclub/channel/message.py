"""Messages carried on the order channel.

Only two shapes ever travel on the channel: an order (a fired cart) or a
malformed payload that arrived where an order was expected. Raw values are
classified once, at the channel boundary, so consumers dispatch over a closed
union instead of type-checking arbitrary objects.
"""

from dataclasses import dataclass
from typing import Any

from beerclub.cart.cart import Cart


@dataclass(frozen=True)
class OrderMessage:
    """A cart fired for order placement."""

    cart: Cart


@dataclass(frozen=True)
class MalformedMessage:
    """Anything received on the channel that is not a cart."""

    payload: Any


Message = OrderMessage | MalformedMessage


def wrap(payload: Any) -> Message:
    """Classify a raw channel payload.

    An ``OrderMessage`` that does not actually carry a cart is malformed.
    """
    if isinstance(payload, OrderMessage):
        if isinstance(payload.cart, Cart):
            return payload
        return MalformedMessage(payload=payload)
    if isinstance(payload, MalformedMessage):
        return payload
    if isinstance(payload, Cart):
        return OrderMessage(cart=payload)
    return MalformedMessage(payload=payload)
