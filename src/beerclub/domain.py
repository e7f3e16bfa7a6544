"""Beerclub bounded context — beer subscriptions and order placement.

Holds the shopping cart model, the subscription timer that periodically fires
the current cart, and the order handler that records fired carts as placed
orders.
"""

import structlog
from protean.domain import Domain

beerclub = Domain(name="beerclub")

logger = structlog.get_logger(__name__)
