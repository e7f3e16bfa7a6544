"""Shopping Cart aggregate — cases of beer waiting to be fired as an order.

A cart is a plain ordered collection of priced cases. Prices are stored per
case rather than derived from count and a unit price, so the subtotal is the
straight sum of case prices. Negative prices are accepted as-is (discounts,
returns).
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Integer, String, ValueObject

from beerclub.domain import beerclub


@beerclub.value_object
class Beer:
    """A kind of beer, identified by brand and name."""

    brand = String(required=True, max_length=100)
    name = String(required=True, max_length=100)
    ounces = Float(required=True)

    @invariant.post
    def ounces_must_be_positive(self):
        if self.ounces is not None and self.ounces <= 0:
            raise ValidationError({"ounces": ["Beer volume must be a positive number of ounces"]})


@beerclub.entity(part_of="Cart")
class Case:
    count = Integer(required=True, min_value=1)
    beer = ValueObject(Beer, required=True)
    price = Float(required=True)


@beerclub.aggregate
class Cart:
    cases = HasMany(Case)
    created_at = DateTime()

    @classmethod
    def create(cls):
        return cls(created_at=datetime.now(UTC))

    def add_case(self, case):
        """Append a case to the cart.

        Adding a case that is already in the cart appends another line item
        with the same count, beer and price.
        """
        if any(existing.id == case.id for existing in self.cases):
            case = Case(count=case.count, beer=case.beer, price=case.price)
        self.add_cases(case)

    def subtotal(self) -> float:
        """Sum of case prices, in insertion order. Zero for an empty cart."""
        subtotal = 0.0
        for case in self.cases:
            subtotal += case.price
        return subtotal
