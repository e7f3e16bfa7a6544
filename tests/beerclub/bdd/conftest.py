"""Shared BDD fixtures and step definitions for the beerclub domain."""

import pytest
from pytest_bdd import given, parsers, then

from beerclub.cart.cart import Cart


@pytest.fixture
def cart():
    return {}


@given("an empty cart", target_fixture="cart")
def empty_cart():
    return Cart.create()


@then(parsers.cfparse("the cart has {count:d} cases"))
def cart_has_n_cases(cart, count):
    assert len(cart.cases) == count


@then(parsers.cfparse("the cart subtotal is {subtotal:f}"))
def cart_subtotal_is(cart, subtotal):
    assert cart.subtotal() == pytest.approx(subtotal)
