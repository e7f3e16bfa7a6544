import pytest
import structlog
from protean.integrations.pytest import DomainFixture
from structlog.testing import CapturingLogger


@pytest.fixture(scope="session")
def beerclub_bed():
    from beerclub.domain import beerclub

    bed = DomainFixture(beerclub)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(beerclub_bed):
    with beerclub_bed.domain_context():
        yield


@pytest.fixture
def captured():
    """Records every log call made through the ``log`` fixture."""
    return CapturingLogger()


@pytest.fixture
def log(captured):
    return structlog.BoundLogger(captured, processors=[], context={})


@pytest.fixture
def duvel():
    from beerclub.cart.cart import Beer

    return Beer(brand="Duvel", name="Tripel Hop", ounces=11.0)


@pytest.fixture
def blue_light():
    from beerclub.cart.cart import Beer

    return Beer(brand="Labatt", name="Blue Light", ounces=12.0)


@pytest.fixture
def fixture_cart(duvel):
    from beerclub.cart.cart import Cart, Case

    cart = Cart.create()
    cart.add_case(Case(count=4, beer=duvel, price=14))
    return cart
