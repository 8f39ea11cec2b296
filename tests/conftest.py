import pytest

from orders.models import Actor, Order, OrderItem
from orders.repository import InMemoryOrderRepository
from orders.tracker import OrderTracker
from routing.geo import Coordinate


@pytest.fixture
def roban_mart():
    return Coordinate(6.2239, 7.1185)


@pytest.fixture
def customer_location():
    # 15 Zik Ave, Uwani (~0.77 km from Roban Mart)
    return Coordinate(6.2304, 7.1212)


@pytest.fixture
def make_order(roban_mart, customer_location):
    def _make(code="8421", vendor_id="1", customer_id="cust_1", fee=1300):
        order = Order.new(
            vendor_id=vendor_id,
            vendor_name="Roban Mart",
            customer_id=customer_id,
            items=[OrderItem("Jollof Rice", 2, 1200), OrderItem("Chicken", 1, 800)],
            delivery_fee=fee,
            pickup=roban_mart,
            dropoff=customer_location,
            distance_km=0.77,
        )
        order.delivery_code = code
        return order
    return _make


@pytest.fixture
def tracker():
    return OrderTracker(InMemoryOrderRepository())


@pytest.fixture
def vendor():
    return Actor.vendor("1")


@pytest.fixture
def admin():
    return Actor.admin()
