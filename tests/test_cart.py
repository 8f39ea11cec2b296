import json

import pytest

from orders.cart import Cart, EmptyCartError, checkout, quote_delivery
from orders.models import Order, OrderItem, OrderStatus, generate_delivery_code
from orders.policy import OrderPolicy
from routing.eta_service import EtaRange


@pytest.fixture
def cart():
    cart = Cart()
    cart.add_item("1", "Roban Mart", "Jollof Rice", 1200, 2)
    cart.add_item("1", "Roban Mart", "Chicken", 800)
    cart.add_item("3", "PharmaPlus", "Paracetamol", 500)
    return cart


def test_items_are_grouped_per_vendor(cart):
    assert [store.vendor_id for store in cart.stores] == ["1", "3"]
    assert cart.subtotal("1") == 3200
    assert cart.subtotal("3") == 500
    assert cart.subtotal("9") == 0


def test_quantity_never_drops_below_one(cart):
    assert cart.change_quantity("1", 1, -5).qty == 1
    assert cart.change_quantity("1", 1, 2).qty == 3


def test_removing_last_item_drops_the_vendor(cart):
    cart.remove_item("3", 0)
    assert cart.store("3") is None


def test_quote_without_customer_location(roban_mart):
    quote = quote_delivery(roban_mart, None)
    assert quote.distance_km is None
    assert quote.fee == 1300
    assert quote.eta is None


def test_checkout_freezes_the_quote(cart, roban_mart, customer_location):
    quote = quote_delivery(roban_mart, customer_location)

    order = checkout(cart, "1", quote, customer_id="cust_1")

    assert order.status == OrderStatus.NEW
    assert order.delivery_fee == quote.fee == 1300
    assert order.eta == quote.eta == EtaRange(1, 7)
    assert order.pickup == roban_mart
    assert order.dropoff == customer_location
    assert order.subtotal == 3200
    assert order.total == 4500
    assert len(order.delivery_code) == 6 and order.delivery_code.isdigit()
    assert cart.store("1") is None
    assert cart.store("3") is not None


def test_checkout_with_four_digit_codes(cart, roban_mart):
    order = checkout(cart, "3", quote_delivery(roban_mart, None), "cust_1", OrderPolicy(delivery_code_length=4))
    assert len(order.delivery_code) == 4


def test_checkout_of_empty_vendor(cart, roban_mart):
    with pytest.raises(EmptyCartError):
        checkout(cart, "9", quote_delivery(roban_mart, None), "cust_1")


def test_delivery_code_shape():
    for length in (4, 5, 6):
        code = generate_delivery_code(length)
        assert len(code) == length and code[0] != "0"
    with pytest.raises(ValueError):
        generate_delivery_code(3)


def test_item_quantity_must_be_positive():
    with pytest.raises(ValueError):
        OrderItem("Fufu", 0, 300)


def test_order_survives_json_round_trip(make_order):
    order = make_order()
    order.eta = EtaRange(1, 7)
    order.status = OrderStatus.OUT_FOR_DELIVERY

    restored = Order.from_dict(json.loads(json.dumps(order.to_dict())))

    assert restored == order
