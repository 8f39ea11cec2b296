"""
Purpose: Customer cart, delivery quote and checkout.
What it does:
- Cart groups line items per vendor (one checkout per vendor).
- quote_delivery computes distance, fee and ETA from vendor/customer coordinates.
- checkout freezes the quoted fee into a new Order and removes the vendor's group.
- Cart.add_order_items copies a past order's items back in (reorder).

Rule: the fee is computed here exactly once; nothing downstream recomputes it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from routing.eta_service import EtaRange, eta_range
from routing.geo import Coordinate, distance_km
from routing.policy import DeliveryPolicy, default_delivery_policy
from routing.pricing import delivery_fee

from .models import Order, OrderItem
from .policy import OrderPolicy, default_order_policy

logger = logging.getLogger(__name__)


class EmptyCartError(ValueError):
    """Raised when checking out a vendor with nothing in the cart."""
    pass


@dataclass
class CartLine:
    title: str
    price: int
    qty: int = 1

    def to_item(self) -> OrderItem:
        return OrderItem(title=self.title, qty=self.qty, price=self.price)


@dataclass
class CartStore:
    vendor_id: str
    vendor_name: str
    items: List[CartLine] = field(default_factory=list)

    @property
    def subtotal(self) -> int:
        return sum(line.price * line.qty for line in self.items)


@dataclass
class Cart:
    """
    A customer's cart: one CartStore per vendor, in the order they were added.
    """
    stores: List[CartStore] = field(default_factory=list)

    def store(self, vendor_id: str) -> Optional[CartStore]:
        for store in self.stores:
            if store.vendor_id == str(vendor_id):
                return store
        return None

    def add_item(self, vendor_id: str, vendor_name: str, title: str, price: int, qty: int = 1) -> CartStore:
        store = self.store(vendor_id)
        if store is None:
            store = CartStore(vendor_id=str(vendor_id), vendor_name=vendor_name)
            self.stores.append(store)
        store.items.append(CartLine(title=title, price=int(price), qty=max(1, int(qty))))
        return store

    def change_quantity(self, vendor_id: str, index: int, delta: int) -> CartLine:
        """
        Bump a line's quantity; it never drops below 1 (use remove_item for that).
        """
        line = self._require_store(vendor_id).items[index]
        line.qty = max(1, line.qty + delta)
        return line

    def remove_item(self, vendor_id: str, index: int) -> None:
        store = self._require_store(vendor_id)
        del store.items[index]
        if not store.items:
            self.stores.remove(store)

    def remove_store(self, vendor_id: str) -> None:
        self.stores = [store for store in self.stores if store.vendor_id != str(vendor_id)]

    def subtotal(self, vendor_id: str) -> int:
        store = self.store(vendor_id)
        return store.subtotal if store else 0

    def add_order_items(self, order: Order) -> CartStore:
        """
        Reorder: append copies of a past order's items to the vendor's group.
        The historical order is only read.
        """
        store = self.store(order.vendor_id)
        if store is None:
            store = CartStore(vendor_id=order.vendor_id, vendor_name=order.vendor_name)
            self.stores.append(store)
        store.items.extend(CartLine(title=item.title, price=item.price, qty=item.qty) for item in order.items)
        return store

    def _require_store(self, vendor_id: str) -> CartStore:
        store = self.store(vendor_id)
        if store is None:
            raise KeyError(f"no items from vendor {vendor_id} in cart")
        return store


@dataclass(frozen=True)
class DeliveryQuote:
    distance_km: Optional[float]
    fee: int
    eta: Optional[EtaRange]
    vendor_location: Optional[Coordinate] = None
    customer_location: Optional[Coordinate] = None


def quote_delivery(
    vendor_location: Optional[Coordinate],
    customer_location: Optional[Coordinate],
    policy: Optional[DeliveryPolicy] = None,
) -> DeliveryQuote:
    """
    Distance, fee and ETA for one vendor -> customer delivery.
    Without both locations the fallback fee applies and there is no ETA.
    """
    policy = policy or default_delivery_policy()

    distance = None
    if vendor_location is not None and customer_location is not None:
        distance = distance_km(vendor_location, customer_location)

    return DeliveryQuote(
        distance_km=distance,
        fee=delivery_fee(distance, policy),
        eta=eta_range(distance, policy),
        vendor_location=vendor_location,
        customer_location=customer_location,
    )


def checkout(
    cart: Cart,
    vendor_id: str,
    quote: DeliveryQuote,
    customer_id: str,
    policy: Optional[OrderPolicy] = None,
) -> Order:
    """
    Turn the vendor's cart group into a NEW order with the quoted fee frozen in.
    Payment is confirmed by the caller before this runs.
    """
    policy = policy or default_order_policy()

    store = cart.store(vendor_id)
    if store is None or not store.items:
        raise EmptyCartError(f"nothing to check out for vendor {vendor_id}")

    order = Order.new(
        vendor_id=store.vendor_id,
        vendor_name=store.vendor_name,
        customer_id=customer_id,
        items=[line.to_item() for line in store.items],
        delivery_fee=quote.fee,
        pickup=quote.vendor_location,
        dropoff=quote.customer_location,
        distance_km=quote.distance_km,
        eta=quote.eta,
        code_length=policy.delivery_code_length,
    )
    cart.remove_store(vendor_id)

    logger.info("checkout: order %s for vendor %s, fee %s, total %s", order.id, order.vendor_id, order.delivery_fee, order.total)
    return order
