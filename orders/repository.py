"""
Purpose: Order persistence boundary.
What it does:
- Declares the OrderRepository interface the tracker depends on
  (create / get / update / list_by_status / archive / history).
- Ships an in-memory implementation used by tests, scripts and demos.

Any backing store (database, remote API) only has to honour the same
interface; the lifecycle logic never knows which one it talks to.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol

from .models import Order, OrderStatus


class OrderNotFound(KeyError):
    """Raised when an order id is unknown to the repository."""
    pass


class OrderRepository(Protocol):
    def create(self, order: Order) -> Order: ...

    def get(self, order_id: str) -> Order: ...

    def update(self, order: Order) -> Order: ...

    def list_by_status(self, *statuses: OrderStatus, vendor_id: Optional[str] = None) -> List[Order]: ...

    def active(self) -> List[Order]: ...

    def archive(self, order: Order) -> Order: ...

    def history(self) -> List[Order]: ...


@dataclass
class InMemoryOrderRepository:
    """
    In-memory order store:

    active -> history

    Orders are kept by id; the two lists only hold ids, newest last.
    """
    _orders: Dict[str, Order] = field(default_factory=dict)  # all orders by id
    _active_ids: List[str] = field(default_factory=list)
    _history_ids: List[str] = field(default_factory=list)

    def create(self, order: Order) -> Order:
        if order.id in self._orders:
            #idempotency : dont double insert
            return self._orders[order.id]
        self._orders[order.id] = order
        self._active_ids.append(order.id)
        return order

    def get(self, order_id: str) -> Order:
        order = self._orders.get(order_id)
        if order is None:
            raise OrderNotFound(order_id)
        return order

    def update(self, order: Order) -> Order:
        if order.id not in self._orders:
            raise OrderNotFound(order.id)
        self._orders[order.id] = order
        return order

    def list_by_status(self, *statuses: OrderStatus, vendor_id: Optional[str] = None) -> List[Order]:
        """
        All orders (active and archived) in any of the given statuses,
        in creation order. No statuses means every order.
        """
        wanted = set(statuses)
        return [
            order
            for order in self._orders.values()
            if (not wanted or order.status in wanted)
            and (vendor_id is None or order.vendor_id == vendor_id)
        ]

    def active(self) -> List[Order]:
        return [self._orders[order_id] for order_id in self._active_ids]

    def archive(self, order: Order) -> Order:
        """
        Move an order from the active list to history. Idempotent.
        """
        if order.id not in self._orders:
            raise OrderNotFound(order.id)
        if order.id in self._active_ids:
            self._active_ids.remove(order.id)
        if order.id not in self._history_ids:
            self._history_ids.append(order.id)
        return order

    def history(self) -> List[Order]:
        return [self._orders[order_id] for order_id in self._history_ids]
