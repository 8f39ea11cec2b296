"""
Purpose: Manages the order lifecycle for every app role (active -> history).
What it does:
- Persists checked-out orders through an OrderRepository.
- Applies state machine transitions on behalf of an explicit Actor:
   - advance(order_id, actor, code)
   - confirm_delivery(order_id, actor, code)
   - cancel(order_id, actor)
   - assign_rider(order_id, actor)
- Archives orders into history once they reach a terminal status.
- Scopes what each actor may see and touch.
- Reorder: copies a completed order's items into a cart.

Rule: Tracker owns persistence + permissions, the state machine owns transition rules.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from dispatch.state_machines.order_state import (
    FOUR_STEP,
    DeliveryCodeMismatch,
    InvalidTransition,
    Lifecycle,
    OrderStateException,
    advance_order,
    cancel_order,
    get_lifecycle,
)

from .cart import Cart, CartStore
from .models import Actor, ActorRole, Order, OrderStatus, utcnow
from .policy import OrderPolicy
from .repository import OrderRepository

logger = logging.getLogger(__name__)


class ActorNotAllowed(PermissionError):
    """Raised when an actor touches an order outside its scope."""
    pass


class OrderAlreadyAssigned(OrderStateException):
    """Raised when a rider tries to accept an order another rider holds."""
    pass


@dataclass(frozen=True)
class TransitionResult:
    """
    Outcome of a user-triggered transition. ok=False carries the message to
    show; the order is unchanged and the action can be retried.
    """
    ok: bool
    order: Order
    message: str = ""


class OrderTracker:
    """
    The one shared order service behind the admin, vendor, rider and customer apps.
    """

    def __init__(self, repository: OrderRepository, lifecycle: Lifecycle = FOUR_STEP):
        self.repository = repository
        self.lifecycle = lifecycle

    @classmethod
    def from_policy(cls, repository: OrderRepository, policy: OrderPolicy) -> OrderTracker:
        policy.validate()
        return cls(repository, lifecycle=get_lifecycle(policy.lifecycle))

    # --- Public API ---

    def place_order(self, order: Order) -> Order:
        """
        Persist a freshly checked-out order.
        """
        if order.status != OrderStatus.NEW:
            raise InvalidTransition(f"New orders must start as {OrderStatus.NEW.value}, got {order.status.value}")
        stored = self.repository.create(order)
        logger.info("order %s placed with vendor %s", stored.id, stored.vendor_id)
        return stored

    def get_order(self, order_id: str, actor: Actor) -> Order:
        order = self.repository.get(order_id)
        self._ensure_visible(order, actor)
        return order

    def advance(self, order_id: str, actor: Actor, code: Optional[str] = None) -> TransitionResult:
        """
        Move an order one step forward.

        A wrong delivery code is a rejection (ok=False), not an error.
        Transitions from terminal states raise InvalidTransition.
        Riders may only take the step into COMPLETED.
        """
        order = self.repository.get(order_id)
        self._ensure_can_transition(order, actor, completing=order.status == self.lifecycle.final_step_from)

        try:
            advance_order(order, actor=actor, code=code, lifecycle=self.lifecycle)
        except DeliveryCodeMismatch as exc:
            return TransitionResult(ok=False, order=order, message=str(exc))

        self._persist(order)
        return TransitionResult(ok=True, order=order, message=f"Order {order.status.value}")

    def confirm_delivery(self, order_id: str, actor: Actor, code: str) -> TransitionResult:
        """
        The rider/vendor enters the customer's code to complete the hand-off.
        Only valid on the last step before COMPLETED.
        """
        order = self.repository.get(order_id)
        self._ensure_can_transition(order, actor, completing=True)
        if order.status != self.lifecycle.final_step_from:
            raise InvalidTransition(
                f"Order {order.id} is {order.status.value}; delivery can only be confirmed "
                f"from {self.lifecycle.final_step_from.value}"
            )
        return self.advance(order_id, actor, code=code)

    def cancel(self, order_id: str, actor: Actor) -> TransitionResult:
        order = self.repository.get(order_id)
        self._ensure_can_transition(order, actor)

        cancel_order(order, actor=actor)
        self._persist(order)
        return TransitionResult(ok=True, order=order, message=f"Order {order.status.value}")

    def assign_rider(self, order_id: str, actor: Actor) -> Order:
        """
        A rider accepts an order. Re-accepting your own order is a no-op.
        """
        if actor.role != ActorRole.RIDER:
            raise ActorNotAllowed(f"{actor} is not a rider")

        order = self.repository.get(order_id)
        if order.is_terminal:
            raise InvalidTransition(f"Order {order.id} is already {order.status.value}")
        if order.rider_id == actor.id:
            return order
        if order.rider_id is not None:
            raise OrderAlreadyAssigned(f"Order {order.id} was already accepted by another rider")

        order.rider_id = actor.id
        order.updated_at = utcnow()
        self.repository.update(order)
        logger.info("order %s accepted by %s", order.id, actor)
        return order

    def available_for_riders(self) -> List[Order]:
        """
        Open orders nobody has accepted yet.
        """
        return [order for order in self.repository.active() if order.rider_id is None and not order.is_terminal]

    def active_orders(self, actor: Actor) -> List[Order]:
        return [order for order in self.repository.active() if self._is_visible(order, actor)]

    def history(self, actor: Actor) -> List[Order]:
        return [order for order in self.repository.history() if self._is_visible(order, actor)]

    def reorder(self, order_id: str, cart: Cart, actor: Actor) -> CartStore:
        """
        Copy a completed order's items into the cart. The historical record is not touched.
        """
        order = self.repository.get(order_id)
        self._ensure_visible(order, actor)
        if order.status != OrderStatus.COMPLETED:
            raise InvalidTransition(f"Only completed orders can be reordered (order {order.id} is {order.status.value})")
        return cart.add_order_items(order)

    # --- internal helpers ---

    def _persist(self, order: Order) -> None:
        self.repository.update(order)
        if order.is_terminal:
            self.repository.archive(order)
            logger.info("order %s archived as %s", order.id, order.status.value)

    def _is_visible(self, order: Order, actor: Actor) -> bool:
        if actor.role == ActorRole.ADMIN:
            return True
        if actor.role == ActorRole.VENDOR:
            return order.vendor_id == actor.id
        if actor.role == ActorRole.RIDER:
            return order.rider_id == actor.id
        if actor.role == ActorRole.CUSTOMER:
            return order.customer_id == actor.id
        return False

    def _ensure_visible(self, order: Order, actor: Actor) -> None:
        if not self._is_visible(order, actor):
            raise ActorNotAllowed(f"{actor} may not access order {order.id}")

    def _ensure_can_transition(self, order: Order, actor: Actor, completing: bool = False) -> None:
        if actor.role == ActorRole.CUSTOMER:
            raise ActorNotAllowed("customers cannot change order status")
        self._ensure_visible(order, actor)

        # riders accept and hand over; preparing and cancelling belong to the vendor
        if actor.role == ActorRole.RIDER and not completing:
            raise ActorNotAllowed(f"{actor} may only confirm delivery of order {order.id}")
