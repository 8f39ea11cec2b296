"""
Order status state machine.

    NEW -> PREPARING -> OUT_FOR_DELIVERY -> COMPLETED
      \\________\\_____________\\__________-> CANCELLED

Forward-only, no cycles. The step that enters COMPLETED is gated by the
delivery code the customer hands to the rider. COMPLETED and CANCELLED are
terminal: any further transition raises InvalidTransition.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from orders.models import Actor, Order, OrderStatus, StatusChange, TERMINAL_STATUSES, utcnow

logger = logging.getLogger(__name__)


class OrderStateException(Exception):
    """Base class for rejected order transitions."""
    pass


class InvalidTransition(OrderStateException):
    """Raised when a transition is attempted from a terminal or unknown state."""
    pass


class DeliveryCodeMismatch(OrderStateException):
    """Raised when the entered delivery code does not match. Retryable."""
    pass


CODE_MISMATCH_MESSAGE = "Delivery code does not match."


@dataclass(frozen=True)
class Lifecycle:
    """
    The forward chain an order walks. Always starts at NEW and ends at COMPLETED.
    """
    name: str
    steps: Tuple[OrderStatus, ...]

    def __post_init__(self):
        if len(self.steps) < 2:
            raise ValueError("a lifecycle needs at least two steps")
        if self.steps[0] != OrderStatus.NEW or self.steps[-1] != OrderStatus.COMPLETED:
            raise ValueError("a lifecycle must start at NEW and end at COMPLETED")
        if OrderStatus.CANCELLED in self.steps:
            raise ValueError("CANCELLED is not a forward step")

    @property
    def final_step_from(self) -> OrderStatus:
        """The status whose advance needs the delivery code."""
        return self.steps[-2]


FOUR_STEP = Lifecycle(
    "four_step",
    (OrderStatus.NEW, OrderStatus.PREPARING, OrderStatus.OUT_FOR_DELIVERY, OrderStatus.COMPLETED),
)

# Degenerate configuration without an explicit out-for-delivery step.
THREE_STEP = Lifecycle(
    "three_step",
    (OrderStatus.NEW, OrderStatus.PREPARING, OrderStatus.COMPLETED),
)

LIFECYCLES = {lifecycle.name: lifecycle for lifecycle in (FOUR_STEP, THREE_STEP)}


def get_lifecycle(name: str) -> Lifecycle:
    try:
        return LIFECYCLES[name]
    except KeyError:
        raise ValueError(f"unknown lifecycle {name!r}, expected one of {sorted(LIFECYCLES)}") from None


def is_terminal(status: OrderStatus) -> bool:
    return status in TERMINAL_STATUSES


def can_cancel(status: OrderStatus) -> bool:
    return not is_terminal(status)


def next_status(status: OrderStatus, lifecycle: Lifecycle = FOUR_STEP) -> OrderStatus:
    """
    Forward successor of status in the lifecycle.
    """
    if is_terminal(status):
        raise InvalidTransition(f"Order is already {status.value}; no further transitions allowed")
    if status not in lifecycle.steps:
        raise InvalidTransition(f"{status.value} is not part of the {lifecycle.name} lifecycle")
    return lifecycle.steps[lifecycle.steps.index(status) + 1]


def codes_match(entered: Optional[str], expected: str) -> bool:
    """
    Exact string equality after trimming what was typed in.
    """
    if entered is None:
        return False
    return str(entered).strip() == expected


def _apply(order: Order, to_status: OrderStatus, actor: Actor, now: datetime) -> Order:
    change = StatusChange(from_status=order.status, to_status=to_status, actor=str(actor), at=now)
    order.history.append(change)
    order.status = to_status
    order.updated_at = now
    logger.info("order %s: %s -> %s by %s", order.id, change.from_status.value, to_status.value, actor)
    return order


def advance_order(
    order: Order,
    *,
    actor: Actor,
    code: Optional[str] = None,
    lifecycle: Lifecycle = FOUR_STEP,
    now: Optional[datetime] = None,
) -> Order:
    """
    Move the order one step forward.

    Entering COMPLETED requires the delivery code; a mismatch raises
    DeliveryCodeMismatch and leaves the order untouched.
    """
    now = now or utcnow()
    target = next_status(order.status, lifecycle)

    if target == OrderStatus.COMPLETED:
        if not codes_match(code, order.delivery_code):
            logger.warning("order %s: delivery code rejected for %s", order.id, actor)
            raise DeliveryCodeMismatch(CODE_MISMATCH_MESSAGE)
        order.completed_at = now

    return _apply(order, target, actor, now)


def cancel_order(order: Order, *, actor: Actor, now: Optional[datetime] = None) -> Order:
    """
    Cancel from any non-terminal state.
    """
    if not can_cancel(order.status):
        raise InvalidTransition(f"Cannot cancel order {order.id}: already {order.status.value}")
    return _apply(order, OrderStatus.CANCELLED, actor, now or utcnow())
