#Expose the rider-side pipeline pieces:
#Order state machine (transition rules + delivery-code gate)
#Rider dispatcher (accept / complete, backend sync)
#Payload sanitizer for rider devices

from .state_machines.order_state import (
    FOUR_STEP,
    THREE_STEP,
    DeliveryCodeMismatch,
    InvalidTransition,
    Lifecycle,
    OrderStateException,
    advance_order,
    cancel_order,
)
from .sanitizer import sanitize_for_rider

__all__ = [
    "FOUR_STEP",
    "THREE_STEP",
    "Lifecycle",
    "OrderStateException",
    "InvalidTransition",
    "DeliveryCodeMismatch",
    "advance_order",
    "cancel_order",
    "sanitize_for_rider",
]
