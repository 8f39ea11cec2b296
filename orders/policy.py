"""
Purpose: Central configuration for order creation and lifecycle.

DELIVERY_CODE_LENGTH = 6 (4..6 allowed)

LIFECYCLE = "four_step" ("three_step" skips Out for delivery)

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class OrderPolicy:
    """
    Central configuration for orders.
    """

    # Digits in the code the customer reads out to the rider.
    delivery_code_length: int = 6

    # Which forward chain orders walk (see dispatch.state_machines.order_state).
    lifecycle: str = "four_step"

    def validate(self) -> None:
        if not 4 <= self.delivery_code_length <= 6:
            raise ValueError("delivery_code_length must be between 4 and 6")

        if self.lifecycle not in ("four_step", "three_step"):
            raise ValueError("lifecycle must be 'four_step' or 'three_step'")


def default_order_policy() -> OrderPolicy:
    """
    Convenience factory for the default policy.
    """
    p = OrderPolicy()
    p.validate()
    return p
