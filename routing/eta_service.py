#Purpose: ETA estimation policy.
#Converts a straight-line distance into the "arrives in X-Y min" range used by:
#customer-facing active orders
#rider offer cards
#Always a closed interval, never a point estimate.
#Formatting lives in format_eta so the numbers stay testable on their own.

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from .geo import coerce_distance
from .policy import DeliveryPolicy, default_delivery_policy

ETA_PLACEHOLDER = "—"


@dataclass(frozen=True)
class EtaRange:
    """
    Travel time estimate in whole minutes, low <= high.
    """
    low_min: int
    high_min: int

    def __str__(self) -> str:
        return f"{self.low_min}-{self.high_min} min"


def travel_minutes(distance_km: float, policy: Optional[DeliveryPolicy] = None) -> int:
    """
    Point estimate at the policy's average speed, rounded up.
    """
    policy = policy or default_delivery_policy()
    # rounded before the ceiling so 20.000000000000004 stays 20
    return math.ceil(round(distance_km * 60 / policy.avg_speed_kmh, 6))


def eta_range(distance_km, policy: Optional[DeliveryPolicy] = None) -> Optional[EtaRange]:
    """
    ETA window for a delivery, or None when the distance is unknown.

    minutes = ceil(distance / speed * 60)
    low = max(minutes - window, min_eta), high = minutes + window
    """
    policy = policy or default_delivery_policy()

    distance = coerce_distance(distance_km)
    if distance is None:
        return None

    minutes = travel_minutes(distance, policy)
    low = max(minutes - policy.eta_window_min, policy.min_eta_min)
    high = minutes + policy.eta_window_min
    return EtaRange(low_min=low, high_min=high)


def format_eta(eta: Optional[EtaRange]) -> str:
    return str(eta) if eta is not None else ETA_PLACEHOLDER
