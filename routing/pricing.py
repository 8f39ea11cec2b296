#Purpose: Delivery-fee policy.
#Maps a vendor -> customer distance to the fee charged at checkout.
#linear rate calibrated on 8.2 km -> 2000, floor of 1300, rounded UP to 50.
#The fee is computed once per order; downstream totals read the stored value.

from __future__ import annotations

import math
from typing import Optional

from .geo import coerce_distance
from .policy import DeliveryPolicy, default_delivery_policy

# Guards the ceiling against float noise (8.2 * 2000/8.2 == 2000.0000000000002).
_RAW_PRECISION = 6


def delivery_fee(distance_km, policy: Optional[DeliveryPolicy] = None) -> int:
    """
    Fee for a delivery of the given length.

    Non-finite or missing distance -> policy.fallback_fee.
    Otherwise max(min_fee, ceil(distance * rate / increment) * increment).
    """
    policy = policy or default_delivery_policy()

    distance = coerce_distance(distance_km)
    if distance is None:
        return policy.fallback_fee

    raw = round(distance * policy.rate_per_km, _RAW_PRECISION)
    rounded = math.ceil(raw / policy.fee_increment) * policy.fee_increment
    return max(policy.min_fee, int(rounded))
