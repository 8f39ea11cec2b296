"""
Purpose: Core data models for the riders domain.
What it does:
Defines the structure of a Rider and their status without relying on any storage layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from routing.geo import Coordinate


class RiderStatus(str, Enum):
    """
    Standardizes the state a rider can be in.
    """
    AVAILABLE = "available"
    ON_DELIVERY = "on_delivery"
    OFFLINE = "offline"
    PENDING_APPROVAL = "pending_approval"
    SUSPENDED = "suspended"


@dataclass(frozen=True)
class Rider:
    """
    A stateless snapshot of a rider at a specific point in time.
    """
    id: str
    name: str
    location: Optional[Coordinate]
    status: RiderStatus

    # How many open deliveries a rider may hold at once.
    max_active_orders: int = 3
    active_orders: int = 0
    last_seen_at: Optional[datetime] = None

    @classmethod
    def new(
        cls,
        rider_id: str,
        name: str = "Rider",
        lat: Optional[float] = None,
        lng: Optional[float] = None,
        status: str | RiderStatus = RiderStatus.OFFLINE,
        max_active_orders: int = 3,
        last_seen_at: Optional[datetime] = None,
    ) -> Rider:
        if isinstance(status, str):
            status = RiderStatus(status)

        location = None
        if lat is not None and lng is not None:
            location = Coordinate(lat=float(lat), lng=float(lng))

        return cls(
            id=rider_id,
            name=name,
            location=location,
            status=status,
            max_active_orders=max_active_orders,
            last_seen_at=last_seen_at or datetime.now(timezone.utc),
        )

    @property
    def has_capacity(self) -> bool:
        return self.active_orders < self.max_active_orders

    @property
    def can_take_orders(self) -> bool:
        return self.status in (RiderStatus.AVAILABLE, RiderStatus.ON_DELIVERY) and self.has_capacity
