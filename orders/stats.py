"""
Purpose: Dashboard numbers for vendors and riders.
Reads stored order fields only (totals use the stored delivery fee).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Iterable, Optional

from .models import Order, OrderStatus

PENDING_STATUSES = frozenset({OrderStatus.NEW, OrderStatus.PREPARING, OrderStatus.OUT_FOR_DELIVERY})


@dataclass(frozen=True)
class VendorStats:
    today_count: int
    pending_count: int
    completed_count: int
    todays_earnings: int


def _same_day(moment: datetime, day: date) -> bool:
    return moment.astimezone(timezone.utc).date() == day


def vendor_stats(orders: Iterable[Order], today: Optional[date] = None) -> VendorStats:
    """
    today_count / todays_earnings look at orders created today (UTC);
    earnings are the totals of today's completed orders.
    """
    today = today or datetime.now(timezone.utc).date()
    orders = list(orders)

    todays = [order for order in orders if _same_day(order.created_at, today)]
    return VendorStats(
        today_count=len(todays),
        pending_count=sum(1 for order in orders if order.status in PENDING_STATUSES),
        completed_count=sum(1 for order in orders if order.status == OrderStatus.COMPLETED),
        todays_earnings=sum(order.total for order in todays if order.status == OrderStatus.COMPLETED),
    )


def rider_earnings(orders: Iterable[Order], rider_id: str) -> int:
    """
    Sum of the delivery fees of a rider's completed deliveries.
    """
    return sum(
        order.delivery_fee
        for order in orders
        if order.rider_id == rider_id and order.status == OrderStatus.COMPLETED
    )
