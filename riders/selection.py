"""
Purpose: Ranking open orders for a rider's "Available" list.
What it does:
Accepts the rider's current location and the orders nobody has accepted yet,
measures rider -> vendor distance, attaches a pickup ETA, and sorts closest first.
Orders without vendor coordinates go last, in their original order.
"""

from typing import List, Optional, Sequence
from dataclasses import dataclass

from orders.models import Order
from routing.eta_service import EtaRange, eta_range
from routing.geo import Coordinate, distance_km
from routing.policy import DeliveryPolicy, default_delivery_policy


@dataclass(frozen=True)
class OrderOffer:
    """
    What a rider sees on an offer card. No prices (see dispatch.sanitizer).
    """
    order_id: str
    vendor_name: str
    pickup_distance_km: Optional[float]  # rider -> vendor
    pickup_eta: Optional[EtaRange]
    delivery_distance_km: Optional[float]  # vendor -> customer, as quoted at checkout


def rank_offers(
    rider_location: Optional[Coordinate],
    orders: Sequence[Order],
    policy: Optional[DeliveryPolicy] = None,
    limit: Optional[int] = None,
) -> List[OrderOffer]:
    """
    Build offers for a rider, closest pickup first.
    """
    policy = policy or default_delivery_policy()

    offers: List[OrderOffer] = []
    for order in orders:
        pickup_km = None
        if rider_location is not None and order.pickup is not None:
            pickup_km = distance_km(rider_location, order.pickup)

        offers.append(
            OrderOffer(
                order_id=order.id,
                vendor_name=order.vendor_name,
                pickup_distance_km=pickup_km,
                pickup_eta=eta_range(pickup_km, policy),
                delivery_distance_km=order.distance_km,
            )
        )

    # sorted() is stable, so unknown distances keep their input order at the tail
    offers = sorted(
        offers,
        key=lambda offer: (
            offer.pickup_distance_km is None,
            offer.pickup_distance_km or 0.0,
        ),
    )

    if limit is not None:
        offers = offers[:limit]
    return offers
