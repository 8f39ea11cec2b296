"""
Purpose: Orchestrator for the rider side of an order (the "glue").
What it does:
Lets a rider accept an open order and confirm its delivery with the customer's
code. Local state (tracker + rider snapshot) is authoritative; the rider
backend is notified when configured, and a failed notification is logged
without undoing the local transition.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from orders.models import Actor, Order
from orders.tracker import OrderTracker
from riders.models import Rider
from riders.selection import OrderOffer, rank_offers
from routing.policy import DeliveryPolicy

from .rider_api import RiderApiClient, RiderApiError
from .state_machines.rider_state import handle_rider_acceptance, handle_rider_completion, handle_rider_release

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DispatchOutcome:
    ok: bool
    order: Order
    rider: Optional[Rider]
    synced: bool = True  # False when the backend call failed and we finished locally
    message: str = ""


class RiderDispatcher:
    """
    Coordinates rider actions against the shared order tracker.
    """
    def __init__(self, tracker: OrderTracker, api_client: Optional[RiderApiClient] = None,
                 delivery_policy: Optional[DeliveryPolicy] = None):
        self.tracker = tracker
        self.api_client = api_client
        self.delivery_policy = delivery_policy

    def available_offers(self, rider: Rider, limit: Optional[int] = None) -> List[OrderOffer]:
        """
        Open orders for the rider's Available tab, closest pickup first.
        """
        return rank_offers(rider.location, self.tracker.available_for_riders(), self.delivery_policy, limit=limit)

    def accept(self, order_id: str, rider: Rider) -> DispatchOutcome:
        """
        Rider taps "Accept". Raises RiderStateException / OrderAlreadyAssigned when not allowed.
        """
        actor = Actor.rider(rider.id)
        order = self.tracker.repository.get(order_id)
        if order.rider_id == rider.id and not order.is_terminal:
            # double tap / retried accept: the slot is already taken
            return DispatchOutcome(ok=True, order=order, rider=rider, message="Order already accepted")

        updated_rider = handle_rider_acceptance(rider)
        order = self.tracker.assign_rider(order_id, actor)

        synced = self._notify("accept", lambda client: client.accept_order(rider.id, order_id))
        return DispatchOutcome(ok=True, order=order, rider=updated_rider, synced=synced,
                               message="Order accepted")

    def cancel(self, order_id: str, actor: Actor, rider: Optional[Rider] = None) -> DispatchOutcome:
        """
        Vendor/admin cancels an order. When the given rider holds it, their slot is freed.
        """
        result = self.tracker.cancel(order_id, actor)
        order = result.order

        if rider is not None and order.rider_id == rider.id:
            rider = handle_rider_release(rider)
            logger.info("order %s cancelled, released %s", order.id, rider.id)
        return DispatchOutcome(ok=True, order=order, rider=rider, message=result.message)

    def complete(self, order_id: str, rider: Rider, code: str) -> DispatchOutcome:
        """
        Rider enters the customer's delivery code.

        The code is checked locally first; a mismatch comes back as ok=False
        with the message to show, and nothing changes.
        """
        actor = Actor.rider(rider.id)
        result = self.tracker.confirm_delivery(order_id, actor, code)
        if not result.ok:
            return DispatchOutcome(ok=False, order=result.order, rider=rider, message=result.message)

        updated_rider = handle_rider_completion(rider)
        synced = self._notify(
            "complete", lambda client: client.complete_order(rider.id, order_id, code.strip())
        )
        return DispatchOutcome(ok=True, order=result.order, rider=updated_rider, synced=synced,
                               message="Delivery confirmed")

    def _notify(self, action: str, call) -> bool:
        if self.api_client is None:
            return True
        try:
            call(self.api_client)
        except RiderApiError as exc:
            logger.warning("%s API failed, finishing locally: %s", action.capitalize(), exc)
            return False
        return True
