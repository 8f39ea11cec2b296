from dataclasses import replace
from riders.models import Rider, RiderStatus

class RiderStateException(Exception):
    """Raised when an invalid rider transition is attempted."""
    pass

def handle_rider_acceptance(rider: Rider) -> Rider:
    """
    Called when a rider accepts an order.
    Takes one slot of their capacity and puts them ON_DELIVERY.
    """
    if rider.status not in (RiderStatus.AVAILABLE, RiderStatus.ON_DELIVERY):
        raise RiderStateException(f"Rider {rider.id} is {rider.status.value} and cannot accept orders")

    if not rider.has_capacity:
        raise RiderStateException(
            f"Rider {rider.id} is at capacity ({rider.active_orders}/{rider.max_active_orders})"
        )

    # Rider is a frozen dataclass, so we return a new instance via replace
    return replace(rider, active_orders=rider.active_orders + 1, status=RiderStatus.ON_DELIVERY)

def handle_rider_completion(rider: Rider) -> Rider:
    """
    Called once a delivery is confirmed with the customer's code.
    Frees the slot; with nothing left in hand the rider is AVAILABLE again.
    """
    return _free_slot(rider)

def handle_rider_release(rider: Rider) -> Rider:
    """
    Called when an order the rider had accepted is cancelled by the vendor or admin.
    """
    return _free_slot(rider)

def _free_slot(rider: Rider) -> Rider:
    remaining = max(0, rider.active_orders - 1)
    status = RiderStatus.ON_DELIVERY if remaining else RiderStatus.AVAILABLE
    if rider.status == RiderStatus.OFFLINE:
        # went offline mid-delivery; stay offline
        status = RiderStatus.OFFLINE
    return replace(rider, active_orders=remaining, status=status)

def set_availability(rider: Rider, available: bool) -> Rider:
    """
    The rider's online/offline toggle. Approval and suspension are admin-owned
    states and cannot be toggled out of here.
    """
    if rider.status in (RiderStatus.PENDING_APPROVAL, RiderStatus.SUSPENDED):
        raise RiderStateException(f"Rider {rider.id} is {rider.status.value}")

    if not available:
        return replace(rider, status=RiderStatus.OFFLINE)
    status = RiderStatus.ON_DELIVERY if rider.active_orders else RiderStatus.AVAILABLE
    return replace(rider, status=status)
