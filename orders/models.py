"""
Purpose: Domain models for the Orders capability.
What it does:
- Defines core data structures:
- Order (id, vendor, customer, rider, items, delivery fee, delivery code, timestamps, status)
- OrderItem (title, qty, price in minor units)
- StatusChange (audit entry written on every transition)
- Actor (who is performing an operation: admin / vendor / rider / customer)

Defines enums/constants:
- OrderStatus = NEW | PREPARING | OUT_FOR_DELIVERY | COMPLETED | CANCELLED
- ActorRole = ADMIN | VENDOR | RIDER | CUSTOMER

Rule: No state machine logic, no persistence. Models only.
"""
from __future__ import annotations

import secrets
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from routing.eta_service import EtaRange
from routing.geo import Coordinate


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderStatus(str, Enum):
    NEW = "New"
    PREPARING = "Preparing"
    OUT_FOR_DELIVERY = "Out for delivery"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


TERMINAL_STATUSES = frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED})


class ActorRole(str, Enum):
    ADMIN = "admin"
    VENDOR = "vendor"
    RIDER = "rider"
    CUSTOMER = "customer"


@dataclass(frozen=True)
class Actor:
    """
    The authenticated party an operation runs on behalf of.
    Passed explicitly into every operation, never read from global session state.
    """
    role: ActorRole
    id: str

    @classmethod
    def admin(cls, actor_id: str = "admin") -> Actor:
        return cls(ActorRole.ADMIN, actor_id)

    @classmethod
    def vendor(cls, vendor_id: str) -> Actor:
        return cls(ActorRole.VENDOR, vendor_id)

    @classmethod
    def rider(cls, rider_id: str) -> Actor:
        return cls(ActorRole.RIDER, rider_id)

    @classmethod
    def customer(cls, customer_id: str) -> Actor:
        return cls(ActorRole.CUSTOMER, customer_id)

    def __str__(self) -> str:
        return f"{self.role.value}:{self.id}"


@dataclass(frozen=True)
class OrderItem:
    title: str
    qty: int
    price: int  # minor units

    def __post_init__(self):
        if self.qty <= 0:
            raise ValueError(f"qty must be > 0, got {self.qty}")

    @property
    def line_total(self) -> int:
        return self.qty * self.price

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.title, "qty": self.qty, "price": self.price}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> OrderItem:
        return cls(title=data["title"], qty=int(data["qty"]), price=int(data["price"]))


@dataclass(frozen=True)
class StatusChange:
    from_status: OrderStatus
    to_status: OrderStatus
    actor: str
    at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "from": self.from_status.value,
            "to": self.to_status.value,
            "actor": self.actor,
            "at": self.at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> StatusChange:
        return cls(
            from_status=OrderStatus(data["from"]),
            to_status=OrderStatus(data["to"]),
            actor=data["actor"],
            at=datetime.fromisoformat(data["at"]),
        )


def generate_delivery_code(length: int = 6) -> str:
    """
    Numeric code without a leading zero (e.g. 6 digits -> 100000..999999).
    """
    if not 4 <= length <= 6:
        raise ValueError("delivery code length must be between 4 and 6")
    low = 10 ** (length - 1)
    return str(low + secrets.randbelow(9 * low))


@dataclass
class Order:
    """
    A customer's checked-out order with a single vendor.

    delivery_fee and delivery_code are fixed at creation. Everything else
    except status, rider_id and the timestamps is informational.
    """

    id: str
    vendor_id: str
    vendor_name: str
    customer_id: str
    items: Tuple[OrderItem, ...]
    delivery_fee: int
    delivery_code: str

    pickup: Optional[Coordinate] = None  # vendor location
    dropoff: Optional[Coordinate] = None  # customer location
    distance_km: Optional[float] = None
    eta: Optional[EtaRange] = None
    rider_id: Optional[str] = None

    status: OrderStatus = OrderStatus.NEW

    created_at: datetime = field(default_factory=utcnow)
    updated_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    history: List[StatusChange] = field(default_factory=list)

    @staticmethod # Factory method used by checkout
    def new(
        vendor_id: str,
        vendor_name: str,
        customer_id: str,
        items: List[OrderItem],
        delivery_fee: int,
        *,
        pickup: Optional[Coordinate] = None,
        dropoff: Optional[Coordinate] = None,
        distance_km: Optional[float] = None,
        eta: Optional[EtaRange] = None,
        code_length: int = 6,
    ) -> Order:
        #uuid for unique order id generation
        return Order(
            id=uuid.uuid4().hex,
            vendor_id=str(vendor_id),
            vendor_name=vendor_name,
            customer_id=str(customer_id),
            items=tuple(items),
            delivery_fee=int(delivery_fee),
            delivery_code=generate_delivery_code(code_length),
            pickup=pickup,
            dropoff=dropoff,
            distance_km=distance_km,
            eta=eta,
        )

    @property
    def subtotal(self) -> int:
        return sum(item.line_total for item in self.items)

    @property
    def total(self) -> int:
        return self.subtotal + self.delivery_fee

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    # --- serialization (JSON-shaped, lossless) ---

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "vendorId": self.vendor_id,
            "vendorName": self.vendor_name,
            "customerId": self.customer_id,
            "riderId": self.rider_id,
            "items": [item.to_dict() for item in self.items],
            "deliveryFee": self.delivery_fee,
            "deliveryCode": self.delivery_code,
            "pickup": _coordinate_to_dict(self.pickup),
            "dropoff": _coordinate_to_dict(self.dropoff),
            "distanceKm": self.distance_km,
            "eta": None if self.eta is None else {"low": self.eta.low_min, "high": self.eta.high_min},
            "status": self.status.value,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
            "completedAt": self.completed_at.isoformat() if self.completed_at else None,
            "history": [change.to_dict() for change in self.history],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Order:
        eta = data.get("eta")
        return cls(
            id=data["id"],
            vendor_id=data["vendorId"],
            vendor_name=data["vendorName"],
            customer_id=data["customerId"],
            rider_id=data.get("riderId"),
            items=tuple(OrderItem.from_dict(item) for item in data.get("items", [])),
            delivery_fee=int(data["deliveryFee"]),
            delivery_code=data["deliveryCode"],
            pickup=_coordinate_from_dict(data.get("pickup")),
            dropoff=_coordinate_from_dict(data.get("dropoff")),
            distance_km=data.get("distanceKm"),
            eta=EtaRange(eta["low"], eta["high"]) if eta else None,
            status=OrderStatus(data["status"]),
            created_at=datetime.fromisoformat(data["createdAt"]),
            updated_at=_parse_optional(data.get("updatedAt")),
            completed_at=_parse_optional(data.get("completedAt")),
            history=[StatusChange.from_dict(change) for change in data.get("history", [])],
        )


def _parse_optional(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


def _coordinate_to_dict(coordinate: Optional[Coordinate]) -> Optional[Dict[str, float]]:
    if coordinate is None:
        return None
    return {"lat": coordinate.lat, "lng": coordinate.lng}


def _coordinate_from_dict(data: Optional[Dict[str, float]]) -> Optional[Coordinate]:
    if not data:
        return None
    return Coordinate(lat=float(data["lat"]), lng=float(data["lng"]))
