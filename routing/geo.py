#Purpose: Straight-line geo math shared by every app role.
#Great-circle (haversine) distance between a vendor and a customer/rider.
#No network calls here - this is the "as the crow flies" estimate that
#the fee and ETA policies are calibrated against.

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple
import math

#internal coordinate type :(lat,lng)
LatLng = Tuple[float, float]

EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True) #immutable value object, no identity beyond its value
class Coordinate:
    """
    A point on the map. lat in [-90, 90], lng in [-180, 180].
    """
    lat: float
    lng: float

    @classmethod
    def from_pair(cls, pair: LatLng) -> Coordinate:
        lat, lng = pair
        return cls(lat=float(lat), lng=float(lng))

    def as_pair(self) -> LatLng:
        return (self.lat, self.lng)

    def is_valid(self) -> bool:
        return (
            math.isfinite(self.lat)
            and math.isfinite(self.lng)
            and -90.0 <= self.lat <= 90.0
            and -180.0 <= self.lng <= 180.0
        )


def distance_km(a: Coordinate, b: Coordinate) -> float:
    """
    Haversine great-circle distance in kilometres (R = 6371 km).

    Identical points give 0, antipodal points give half the circumference.
    Out-of-range inputs are not guarded.
    """
    d_lat = math.radians(b.lat - a.lat)
    d_lng = math.radians(b.lng - a.lng)

    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.lat)) * math.cos(math.radians(b.lat)) * math.sin(d_lng / 2) ** 2
    )
    # clamp: rounding can push h a hair above 1 for antipodes
    h = min(1.0, max(0.0, h))
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def coerce_distance(value) -> Optional[float]:
    """
    Returns value as a float if it is a finite, non-negative number, else None.
    Unknown distances (no customer location) arrive as None or NaN.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        distance = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(distance) or distance < 0:
        return None
    return distance
