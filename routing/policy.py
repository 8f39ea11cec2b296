"""
Purpose: Central configuration for delivery pricing and ETA (single source of truth).
What it does:

Stores all tunable constants the admin, vendor, rider and customer apps share:

FALLBACK_FEE = 1300

MIN_FEE = 1300

CALIBRATION = 8.2 km -> 2000

FEE_INCREMENT = 50

AVG_SPEED_KMH = 30, ETA window +/- 5 min

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass(frozen=True)
class DeliveryPolicy:
    """
    Pricing and ETA knobs.

    Amounts are integers in the currency minor-unit convention used by
    the checkout (naira in the demo data).
    """

    # --- Fee ---
    # Charged when the distance is unknown (no customer location yet).
    fallback_fee: int = 1300

    # Floor: minimum payout per delivery regardless of proximity.
    min_fee: int = 1300

    # Linear rate is calibrated so calibration_km costs calibration_fee.
    calibration_fee: int = 2000
    calibration_km: float = 8.2

    # Round UP to this increment.
    fee_increment: int = 50

    # --- ETA ---
    # 30 km/h with a +/-5 minute window is the canonical customer-facing estimate.
    avg_speed_kmh: float = 30.0
    eta_window_min: int = 5
    min_eta_min: int = 1

    @property
    def rate_per_km(self) -> float:
        return self.calibration_fee / self.calibration_km

    def validate(self) -> None:
        """
        Basic sanity checks. Call once at startup.
        """
        if self.fallback_fee < 0 or self.min_fee < 0:
            raise ValueError("fees must be >= 0")

        if self.calibration_km <= 0:
            raise ValueError("calibration_km must be > 0")

        if self.calibration_fee <= 0:
            raise ValueError("calibration_fee must be > 0")

        if self.fee_increment <= 0:
            raise ValueError("fee_increment must be > 0")

        if self.avg_speed_kmh <= 0:
            raise ValueError("avg_speed_kmh must be > 0")

        if self.eta_window_min < 0:
            raise ValueError("eta_window_min must be >= 0")

        if self.min_eta_min < 1:
            raise ValueError("min_eta_min must be >= 1")


def default_delivery_policy() -> DeliveryPolicy:
    """
    Convenience factory for the default policy.
    """
    p = DeliveryPolicy()
    p.validate()
    return p


def delivery_policy_from_env() -> DeliveryPolicy:
    """
    Build a policy from DELIVERY_* environment variables (or a .env file).
    Missing variables keep their defaults.

    Example in .env:
    DELIVERY_MIN_FEE=1500
    DELIVERY_AVG_SPEED_KMH=25
    """
    load_dotenv()
    defaults = DeliveryPolicy()

    p = DeliveryPolicy(
        fallback_fee=int(os.getenv("DELIVERY_FALLBACK_FEE", defaults.fallback_fee)),
        min_fee=int(os.getenv("DELIVERY_MIN_FEE", defaults.min_fee)),
        calibration_fee=int(os.getenv("DELIVERY_CALIBRATION_FEE", defaults.calibration_fee)),
        calibration_km=float(os.getenv("DELIVERY_CALIBRATION_KM", defaults.calibration_km)),
        fee_increment=int(os.getenv("DELIVERY_FEE_INCREMENT", defaults.fee_increment)),
        avg_speed_kmh=float(os.getenv("DELIVERY_AVG_SPEED_KMH", defaults.avg_speed_kmh)),
        eta_window_min=int(os.getenv("DELIVERY_ETA_WINDOW_MIN", defaults.eta_window_min)),
        min_eta_min=int(os.getenv("DELIVERY_MIN_ETA_MIN", defaults.min_eta_min)),
    )
    p.validate()
    return p
