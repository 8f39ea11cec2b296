"""
Riders domain package.

Public API:
- Rider, RiderStatus
- rank_offers, OrderOffer
"""
from .models import Rider, RiderStatus
from .selection import OrderOffer, rank_offers

__all__ = ["Rider", "RiderStatus", "OrderOffer", "rank_offers"]
