#Marks routing as a package.
#Re-exports the public geo / pricing / ETA API so the apps import from routing
#without knowing internal file names.
#No business logic.

from .geo import Coordinate, LatLng, distance_km
from .pricing import delivery_fee
from .eta_service import EtaRange, eta_range, format_eta
from .policy import DeliveryPolicy, default_delivery_policy, delivery_policy_from_env

__all__ = [
           "Coordinate",
           "LatLng",
             "distance_km",
             "delivery_fee",
             "EtaRange",
             "eta_range",
             "format_eta",
             "DeliveryPolicy",
             "default_delivery_policy",
             "delivery_policy_from_env",
             ]
