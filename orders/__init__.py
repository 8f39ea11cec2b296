"""
Orders domain package.

Public API:
- Domain models: Order, OrderItem, OrderStatus, Actor, ActorRole
- Cart + checkout: Cart, quote_delivery, checkout
- Persistence boundary: OrderRepository, InMemoryOrderRepository

The lifecycle service lives in orders.tracker (it depends on the state machine
in dispatch.state_machines, so it is not re-exported here).
"""
from .models import Actor, ActorRole, Order, OrderItem, OrderStatus, StatusChange
from .cart import Cart, DeliveryQuote, checkout, quote_delivery
from .repository import InMemoryOrderRepository, OrderNotFound, OrderRepository

__all__ = ["Order",
           "OrderItem",
             "OrderStatus",
               "StatusChange",
               "Actor",
               "ActorRole",
               "Cart",
               "DeliveryQuote",
               "checkout",
               "quote_delivery",
               "OrderRepository",
               "InMemoryOrderRepository",
               "OrderNotFound",
               ]
