"""
Delivery Models Package
=======================

Database models untuk delivery order management.

Domain Structure:
- Core: Base model and declarative base
- User: operational users and roles
- Pricing: service types and weight-tiered pricing rules
- Order: shipment orders and their status
"""

from .base import Base, BaseModel, utcnow
from .user import User, UserRole
from .pricing import ServiceType, PricingRule
from .order import Order, OrderStatus

__all__ = [
    'Base', 'BaseModel', 'utcnow',
    'User', 'UserRole',
    'ServiceType', 'PricingRule',
    'Order', 'OrderStatus',
]
