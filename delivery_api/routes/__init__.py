"""
Delivery Routes Module
======================

API Routes untuk delivery application, dikelompokkan per domain
"""

from .auth import auth_router, user_router
from .pricing import service_type_router, pricing_router
from .orders import order_router

__all__ = [
    'auth_router', 'user_router',
    'service_type_router', 'pricing_router',
    'order_router',
]
