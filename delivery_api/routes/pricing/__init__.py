"""
Pricing Routes
==============

Routes untuk service types, pricing rules, dan cost calculation
"""

from .service_type_routes import router as service_type_router
from .pricing_routes import router as pricing_router

__all__ = ['service_type_router', 'pricing_router']
