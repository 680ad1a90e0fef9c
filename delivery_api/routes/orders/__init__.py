"""
Order Routes
============

Routes untuk order lifecycle
"""

from .order_routes import router as order_router

__all__ = ['order_router']
