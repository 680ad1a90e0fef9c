"""
Order Domain Services
=====================

Services untuk order lifecycle dan order code generation
"""

from .order_service import OrderService
from .order_code import generate_order_code

__all__ = [
    'OrderService',
    'generate_order_code',
]
