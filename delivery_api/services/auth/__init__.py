"""
Auth Domain Services
====================

Services untuk Authentication dan User management
"""

from .auth_service import AuthService
from .user_service import UserService
from .passwords import hash_password, verify_password

__all__ = [
    'AuthService',
    'UserService',
    'hash_password',
    'verify_password',
]
