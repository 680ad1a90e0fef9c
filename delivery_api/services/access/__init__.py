"""
Access Domain
=============

Role-based capability table dan order visibility scope
"""

from .policy import AccessPolicy, Actor, Capability, OrderScope, ROLE_CAPABILITIES, ROLE_ORDER_SCOPE

__all__ = [
    'AccessPolicy',
    'Actor',
    'Capability',
    'OrderScope',
    'ROLE_CAPABILITIES',
    'ROLE_ORDER_SCOPE',
]
