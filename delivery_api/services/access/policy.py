"""
Access Scope Policy
===================

Capability table per role dan order visibility scope.

Setiap operasi order/pricing/user memanggil `require()` sebelum menyentuh
database, dan query list/lookup order dipersempit lewat `apply_order_scope()`.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Optional

from sqlalchemy import or_

from ..exceptions import AuthenticationError, AuthorizationError
from ...models import Order, UserRole


class Capability(str, Enum):
    ORDER_CREATE = 'order.create'
    ORDER_VIEW = 'order.view'
    ORDER_UPDATE = 'order.update'
    ORDER_UPDATE_STATUS = 'order.update_status'
    ORDER_DELETE = 'order.delete'
    ORDER_ASSIGN = 'order.assign'
    ORDER_STATS = 'order.stats'
    PRICING_VIEW = 'pricing.view'
    PRICING_MANAGE = 'pricing.manage'
    SERVICE_TYPE_MANAGE = 'service_type.manage'
    COST_CALCULATE = 'cost.calculate'
    USER_MANAGE = 'user.manage'


class OrderScope(str, Enum):
    ALL = 'all'
    OWN = 'own'
    OWN_OR_ASSIGNED = 'own_or_assigned'


ROLE_CAPABILITIES: Dict[UserRole, FrozenSet[Capability]] = {
    UserRole.ADMIN: frozenset(Capability),
    UserRole.STAFF: frozenset({
        Capability.ORDER_CREATE,
        Capability.ORDER_VIEW,
        Capability.ORDER_UPDATE,
        Capability.ORDER_UPDATE_STATUS,
        Capability.PRICING_VIEW,
        Capability.COST_CALCULATE,
    }),
    UserRole.SHIPPER: frozenset({
        Capability.ORDER_VIEW,
        Capability.ORDER_UPDATE_STATUS,
        Capability.PRICING_VIEW,
        Capability.COST_CALCULATE,
    }),
}

ROLE_ORDER_SCOPE: Dict[UserRole, OrderScope] = {
    UserRole.ADMIN: OrderScope.ALL,
    UserRole.STAFF: OrderScope.OWN,
    # shipper juga melihat order yang di-assign ke dia
    UserRole.SHIPPER: OrderScope.OWN_OR_ASSIGNED,
}


@dataclass(frozen=True)
class Actor:
    """Identity yang sudah diverifikasi oleh authentication collaborator"""
    user_id: int
    role: UserRole
    is_active: bool = True
    username: Optional[str] = None

    @classmethod
    def from_user(cls, user) -> 'Actor':
        return cls(
            user_id=user.id,
            role=UserRole(user.role),
            is_active=bool(user.is_active),
            username=user.username,
        )


class AccessPolicy:
    """Resolve capability dan scope untuk actor"""

    def __init__(self, capabilities=None, order_scopes=None):
        self.capabilities = capabilities or ROLE_CAPABILITIES
        self.order_scopes = order_scopes or ROLE_ORDER_SCOPE

    def can(self, actor: Actor, capability: Capability) -> bool:
        return actor.is_active and capability in self.capabilities.get(actor.role, frozenset())

    def require(self, actor: Optional[Actor], capability: Capability) -> Actor:
        """Raise kalau actor tidak punya capability; dipanggil sebelum akses store"""
        if actor is None:
            raise AuthenticationError("Authentication required")
        if not actor.is_active:
            raise AuthenticationError("Invalid or inactive user")
        if not self.can(actor, capability):
            raise AuthorizationError(required_capability=capability.value)
        return actor

    def order_scope(self, actor: Actor) -> OrderScope:
        return self.order_scopes[actor.role]

    def apply_order_scope(self, query, actor: Actor):
        """Persempit query Order sesuai scope actor"""
        scope = self.order_scope(actor)
        if scope == OrderScope.OWN:
            return query.filter(Order.created_by == actor.user_id)
        if scope == OrderScope.OWN_OR_ASSIGNED:
            return query.filter(or_(
                Order.created_by == actor.user_id,
                Order.assigned_shipper_id == actor.user_id,
            ))
        return query
