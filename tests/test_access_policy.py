from types import SimpleNamespace

import pytest
from sqlalchemy import select

from delivery_api.models import Order, UserRole
from delivery_api.services import AccessPolicy, Actor, Capability, OrderScope
from delivery_api.services.access.policy import ROLE_CAPABILITIES
from delivery_api.services.exceptions import AuthenticationError, AuthorizationError, ForbiddenError

policy = AccessPolicy()

ADMIN = Actor(user_id=1, role=UserRole.ADMIN, username="admin")
STAFF = Actor(user_id=2, role=UserRole.STAFF, username="staff")
SHIPPER = Actor(user_id=3, role=UserRole.SHIPPER, username="shipper")


def test_admin_has_every_capability():
    assert all(policy.can(ADMIN, capability) for capability in Capability)


@pytest.mark.parametrize("capability", [
    Capability.ORDER_CREATE,
    Capability.ORDER_VIEW,
    Capability.ORDER_UPDATE,
    Capability.ORDER_UPDATE_STATUS,
    Capability.PRICING_VIEW,
    Capability.COST_CALCULATE,
])
def test_staff_allowed(capability):
    assert policy.can(STAFF, capability)


@pytest.mark.parametrize("capability", [
    Capability.ORDER_DELETE,
    Capability.ORDER_ASSIGN,
    Capability.ORDER_STATS,
    Capability.PRICING_MANAGE,
    Capability.SERVICE_TYPE_MANAGE,
    Capability.USER_MANAGE,
])
def test_staff_denied(capability):
    assert not policy.can(STAFF, capability)
    with pytest.raises(AuthorizationError):
        policy.require(STAFF, capability)


def test_shipper_cannot_create_or_edit_orders():
    assert policy.can(SHIPPER, Capability.ORDER_VIEW)
    assert policy.can(SHIPPER, Capability.ORDER_UPDATE_STATUS)
    assert not policy.can(SHIPPER, Capability.ORDER_CREATE)
    assert not policy.can(SHIPPER, Capability.ORDER_UPDATE)


def test_every_role_has_capability_table_entry():
    assert set(ROLE_CAPABILITIES) == set(UserRole)


def test_require_without_actor_is_authentication_error():
    with pytest.raises(AuthenticationError):
        policy.require(None, Capability.ORDER_VIEW)


def test_require_inactive_actor_is_authentication_error():
    inactive = Actor(user_id=9, role=UserRole.ADMIN, is_active=False)
    assert not policy.can(inactive, Capability.ORDER_VIEW)
    with pytest.raises(AuthenticationError):
        policy.require(inactive, Capability.ORDER_VIEW)


def test_forbidden_alias_and_required_capability():
    with pytest.raises(ForbiddenError) as exc_info:
        policy.require(SHIPPER, Capability.PRICING_MANAGE)
    assert exc_info.value.required_capability == Capability.PRICING_MANAGE.value


def test_order_scope_per_role():
    assert policy.order_scope(ADMIN) == OrderScope.ALL
    assert policy.order_scope(STAFF) == OrderScope.OWN
    assert policy.order_scope(SHIPPER) == OrderScope.OWN_OR_ASSIGNED


def test_apply_order_scope_narrows_query():
    base = select(Order)
    assert policy.apply_order_scope(base, ADMIN) is base

    staff_sql = str(policy.apply_order_scope(base, STAFF))
    assert "orders.created_by" in staff_sql
    assert "assigned_shipper_id" not in staff_sql.split("WHERE", 1)[1]

    shipper_sql = str(policy.apply_order_scope(base, SHIPPER))
    assert "orders.created_by" in shipper_sql
    assert "orders.assigned_shipper_id" in shipper_sql.split("WHERE", 1)[1]


def test_actor_from_user():
    user = SimpleNamespace(id=5, role="shipper", is_active=True, username="kurir")
    actor = Actor.from_user(user)
    assert actor == Actor(user_id=5, role=UserRole.SHIPPER, is_active=True, username="kurir")
