import pytest

from delivery_api.services.exceptions import (
    AuthorizationError, ConflictError, NotFoundError, ValidationError
)


async def test_create_and_list_active(registry, admin, staff):
    await registry.service_type_service.create_service_type({"name": "Standard"}, admin)
    express = await registry.service_type_service.create_service_type(
        {"name": "Express", "description": "Next day"}, admin
    )
    await registry.service_type_service.update_service_type(express["id"], {"is_active": False}, admin)

    active = await registry.service_type_service.list_active(staff)

    assert [st["name"] for st in active] == ["Standard"]


async def test_list_active_ordered_by_name(registry, admin, shipper):
    for name in ["Same Day", "Economy", "Express"]:
        await registry.service_type_service.create_service_type({"name": name}, admin)

    active = await registry.service_type_service.list_active(shipper)

    assert [st["name"] for st in active] == ["Economy", "Express", "Same Day"]


async def test_admin_listing_includes_inactive_and_searches(registry, admin):
    await registry.service_type_service.create_service_type({"name": "Standard"}, admin)
    express = await registry.service_type_service.create_service_type(
        {"name": "Express", "description": "Next day delivery"}, admin
    )
    await registry.service_type_service.update_service_type(express["id"], {"is_active": False}, admin)

    listing = await registry.service_type_service.list_service_types(admin)
    assert listing["pagination"]["total"] == 2

    searched = await registry.service_type_service.list_service_types(admin, search="next DAY")
    assert [st["id"] for st in searched["items"]] == [express["id"]]


async def test_staff_cannot_manage_service_types(registry, staff):
    with pytest.raises(AuthorizationError):
        await registry.service_type_service.create_service_type({"name": "Standard"}, staff)
    with pytest.raises(AuthorizationError):
        await registry.service_type_service.list_service_types(staff)


async def test_create_requires_name(registry, admin):
    with pytest.raises(ValidationError):
        await registry.service_type_service.create_service_type({"name": " "}, admin)


async def test_update_unknown_service_type(registry, admin):
    with pytest.raises(NotFoundError):
        await registry.service_type_service.update_service_type(999, {"name": "Cargo"}, admin)


async def test_delete_blocked_by_pricing_rules_then_allowed(registry, admin, staff, make_service_type):
    standard = await make_service_type("Standard", rules=[
        (0, 1, 15000, 5000, 10000),
        (2, 5, 12000, None, None),
    ])

    with pytest.raises(ConflictError) as exc_info:
        await registry.service_type_service.delete_service_type(standard.id, admin)
    assert exc_info.value.message == "Cannot delete service type with existing pricing rules"

    for rule in await registry.pricing_rule_service.list_rules_for_service(standard.id, staff):
        await registry.pricing_rule_service.delete_rule(rule["id"], admin)

    assert await registry.service_type_service.delete_service_type(standard.id, admin) is True
    with pytest.raises(NotFoundError):
        await registry.service_type_service.get_service_type(standard.id, admin)


async def test_delete_blocked_by_inactive_rule(registry, admin, make_service_type):
    standard = await make_service_type("Standard", rules=[(0, 1, 15000, None, None)])
    listing = await registry.pricing_rule_service.list_rules(admin, service_type_id=standard.id)
    await registry.pricing_rule_service.update_rule(listing["items"][0]["id"], {"is_active": False}, admin)

    with pytest.raises(ConflictError):
        await registry.service_type_service.delete_service_type(standard.id, admin)


async def test_delete_blocked_by_orders(registry, admin, staff, order_payload, standard):
    await registry.order_service.create_order(order_payload(), staff)
    listing = await registry.pricing_rule_service.list_rules(admin, service_type_id=standard.id)
    for rule in listing["items"]:
        await registry.pricing_rule_service.delete_rule(rule["id"], admin)

    with pytest.raises(ConflictError) as exc_info:
        await registry.service_type_service.delete_service_type(standard.id, admin)
    assert exc_info.value.message == "Cannot delete service type referenced by orders"
