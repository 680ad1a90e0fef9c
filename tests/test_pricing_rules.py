from decimal import Decimal

import pytest

from delivery_api.services.exceptions import (
    AuthorizationError, ConflictError, NotFoundError, RangeOverlapError, ValidationError
)


@pytest.fixture
async def service_type(make_service_type):
    return await make_service_type("Standard")


async def test_add_rule(registry, admin, service_type):
    rule = await registry.pricing_rule_service.add_rule(
        service_type.id, "0", "1", "15000", fragile_surcharge="5000", valuable_surcharge="10000", actor=admin
    )

    assert rule["id"] is not None
    assert rule["service_type_id"] == service_type.id
    assert rule["weight_from"] == Decimal("0")
    assert rule["weight_to"] == Decimal("1")
    assert rule["price"] == Decimal("15000")
    assert rule["is_active"] is True


async def test_overlapping_rule_is_rejected(registry, admin, service_type):
    await registry.pricing_rule_service.add_rule(service_type.id, 0, 1, 15000, actor=admin)

    with pytest.raises(RangeOverlapError) as exc_info:
        await registry.pricing_rule_service.add_rule(service_type.id, "0.5", 2, 12000, actor=admin)

    # overlap dilaporkan sebagai validation error sekaligus conflict
    assert isinstance(exc_info.value, ValidationError)
    assert isinstance(exc_info.value, ConflictError)
    assert exc_info.value.message == "Weight range overlaps with existing pricing rule"


async def test_touching_boundaries_overlap(registry, admin, service_type):
    await registry.pricing_rule_service.add_rule(service_type.id, 0, 1, 15000, actor=admin)

    # closed interval: [1, 2] menyentuh [0, 1] di titik 1
    with pytest.raises(RangeOverlapError):
        await registry.pricing_rule_service.add_rule(service_type.id, 1, 2, 12000, actor=admin)

    rule = await registry.pricing_rule_service.add_rule(service_type.id, "1.01", 2, 12000, actor=admin)
    assert rule["weight_from"] == Decimal("1.01")


async def test_same_range_on_other_service_type_is_allowed(registry, admin, service_type, make_service_type):
    express = await make_service_type("Express")
    await registry.pricing_rule_service.add_rule(service_type.id, 0, 1, 15000, actor=admin)

    rule = await registry.pricing_rule_service.add_rule(express.id, 0, 1, 25000, actor=admin)
    assert rule["service_type_id"] == express.id


@pytest.mark.parametrize("weight_from, weight_to", [(2, 2), (3, 1)])
async def test_invalid_range(registry, admin, service_type, weight_from, weight_to):
    with pytest.raises(ValidationError) as exc_info:
        await registry.pricing_rule_service.add_rule(service_type.id, weight_from, weight_to, 1000, actor=admin)
    assert exc_info.value.message == "Weight from must be less than weight to"


async def test_negative_price_is_validation_error(registry, admin, service_type):
    with pytest.raises(ValidationError):
        await registry.pricing_rule_service.add_rule(service_type.id, 0, 1, -5, actor=admin)


async def test_unknown_service_type(registry, admin):
    with pytest.raises(ValidationError) as exc_info:
        await registry.pricing_rule_service.add_rule(999, 0, 1, 1000, actor=admin)
    assert exc_info.value.message == "Service type not found"


async def test_staff_cannot_manage_rules(registry, staff, service_type):
    with pytest.raises(AuthorizationError):
        await registry.pricing_rule_service.add_rule(service_type.id, 0, 1, 1000, actor=staff)


async def test_list_rules_for_service_ordered_by_weight(registry, admin, staff, service_type):
    await registry.pricing_rule_service.add_rule(service_type.id, 5, 10, 10000, actor=admin)
    await registry.pricing_rule_service.add_rule(service_type.id, 0, 1, 15000, actor=admin)
    await registry.pricing_rule_service.add_rule(service_type.id, "1.01", "4.99", 12000, actor=admin)

    rules = await registry.pricing_rule_service.list_rules_for_service(service_type.id, staff)

    assert [rule["weight_from"] for rule in rules] == [Decimal("0"), Decimal("1.01"), Decimal("5")]


async def test_inactive_rules_are_hidden_from_tier_listing(registry, admin, staff, service_type):
    rule = await registry.pricing_rule_service.add_rule(service_type.id, 0, 1, 15000, actor=admin)
    await registry.pricing_rule_service.update_rule(rule["id"], {"is_active": False}, admin)

    assert await registry.pricing_rule_service.list_rules_for_service(service_type.id, staff) == []

    listing = await registry.pricing_rule_service.list_rules(admin, service_type_id=service_type.id)
    assert listing["pagination"]["total"] == 1


async def test_inactive_rule_does_not_block_new_range(registry, admin, service_type):
    rule = await registry.pricing_rule_service.add_rule(service_type.id, 0, 1, 15000, actor=admin)
    await registry.pricing_rule_service.update_rule(rule["id"], {"is_active": False}, admin)

    replacement = await registry.pricing_rule_service.add_rule(service_type.id, "0.5", 2, 12000, actor=admin)
    assert replacement["is_active"] is True


async def test_reactivating_overlapping_rule_is_rejected(registry, admin, service_type):
    rule = await registry.pricing_rule_service.add_rule(service_type.id, 0, 1, 15000, actor=admin)
    await registry.pricing_rule_service.update_rule(rule["id"], {"is_active": False}, admin)
    await registry.pricing_rule_service.add_rule(service_type.id, "0.5", 2, 12000, actor=admin)

    with pytest.raises(RangeOverlapError):
        await registry.pricing_rule_service.update_rule(rule["id"], {"is_active": True}, admin)


async def test_update_bounds_revalidates_overlap(registry, admin, service_type):
    await registry.pricing_rule_service.add_rule(service_type.id, 0, 1, 15000, actor=admin)
    second = await registry.pricing_rule_service.add_rule(service_type.id, 2, 5, 12000, actor=admin)

    with pytest.raises(RangeOverlapError):
        await registry.pricing_rule_service.update_rule(second["id"], {"weight_from": "0.9"}, admin)

    updated = await registry.pricing_rule_service.update_rule(second["id"], {"weight_from": "1.5"}, admin)
    assert updated["weight_from"] == Decimal("1.5")
    assert updated["weight_to"] == Decimal("5")


async def test_update_rule_does_not_conflict_with_itself(registry, admin, service_type):
    rule = await registry.pricing_rule_service.add_rule(service_type.id, 0, 1, 15000, actor=admin)

    updated = await registry.pricing_rule_service.update_rule(
        rule["id"], {"weight_to": "1.5", "price": "16000"}, admin
    )
    assert updated["weight_to"] == Decimal("1.5")
    assert updated["price"] == Decimal("16000")


async def test_update_rule_rejects_inverted_range(registry, admin, service_type):
    rule = await registry.pricing_rule_service.add_rule(service_type.id, 1, 2, 15000, actor=admin)

    with pytest.raises(ValidationError):
        await registry.pricing_rule_service.update_rule(rule["id"], {"weight_to": "0.5"}, admin)


async def test_find_rule_for_weight_is_inclusive(registry, admin, service_type):
    await registry.pricing_rule_service.add_rule(service_type.id, 0, 1, 15000, actor=admin)
    await registry.pricing_rule_service.add_rule(service_type.id, "1.01", 10, 12000, actor=admin)

    assert (await registry.pricing_rule_service.find_rule_for_weight(service_type.id, 1)).price == Decimal("15000")
    assert (await registry.pricing_rule_service.find_rule_for_weight(service_type.id, 0)).price == Decimal("15000")
    assert (await registry.pricing_rule_service.find_rule_for_weight(service_type.id, 10)).price == Decimal("12000")


async def test_find_rule_for_weight_in_gap(registry, admin, service_type):
    await registry.pricing_rule_service.add_rule(service_type.id, 0, 1, 15000, actor=admin)
    await registry.pricing_rule_service.add_rule(service_type.id, 2, 10, 12000, actor=admin)

    with pytest.raises(NotFoundError) as exc_info:
        await registry.pricing_rule_service.find_rule_for_weight(service_type.id, "1.5")
    assert exc_info.value.message == "No pricing rule found for this weight range"


async def test_delete_rule(registry, admin, staff, service_type):
    rule = await registry.pricing_rule_service.add_rule(service_type.id, 0, 1, 15000, actor=admin)

    assert await registry.pricing_rule_service.delete_rule(rule["id"], admin) is True
    assert await registry.pricing_rule_service.list_rules_for_service(service_type.id, staff) == []

    with pytest.raises(NotFoundError):
        await registry.pricing_rule_service.delete_rule(rule["id"], admin)
