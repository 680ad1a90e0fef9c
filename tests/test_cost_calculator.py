from decimal import Decimal
from types import SimpleNamespace

import pytest

from delivery_api.models import UserRole
from delivery_api.services import Actor
from delivery_api.services.pricing import compute_cost_breakdown, round_to_cents
from delivery_api.services.exceptions import AuthenticationError, NotFoundError, ValidationError


def total_cost(rule, weight, **flags):
    return compute_cost_breakdown(rule, weight, **flags)["total_cost"]


def make_rule(price, fragile=None, valuable=None):
    return SimpleNamespace(
        id=1,
        service_type_id=1,
        price=Decimal(str(price)),
        fragile_surcharge=None if fragile is None else Decimal(str(fragile)),
        valuable_surcharge=None if valuable is None else Decimal(str(valuable)),
    )


@pytest.mark.parametrize("value, expected", [
    ("1.005", "1.01"),
    ("2.675", "2.68"),
    ("1.004", "1.00"),
    ("-1.005", "-1.01"),
    ("10", "10.00"),
])
def test_round_to_cents_half_away_from_zero(value, expected):
    assert round_to_cents(Decimal(value)) == Decimal(expected)


def test_fragile_surcharge_added():
    rule = make_rule(15000, fragile=5000, valuable=10000)
    assert total_cost(rule, Decimal("0.8"), is_fragile=True) == Decimal("17000.00")


def test_all_surcharges():
    rule = make_rule(15000, fragile=5000, valuable=10000)
    breakdown = compute_cost_breakdown(rule, Decimal("0.8"), is_fragile=True, is_valuable=True)

    assert breakdown["base_price"] == Decimal("15000")
    assert breakdown["fragile_fee"] == Decimal("5000")
    assert breakdown["valuable_fee"] == Decimal("10000")
    assert breakdown["total_cost"] == Decimal("27000.00")


def test_missing_surcharge_counts_as_zero():
    rule = make_rule(15000)
    assert total_cost(rule, Decimal("1"), is_fragile=True, is_valuable=True) == Decimal("15000.00")


def test_result_is_rounded_to_cents():
    rule = make_rule("3333.33")
    # 3333.33 * 0.15 = 499.9995
    assert total_cost(rule, Decimal("0.15")) == Decimal("500.00")


def test_same_inputs_same_total():
    rule = make_rule(12000, fragile=5000)
    totals = {total_cost(rule, Decimal("2.35"), is_fragile=True) for _ in range(5)}
    assert totals == {Decimal("33200.00")}


# ==================== WITH STORE ====================

async def test_calculate_cost(registry, staff, standard):
    breakdown = await registry.cost_calculator.calculate_cost(
        standard.id, "0.8", is_fragile=True, is_valuable=False, actor=staff
    )

    assert breakdown["service_type_id"] == standard.id
    assert breakdown["weight"] == Decimal("0.8")
    assert breakdown["total_cost"] == Decimal("17000.00")


async def test_calculate_cost_uses_matching_tier(registry, shipper, standard):
    breakdown = await registry.cost_calculator.calculate_cost(standard.id, 2, actor=shipper)
    assert breakdown["base_price"] == Decimal("12000")
    assert breakdown["total_cost"] == Decimal("24000.00")


async def test_no_matching_tier(registry, staff, standard):
    with pytest.raises(NotFoundError) as exc_info:
        await registry.cost_calculator.calculate_cost(standard.id, 50, actor=staff)
    assert exc_info.value.message == "No pricing rule found for this weight range"


@pytest.mark.parametrize("weight", [0, "-1", "0.00"])
async def test_non_positive_weight(registry, staff, standard, weight):
    with pytest.raises(ValidationError) as exc_info:
        await registry.cost_calculator.calculate_cost(standard.id, weight, actor=staff)
    assert exc_info.value.message == "Weight must be greater than 0"


@pytest.mark.parametrize("service_type_id, weight", [(None, 1), (1, None), (1, "")])
async def test_missing_inputs(registry, staff, service_type_id, weight):
    with pytest.raises(ValidationError) as exc_info:
        await registry.cost_calculator.calculate_cost(service_type_id, weight, actor=staff)
    assert exc_info.value.message == "Service type ID and weight are required"


async def test_non_numeric_weight(registry, staff, standard):
    with pytest.raises(ValidationError):
        await registry.cost_calculator.calculate_cost(standard.id, "heavy", actor=staff)


async def test_inactive_actor_cannot_calculate(registry, standard):
    inactive = Actor(user_id=1, role=UserRole.STAFF, is_active=False)
    with pytest.raises(AuthenticationError):
        await registry.cost_calculator.calculate_cost(standard.id, 1, actor=inactive)
