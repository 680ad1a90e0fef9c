"""
Cost Calculator
===============

Hitung ongkos kirim dari pricing tier yang cocok:

    total = round_to_cents(price * weight
                           + fragile_surcharge (kalau fragile)
                           + valuable_surcharge (kalau valuable))
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Any, Dict

from ..base import BaseService
from ..exceptions import ValidationError
from ..access import Actor, Capability
from ...schemas import CostBreakdownSchema

CENTS = Decimal('0.01')
ZERO = Decimal('0')


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_to_cents(value) -> Decimal:
    """Round half away from zero ke 2 desimal"""
    return to_decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def compute_cost_breakdown(rule, weight, is_fragile: bool = False, is_valuable: bool = False) -> Dict[str, Any]:
    """Pure: hasil sama untuk (rule, weight, flags) yang sama"""
    weight = to_decimal(weight)
    price = to_decimal(rule.price)
    fragile_fee = to_decimal(rule.fragile_surcharge or ZERO) if is_fragile else ZERO
    valuable_fee = to_decimal(rule.valuable_surcharge or ZERO) if is_valuable else ZERO

    return {
        'pricing_rule_id': rule.id,
        'service_type_id': rule.service_type_id,
        'base_price': price,
        'weight': weight,
        'fragile_fee': fragile_fee,
        'valuable_fee': valuable_fee,
        'total_cost': round_to_cents(price * weight + fragile_fee + valuable_fee),
    }


class CostCalculator(BaseService):
    """Cari tier yang cocok di PricingRuleService lalu hitung total"""

    def __init__(self, db_session, pricing_rule_service, access_policy=None, config=None):
        super().__init__(db_session, access_policy, config)
        self.pricing_rule_service = pricing_rule_service

    async def calculate_cost(self, service_type_id, weight, is_fragile: bool = False,
                             is_valuable: bool = False, actor: Actor = None) -> Dict[str, Any]:
        if actor is not None:
            self.access_policy.require(actor, Capability.COST_CALCULATE)

        weight = self._validate_weight(service_type_id, weight)
        rule = await self.pricing_rule_service.find_rule_for_weight(service_type_id, weight)
        breakdown = compute_cost_breakdown(rule, weight, bool(is_fragile), bool(is_valuable))
        return CostBreakdownSchema(**breakdown).model_dump()

    def _validate_weight(self, service_type_id, weight) -> Decimal:
        if service_type_id is None or weight is None or weight == '':
            raise ValidationError("Service type ID and weight are required")
        try:
            weight = to_decimal(weight)
        except (InvalidOperation, ValueError) as e:
            raise ValidationError("Weight must be a number", field='weight') from e
        if not weight.is_finite() or weight <= 0:
            raise ValidationError("Weight must be greater than 0", field='weight')
        return weight
