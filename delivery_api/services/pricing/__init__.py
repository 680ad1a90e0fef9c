"""
Pricing Domain Services
=======================

Services untuk service types, weight-tiered pricing rules, dan cost calculation
"""

from .service_type_service import ServiceTypeService
from .pricing_rule_service import PricingRuleService
from .cost_calculator import CostCalculator, compute_cost_breakdown, round_to_cents

__all__ = [
    'ServiceTypeService',
    'PricingRuleService',
    'CostCalculator',
    'compute_cost_breakdown',
    'round_to_cents',
]
