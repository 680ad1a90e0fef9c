"""
Pricing Domain Schemas
======================

Schemas untuk ServiceType, PricingRule, dan cost calculation
"""

from decimal import Decimal
from pydantic import BaseModel, Field
from typing import Optional

from .base import BaseSchema, InputSchema


# ==================== SERVICE TYPE ====================

class ServiceTypeSchema(BaseSchema):
    name: str
    description: Optional[str] = None
    is_active: bool = True


class ServiceTypeCreateSchema(InputSchema):
    name: str = Field(min_length=2, max_length=100)
    description: Optional[str] = Field(None, max_length=500)


class ServiceTypeUpdateSchema(InputSchema):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    is_active: Optional[bool] = None


# ==================== PRICING RULE ====================

class PricingRuleSchema(BaseSchema):
    service_type_id: int
    weight_from: Decimal
    weight_to: Decimal
    price: Decimal
    fragile_surcharge: Optional[Decimal] = None
    valuable_surcharge: Optional[Decimal] = None
    is_active: bool = True


class PricingRuleCreateSchema(InputSchema):
    service_type_id: int = Field(gt=0)
    weight_from: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    weight_to: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    price: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    fragile_surcharge: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    valuable_surcharge: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)


class PricingRuleUpdateSchema(InputSchema):
    weight_from: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    weight_to: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    price: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    fragile_surcharge: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    valuable_surcharge: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    is_active: Optional[bool] = None


# ==================== COST CALCULATION ====================

class CostCalculationSchema(InputSchema):
    """Request body untuk calculate-cost; weight dan service type divalidasi di service"""
    service_type_id: Optional[int] = None
    weight: Optional[Decimal] = None
    is_fragile: bool = False
    is_valuable: bool = False


class CostBreakdownSchema(BaseModel):
    pricing_rule_id: int
    service_type_id: int
    base_price: Decimal
    weight: Decimal
    fragile_fee: Decimal
    valuable_fee: Decimal
    total_cost: Decimal
