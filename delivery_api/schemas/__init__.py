"""
Schemas Package
===============

Pydantic schemas untuk serialization dan validation
"""

from .base import BaseSchema, InputSchema

# ==================== USER DOMAIN ====================
from .user import (
    UserSchema, UserCreateSchema, UserUpdateSchema,
    LoginSchema, LoginResponseSchema, PasswordChangeSchema
)

# ==================== PRICING DOMAIN ====================
from .pricing import (
    ServiceTypeSchema, ServiceTypeCreateSchema, ServiceTypeUpdateSchema,
    PricingRuleSchema, PricingRuleCreateSchema, PricingRuleUpdateSchema,
    CostCalculationSchema, CostBreakdownSchema
)

# ==================== ORDER DOMAIN ====================
from .order import (
    OrderSchema, OrderCreateSchema, OrderUpdateSchema,
    OrderStatusUpdateSchema, OrderAssignSchema,
    ServiceTypeBriefSchema, UserBriefSchema,
    OrderFilter, OrderSortField, SortOrder
)

__all__ = [
    'BaseSchema', 'InputSchema',

    'UserSchema', 'UserCreateSchema', 'UserUpdateSchema',
    'LoginSchema', 'LoginResponseSchema', 'PasswordChangeSchema',

    'ServiceTypeSchema', 'ServiceTypeCreateSchema', 'ServiceTypeUpdateSchema',
    'PricingRuleSchema', 'PricingRuleCreateSchema', 'PricingRuleUpdateSchema',
    'CostCalculationSchema', 'CostBreakdownSchema',

    'OrderSchema', 'OrderCreateSchema', 'OrderUpdateSchema',
    'OrderStatusUpdateSchema', 'OrderAssignSchema',
    'ServiceTypeBriefSchema', 'UserBriefSchema',
    'OrderFilter', 'OrderSortField', 'SortOrder',
]
