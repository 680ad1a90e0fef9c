"""
Order Domain Schemas
====================

Schemas untuk Order, status update, assignment, dan list filter
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Optional

from .base import BaseSchema, InputSchema
from .validators import validate_phone_number
from ..models.order import OrderStatus


class ServiceTypeBriefSchema(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class UserBriefSchema(BaseModel):
    id: int
    username: str
    full_name: str

    model_config = ConfigDict(from_attributes=True)


class OrderSchema(BaseSchema):
    order_code: str
    sender_name: str
    sender_phone: str
    sender_address: str
    receiver_name: str
    receiver_phone: str
    receiver_address: str
    service_type_id: int
    weight: Decimal
    is_fragile: bool = False
    is_valuable: bool = False
    total_amount: Decimal
    status: OrderStatus
    notes: Optional[str] = None
    created_by: int
    assigned_shipper_id: Optional[int] = None

    # relasi harus sudah di-load (lihat ORDER_RELATIONS di OrderService)
    service_type: Optional[ServiceTypeBriefSchema] = None
    creator: Optional[UserBriefSchema] = None
    assigned_shipper: Optional[UserBriefSchema] = None


class OrderCreateSchema(InputSchema):
    sender_name: str = Field(min_length=2, max_length=100)
    sender_phone: str = Field(min_length=1, max_length=20)
    sender_address: str = Field(min_length=10, max_length=500)
    receiver_name: str = Field(min_length=2, max_length=100)
    receiver_phone: str = Field(min_length=1, max_length=20)
    receiver_address: str = Field(min_length=10, max_length=500)
    service_type_id: int = Field(gt=0)
    weight: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    is_fragile: bool = False
    is_valuable: bool = False
    notes: Optional[str] = Field(None, max_length=1000)

    @field_validator('sender_phone', 'receiver_phone')
    @classmethod
    def validate_phone_field(cls, v):
        return validate_phone_number(v)


class OrderUpdateSchema(InputSchema):
    """Field yang boleh diubah selama order masih pending"""
    sender_name: Optional[str] = Field(None, min_length=2, max_length=100)
    sender_phone: Optional[str] = Field(None, min_length=1, max_length=20)
    sender_address: Optional[str] = Field(None, min_length=10, max_length=500)
    receiver_name: Optional[str] = Field(None, min_length=2, max_length=100)
    receiver_phone: Optional[str] = Field(None, min_length=1, max_length=20)
    receiver_address: Optional[str] = Field(None, min_length=10, max_length=500)
    weight: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    is_fragile: Optional[bool] = None
    is_valuable: Optional[bool] = None
    notes: Optional[str] = Field(None, max_length=1000)

    @field_validator('sender_phone', 'receiver_phone')
    @classmethod
    def validate_phone_field(cls, v):
        return validate_phone_number(v)


class OrderStatusUpdateSchema(InputSchema):
    # divalidasi terhadap OrderStatus di service supaya error-nya ValidationError
    status: str = Field(min_length=1)


class OrderAssignSchema(InputSchema):
    shipper_id: int = Field(gt=0)


# ==================== LIST FILTER ====================

class OrderSortField(str, Enum):
    CREATED_AT = 'created_at'
    UPDATED_AT = 'updated_at'
    ORDER_CODE = 'order_code'
    TOTAL_AMOUNT = 'total_amount'
    WEIGHT = 'weight'
    STATUS = 'status'


class SortOrder(str, Enum):
    ASC = 'asc'
    DESC = 'desc'


class OrderFilter(BaseModel):
    """
    Filter value object untuk list orders.

    Field-nya fixed; service menerjemahkan ke SQLAlchemy expression
    (parameterized), tidak pernah string interpolation.
    """
    search: Optional[str] = Field(None, max_length=100)
    status: Optional[OrderStatus] = None
    service_type_id: Optional[int] = Field(None, gt=0)
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    sort_by: OrderSortField = OrderSortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=100)

    @field_validator('search')
    @classmethod
    def blank_search_is_none(cls, v):
        if v is not None:
            v = v.strip()
        return v or None

    @model_validator(mode='after')
    def validate_date_range(self):
        if self.date_from and self.date_to and self.date_from > self.date_to:
            raise ValueError('date_from must be on or before date_to')
        return self
