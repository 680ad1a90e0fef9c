"""
User Domain Schemas
===================

Schemas untuk User dan Authentication
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime

from .base import BaseSchema, InputSchema
from .validators import validate_phone_number
from ..models.user import UserRole


class UserSchema(BaseSchema):
    """Schema untuk User response (tanpa password hash)"""
    username: str
    email: str
    full_name: str
    phone: Optional[str] = None
    role: UserRole
    is_active: bool = True
    last_login: Optional[datetime] = None


class UserCreateSchema(InputSchema):
    """Schema untuk create user"""
    username: str = Field(min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    full_name: str = Field(min_length=2, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    role: UserRole = UserRole.STAFF
    is_active: bool = True

    @field_validator('phone')
    @classmethod
    def validate_phone_field(cls, v):
        return validate_phone_number(v)


class UserUpdateSchema(InputSchema):
    """Schema untuk update user"""
    full_name: Optional[str] = Field(None, min_length=2, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    role: Optional[UserRole] = None
    is_active: Optional[bool] = None

    @field_validator('phone')
    @classmethod
    def validate_phone_field(cls, v):
        return validate_phone_number(v)


class LoginSchema(InputSchema):
    """Schema untuk login request"""
    username: str = Field(min_length=3, max_length=50)
    password: str = Field(min_length=6)


class LoginResponseSchema(BaseModel):
    """Schema untuk login response"""
    access_token: str
    token_type: str = 'Bearer'
    expires_in: int
    user: UserSchema


class PasswordChangeSchema(InputSchema):
    """Schema untuk change password"""
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=6, max_length=128)
