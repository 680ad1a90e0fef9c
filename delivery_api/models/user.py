from enum import Enum
from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.orm import relationship
from .base import BaseModel


class UserRole(str, Enum):
    """Closed set of roles; drives the access policy."""
    ADMIN = 'admin'
    STAFF = 'staff'
    SHIPPER = 'shipper'

    @classmethod
    def values(cls):
        return [role.value for role in cls]


class User(BaseModel):
    """User operasional (admin console, staff, shipper)"""
    __tablename__ = 'users'

    # Authentication credentials
    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(100), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    # User information
    full_name = Column(String(100), nullable=False)
    phone = Column(String(20))

    # Role and access control
    role = Column(String(20), nullable=False, default=UserRole.STAFF.value)
    is_active = Column(Boolean, default=True, nullable=False)
    last_login = Column(DateTime)

    # Relationships
    created_orders = relationship(
        'Order', back_populates='creator', foreign_keys='Order.created_by'
    )

    def __repr__(self):
        return f'<User {self.username}: {self.full_name} ({self.role})>'
