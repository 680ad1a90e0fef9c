from enum import Enum
from sqlalchemy import Column, Integer, String, ForeignKey, Text, Numeric, Boolean
from sqlalchemy.orm import relationship
from .base import BaseModel


class OrderStatus(str, Enum):
    PENDING = 'pending'
    PROCESSING = 'processing'
    SHIPPING = 'shipping'
    DELIVERED = 'delivered'
    CANCELLED = 'cancelled'

    @classmethod
    def values(cls):
        return [status.value for status in cls]


class Order(BaseModel):
    """Shipment request dengan data pengirim/penerima, berat, biaya, dan status"""
    __tablename__ = 'orders'

    order_code = Column(String(20), unique=True, nullable=False, index=True)

    # Sender
    sender_name = Column(String(100), nullable=False)
    sender_phone = Column(String(20), nullable=False)
    sender_address = Column(Text, nullable=False)

    # Receiver
    receiver_name = Column(String(100), nullable=False)
    receiver_phone = Column(String(20), nullable=False)
    receiver_address = Column(Text, nullable=False)

    # Package and pricing
    service_type_id = Column(
        Integer, ForeignKey('service_types.id', ondelete='RESTRICT'), nullable=False, index=True
    )
    weight = Column(Numeric(10, 2), nullable=False)
    is_fragile = Column(Boolean, default=False, nullable=False)
    is_valuable = Column(Boolean, default=False, nullable=False)
    total_amount = Column(Numeric(12, 2), nullable=False)

    status = Column(String(20), nullable=False, default=OrderStatus.PENDING.value, index=True)
    notes = Column(Text)

    # Ownership
    created_by = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    assigned_shipper_id = Column(Integer, ForeignKey('users.id'), nullable=True, index=True)

    # Relationships
    service_type = relationship('ServiceType', back_populates='orders')
    creator = relationship('User', back_populates='created_orders', foreign_keys=[created_by])
    assigned_shipper = relationship('User', foreign_keys=[assigned_shipper_id])

    @property
    def is_pending(self) -> bool:
        return self.status == OrderStatus.PENDING.value

    def __repr__(self):
        return f'<Order {self.order_code}: {self.status}>'
