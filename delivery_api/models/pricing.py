from sqlalchemy import Column, Integer, String, ForeignKey, Text, Numeric, Boolean, CheckConstraint
from sqlalchemy.orm import relationship
from .base import BaseModel


class ServiceType(BaseModel):
    """Kategori layanan pengiriman (standard, express, ...) yang punya pricing tier sendiri"""
    __tablename__ = 'service_types'

    name = Column(String(100), nullable=False)
    description = Column(Text)
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    pricing_rules = relationship('PricingRule', back_populates='service_type')
    orders = relationship('Order', back_populates='service_type')

    def __repr__(self):
        return f'<ServiceType {self.id}: {self.name}>'


class PricingRule(BaseModel):
    """
    Weight tier untuk satu service type.

    Range [weight_from, weight_to] diperlakukan sebagai closed interval;
    rule aktif dalam satu service type tidak boleh overlap.
    """
    __tablename__ = 'pricing_rules'
    __table_args__ = (
        CheckConstraint('weight_from < weight_to', name='ck_pricing_rules_weight_range'),
    )

    service_type_id = Column(
        Integer, ForeignKey('service_types.id', ondelete='RESTRICT'), nullable=False, index=True
    )
    weight_from = Column(Numeric(10, 2), nullable=False)  # kg
    weight_to = Column(Numeric(10, 2), nullable=False)  # kg
    price = Column(Numeric(10, 2), nullable=False)  # per kg
    fragile_surcharge = Column(Numeric(10, 2))
    valuable_surcharge = Column(Numeric(10, 2))
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    service_type = relationship('ServiceType', back_populates='pricing_rules')

    def __repr__(self):
        return (f'<PricingRule {self.id}: service_type={self.service_type_id} '
                f'[{self.weight_from}, {self.weight_to}] @ {self.price}>')
