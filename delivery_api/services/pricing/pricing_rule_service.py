"""
Pricing Rule Service
====================

CRITICAL SERVICE untuk weight-tiered pricing rules.

Invariant: dalam satu service type, closed interval [weight_from, weight_to]
milik rule-rule yang aktif tidak pernah overlap. Check dan write terjadi di
transaksi yang sama, dengan row service type di-lock lebih dulu.
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import select

from ..base import BaseService, transactional
from ..exceptions import ValidationError, NotFoundError, RangeOverlapError
from ..access import Actor, Capability
from ...models import ServiceType, PricingRule
from ...schemas import PricingRuleSchema, PricingRuleCreateSchema, PricingRuleUpdateSchema


class PricingRuleService(BaseService):
    """Store untuk pricing rules per service type"""

    # ==================== QUERIES ====================

    async def list_rules_for_service(self, service_type_id: int, actor: Actor) -> List[Dict[str, Any]]:
        """Rule aktif untuk satu service type, urut weight_from ascending"""
        self.access_policy.require(actor, Capability.PRICING_VIEW)
        rules = await self._active_rules(service_type_id)
        return [self._serialize(PricingRuleSchema, rule) for rule in rules]

    async def list_rules(self, actor: Actor, service_type_id: Optional[int] = None,
                         page: int = 1, limit: int = None) -> Dict[str, Any]:
        """Admin listing semua rule (aktif maupun tidak)"""
        self.access_policy.require(actor, Capability.PRICING_MANAGE)

        query = select(PricingRule)
        if service_type_id:
            query = query.filter(PricingRule.service_type_id == service_type_id)
        query = self._apply_sorting(query, PricingRule, 'created_at', 'desc')

        result = await self._paginate_query(query, page, limit)
        return {
            'items': [self._serialize(PricingRuleSchema, rule) for rule in result['items']],
            'pagination': result['pagination']
        }

    async def find_rule_for_weight(self, service_type_id: int, weight) -> PricingRule:
        """
        Rule aktif pertama (urut weight_from) yang mencakup weight, inklusif
        di kedua ujung. Tidak mengasumsikan hasilnya unik.
        """
        weight = Decimal(str(weight))
        result = await self.db_session.execute(
            select(PricingRule)
            .filter(
                PricingRule.service_type_id == service_type_id,
                PricingRule.is_active.is_(True),
                PricingRule.weight_from <= weight,
                PricingRule.weight_to >= weight,
            )
            .order_by(PricingRule.weight_from.asc(), PricingRule.id.asc())
            .limit(1)
        )
        rule = result.scalars().first()
        if not rule:
            raise NotFoundError(
                'PricingRule', None,
                message="No pricing rule found for this weight range",
                details={'service_type_id': service_type_id, 'weight': str(weight)}
            )
        return rule

    # ==================== MUTATIONS ====================

    @transactional
    async def add_rule(self, service_type_id: int, weight_from, weight_to, price,
                       fragile_surcharge=None, valuable_surcharge=None,
                       actor: Actor = None) -> Dict[str, Any]:
        """Create rule baru setelah validasi range dan overlap"""
        self.access_policy.require(actor, Capability.PRICING_MANAGE)

        validated = self._validate_input(PricingRuleCreateSchema, {
            'service_type_id': service_type_id,
            'weight_from': weight_from,
            'weight_to': weight_to,
            'price': price,
            'fragile_surcharge': fragile_surcharge,
            'valuable_surcharge': valuable_surcharge,
        })
        self._validate_range(validated['weight_from'], validated['weight_to'])

        await self._lock_service_type(validated['service_type_id'])
        await self._ensure_no_overlap(
            validated['service_type_id'], validated['weight_from'], validated['weight_to']
        )

        rule = PricingRule(**validated)
        self.db_session.add(rule)
        await self.db_session.flush()

        self.logger.info(
            f"Pricing rule {rule.id} created for service type {rule.service_type_id}: "
            f"[{rule.weight_from}, {rule.weight_to}] @ {rule.price}/kg"
        )
        return self._serialize(PricingRuleSchema, rule)

    @transactional
    async def update_rule(self, rule_id: int, data, actor: Actor) -> Dict[str, Any]:
        """Update hanya field yang dikirim; range efektif divalidasi ulang"""
        self.access_policy.require(actor, Capability.PRICING_MANAGE)
        validated = self._validate_input(PricingRuleUpdateSchema, data, exclude_unset=True)

        rule = await self._get_or_404(PricingRule, rule_id, for_update=True)

        # weight_from/weight_to/price/is_active tidak boleh di-null-kan
        for key in ('weight_from', 'weight_to', 'price', 'is_active'):
            if key in validated and validated[key] is None:
                del validated[key]

        new_from = validated.get('weight_from', rule.weight_from)
        new_to = validated.get('weight_to', rule.weight_to)
        new_active = validated.get('is_active', rule.is_active)
        self._validate_range(new_from, new_to)

        bounds_changed = 'weight_from' in validated or 'weight_to' in validated
        reactivated = new_active and not rule.is_active
        if new_active and (bounds_changed or reactivated):
            await self._lock_service_type(rule.service_type_id)
            await self._ensure_no_overlap(rule.service_type_id, new_from, new_to, exclude_id=rule.id)

        for key, value in validated.items():
            setattr(rule, key, value)

        await self.db_session.flush()
        self.logger.info(f"Pricing rule {rule.id} updated: {sorted(validated)}")
        return self._serialize(PricingRuleSchema, rule)

    @transactional
    async def delete_rule(self, rule_id: int, actor: Actor) -> bool:
        self.access_policy.require(actor, Capability.PRICING_MANAGE)
        rule = await self._get_or_404(PricingRule, rule_id, for_update=True)
        await self.db_session.delete(rule)
        self.logger.info(f"Pricing rule {rule_id} deleted")
        return True

    # ==================== HELPERS ====================

    async def _active_rules(self, service_type_id: int) -> List[PricingRule]:
        result = await self.db_session.execute(
            select(PricingRule)
            .filter(
                PricingRule.service_type_id == service_type_id,
                PricingRule.is_active.is_(True),
            )
            .order_by(PricingRule.weight_from.asc(), PricingRule.id.asc())
        )
        return list(result.scalars().all())

    def _validate_range(self, weight_from, weight_to):
        if Decimal(str(weight_from)) >= Decimal(str(weight_to)):
            raise ValidationError("Weight from must be less than weight to", field='weight_from')

    async def _lock_service_type(self, service_type_id: int) -> ServiceType:
        result = await self.db_session.execute(
            select(ServiceType).filter(ServiceType.id == service_type_id).with_for_update()
        )
        service_type = result.scalars().first()
        if not service_type:
            raise ValidationError("Service type not found", field='service_type_id')
        return service_type

    async def _ensure_no_overlap(self, service_type_id: int, weight_from, weight_to,
                                 exclude_id: Optional[int] = None):
        """Closed-interval overlap: a.from <= b.to AND a.to >= b.from"""
        query = select(PricingRule.id).filter(
            PricingRule.service_type_id == service_type_id,
            PricingRule.is_active.is_(True),
            PricingRule.weight_from <= weight_to,
            PricingRule.weight_to >= weight_from,
        )
        if exclude_id is not None:
            query = query.filter(PricingRule.id != exclude_id)

        result = await self.db_session.execute(query.limit(1))
        conflicting_id = result.scalar()
        if conflicting_id is not None:
            raise RangeOverlapError(weight_from, weight_to, conflicting_rule_id=conflicting_id)
