"""
Service Type Service
====================

Master data service type (standard, express, ...). Delete diblokir selama
masih ada pricing rule atau order yang mereferensikan.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import select, func

from ..base import BaseService, transactional
from ..exceptions import ConflictError
from ..access import Actor, Capability
from ...models import ServiceType, PricingRule, Order
from ...schemas import ServiceTypeSchema, ServiceTypeCreateSchema, ServiceTypeUpdateSchema


class ServiceTypeService(BaseService):
    """Service untuk ServiceType management"""

    async def list_active(self, actor: Actor) -> List[Dict[str, Any]]:
        """Service type aktif, urut nama"""
        self.access_policy.require(actor, Capability.PRICING_VIEW)

        result = await self.db_session.execute(
            select(ServiceType)
            .filter(ServiceType.is_active.is_(True))
            .order_by(ServiceType.name.asc(), ServiceType.id.asc())
        )
        return [self._serialize(ServiceTypeSchema, st) for st in result.scalars().all()]

    async def list_service_types(self, actor: Actor, search: Optional[str] = None,
                                 page: int = 1, limit: int = None) -> Dict[str, Any]:
        """Admin listing, termasuk yang non-aktif"""
        self.access_policy.require(actor, Capability.SERVICE_TYPE_MANAGE)

        query = select(ServiceType)
        query = self._apply_search(query, search, [ServiceType.name, ServiceType.description])
        query = self._apply_sorting(query, ServiceType, 'created_at', 'desc')

        result = await self._paginate_query(query, page, limit)
        return {
            'items': [self._serialize(ServiceTypeSchema, st) for st in result['items']],
            'pagination': result['pagination']
        }

    async def get_service_type(self, service_type_id: int, actor: Actor) -> Dict[str, Any]:
        self.access_policy.require(actor, Capability.PRICING_VIEW)
        service_type = await self._get_or_404(ServiceType, service_type_id)
        return self._serialize(ServiceTypeSchema, service_type)

    @transactional
    async def create_service_type(self, data, actor: Actor) -> Dict[str, Any]:
        self.access_policy.require(actor, Capability.SERVICE_TYPE_MANAGE)
        validated = self._validate_input(ServiceTypeCreateSchema, data)

        service_type = ServiceType(**validated)
        self.db_session.add(service_type)
        await self.db_session.flush()

        self.logger.info(f"Service type '{service_type.name}' created (id={service_type.id})")
        return self._serialize(ServiceTypeSchema, service_type)

    @transactional
    async def update_service_type(self, service_type_id: int, data, actor: Actor) -> Dict[str, Any]:
        self.access_policy.require(actor, Capability.SERVICE_TYPE_MANAGE)
        validated = self._validate_input(ServiceTypeUpdateSchema, data, exclude_unset=True)

        service_type = await self._get_or_404(ServiceType, service_type_id, for_update=True)
        for key, value in validated.items():
            if key in ('name', 'is_active') and value is None:
                continue
            setattr(service_type, key, value)

        await self.db_session.flush()
        return self._serialize(ServiceTypeSchema, service_type)

    @transactional
    async def delete_service_type(self, service_type_id: int, actor: Actor) -> bool:
        self.access_policy.require(actor, Capability.SERVICE_TYPE_MANAGE)
        service_type = await self._get_or_404(ServiceType, service_type_id, for_update=True)

        rule_count = await self._count_references(PricingRule, PricingRule.service_type_id, service_type.id)
        if rule_count > 0:
            raise ConflictError(
                "Cannot delete service type with existing pricing rules", 'ServiceType',
                details={'pricing_rules': rule_count}
            )

        order_count = await self._count_references(Order, Order.service_type_id, service_type.id)
        if order_count > 0:
            raise ConflictError(
                "Cannot delete service type referenced by orders", 'ServiceType',
                details={'orders': order_count}
            )

        await self.db_session.delete(service_type)
        self.logger.info(f"Service type {service_type_id} deleted")
        return True

    async def _count_references(self, model_class, column, service_type_id: int) -> int:
        result = await self.db_session.execute(
            select(func.count(model_class.id)).filter(column == service_type_id)
        )
        return result.scalar() or 0
