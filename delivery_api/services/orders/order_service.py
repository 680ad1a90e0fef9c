"""
Order Service
=============

CRITICAL SERVICE untuk order lifecycle.

Status: pending -> processing -> shipping -> delivered, atau pending -> cancelled.
Status endpoint hanya memvalidasi keanggotaan enum; edit field dan delete
hanya boleh selama order masih pending. Total selalu dihitung ulang lewat
CostCalculator dari nilai yang tersimpan di row yang di-lock.
"""

from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any, Dict, Optional

from sqlalchemy import select, func
from sqlalchemy.orm import selectinload

from ..base import BaseService, transactional
from ..exceptions import ValidationError, NotFoundError, ConflictError
from ..access import Actor, Capability
from .order_code import generate_order_code
from ...models import Order, OrderStatus, ServiceType, User, UserRole
from ...schemas import OrderSchema, OrderCreateSchema, OrderUpdateSchema, OrderFilter

PRICED_FIELDS = ('weight', 'is_fragile', 'is_valuable')
ORDER_RELATIONS = (
    selectinload(Order.service_type),
    selectinload(Order.creator),
    selectinload(Order.assigned_shipper),
)
SEARCH_COLUMNS = (
    Order.order_code,
    Order.sender_name,
    Order.receiver_name,
    Order.sender_phone,
    Order.receiver_phone,
)


class OrderService(BaseService):
    """Service untuk Order management"""

    def __init__(self, db_session, cost_calculator, access_policy=None, config=None,
                 code_generator=generate_order_code):
        super().__init__(db_session, access_policy, config)
        self.cost_calculator = cost_calculator
        self.code_generator = code_generator
        self.max_code_attempts = self.config.get('ORDER_CODE_MAX_ATTEMPTS', 5)

    # ==================== QUERIES ====================

    async def list_orders(self, filters, actor: Actor) -> Dict[str, Any]:
        """List orders dengan search, filter, sorting, dan pagination sesuai scope actor"""
        self.access_policy.require(actor, Capability.ORDER_VIEW)
        if not isinstance(filters, OrderFilter):
            filters = OrderFilter(**self._validate_input(OrderFilter, filters))

        query = self.access_policy.apply_order_scope(select(Order).options(*ORDER_RELATIONS), actor)
        query = self._apply_search(query, filters.search, SEARCH_COLUMNS)

        if filters.status:
            query = query.filter(Order.status == filters.status.value)
        if filters.service_type_id:
            query = query.filter(Order.service_type_id == filters.service_type_id)
        query = self._apply_date_range(query, filters.date_from, filters.date_to)
        query = self._apply_sorting(query, Order, filters.sort_by.value, filters.sort_order.value)

        result = await self._paginate_query(query, filters.page, filters.limit)
        return {
            'items': [self._serialize(OrderSchema, order) for order in result['items']],
            'pagination': result['pagination']
        }

    async def get_order(self, order_id: int, actor: Actor) -> Dict[str, Any]:
        self.access_policy.require(actor, Capability.ORDER_VIEW)
        order = await self._get_visible_order(order_id, actor)
        return self._serialize(OrderSchema, order)

    async def get_statistics(self, actor: Actor, date_from: Optional[date] = None,
                             date_to: Optional[date] = None) -> Dict[str, Any]:
        """Ringkasan jumlah order dan revenue, per status dan per service type"""
        self.access_policy.require(actor, Capability.ORDER_STATS)
        if date_from and date_to and date_from > date_to:
            raise ValidationError("date_from must be on or before date_to")

        totals_query = self._apply_date_range(
            select(func.count(Order.id), func.coalesce(func.sum(Order.total_amount), 0)),
            date_from, date_to
        )
        total_orders, total_revenue = (await self.db_session.execute(totals_query)).one()

        status_query = self._apply_date_range(
            select(Order.status, func.count(Order.id)).group_by(Order.status),
            date_from, date_to
        )
        status_rows = (await self.db_session.execute(status_query)).all()

        service_query = self._apply_date_range(
            select(
                Order.service_type_id,
                ServiceType.name,
                func.count(Order.id),
                func.coalesce(func.sum(Order.total_amount), 0),
            )
            .join(ServiceType, ServiceType.id == Order.service_type_id)
            .group_by(Order.service_type_id, ServiceType.name),
            date_from, date_to
        )
        service_rows = (await self.db_session.execute(service_query)).all()

        return {
            'total_orders': total_orders,
            'total_revenue': self._money(total_revenue),
            'status_stats': [
                {'status': status, 'count': count} for status, count in status_rows
            ],
            'service_type_stats': [
                {
                    'service_type_id': service_type_id,
                    'service_type_name': name,
                    'count': count,
                    'revenue': self._money(revenue),
                }
                for service_type_id, name, count, revenue in service_rows
            ],
        }

    # ==================== LIFECYCLE ====================

    @transactional
    async def create_order(self, data, actor: Actor) -> Dict[str, Any]:
        """Create order baru (status pending) dengan total dari pricing tier"""
        self.access_policy.require(actor, Capability.ORDER_CREATE)
        validated = self._validate_input(OrderCreateSchema, data)

        service_type = await self.db_session.get(ServiceType, validated['service_type_id'])
        if not service_type:
            raise NotFoundError('ServiceType', validated['service_type_id'], message="Service type not found")
        if not service_type.is_active:
            raise ValidationError("Service type is not active", field='service_type_id')

        validated['total_amount'] = await self._quote(
            service_type.id, validated['weight'], validated['is_fragile'], validated['is_valuable']
        )

        order = Order(
            **validated,
            order_code=await self._generate_unique_code(),
            status=OrderStatus.PENDING.value,
            created_by=actor.user_id,
        )
        self.db_session.add(order)
        await self.db_session.flush()
        await self.db_session.refresh(order, ['service_type', 'creator', 'assigned_shipper'])

        self.logger.info(
            f"Order {order.order_code} created by user {actor.user_id} "
            f"(service_type={order.service_type_id}, total={order.total_amount})"
        )
        return self._serialize(OrderSchema, order)

    @transactional
    async def update_order_status(self, order_id: int, new_status, actor: Actor) -> Dict[str, Any]:
        """Set status baru; hanya keanggotaan enum yang divalidasi"""
        self.access_policy.require(actor, Capability.ORDER_UPDATE_STATUS)
        status_value = new_status.value if isinstance(new_status, OrderStatus) else new_status
        if status_value not in OrderStatus.values():
            raise ValidationError("Invalid status", field='status',
                                  details={'allowed': OrderStatus.values()})

        order = await self._get_visible_order(order_id, actor, for_update=True)
        previous = order.status
        order.status = status_value
        await self.db_session.flush()

        self.logger.info(f"Order {order.order_code} status {previous} -> {status_value} by user {actor.user_id}")
        return self._serialize(OrderSchema, order)

    @transactional
    async def update_order_fields(self, order_id: int, data, actor: Actor) -> Dict[str, Any]:
        """Update detail order; hanya untuk order pending"""
        self.access_policy.require(actor, Capability.ORDER_UPDATE)
        validated = self._validate_input(OrderUpdateSchema, data, exclude_unset=True)

        order = await self._get_visible_order(order_id, actor, for_update=True)
        if not order.is_pending:
            raise ConflictError("Only pending orders can be updated", 'Order')

        # field wajib tidak boleh di-null-kan; notes boleh dikosongkan
        changes = {
            key: value for key, value in validated.items()
            if value is not None or key == 'notes'
        }

        if any(field in changes for field in PRICED_FIELDS):
            changes['total_amount'] = await self._quote(
                order.service_type_id,
                changes.get('weight', order.weight),
                changes.get('is_fragile', order.is_fragile),
                changes.get('is_valuable', order.is_valuable),
            )

        for key, value in changes.items():
            setattr(order, key, value)

        await self.db_session.flush()
        return self._serialize(OrderSchema, order)

    @transactional
    async def delete_order(self, order_id: int, actor: Actor) -> bool:
        self.access_policy.require(actor, Capability.ORDER_DELETE)
        order = await self._get_visible_order(order_id, actor, for_update=True)
        if not order.is_pending:
            raise ConflictError("Only pending orders can be deleted", 'Order')

        await self.db_session.delete(order)
        self.logger.info(f"Order {order.order_code} deleted by user {actor.user_id}")
        return True

    @transactional
    async def assign_shipper(self, order_id: int, shipper_id: int, actor: Actor) -> Dict[str, Any]:
        """Assign order ke shipper aktif"""
        self.access_policy.require(actor, Capability.ORDER_ASSIGN)

        shipper = await self.db_session.get(User, shipper_id)
        if not shipper or shipper.role != UserRole.SHIPPER.value or not shipper.is_active:
            raise ValidationError("Assignee must be an active shipper", field='shipper_id')

        order = await self._get_visible_order(order_id, actor, for_update=True)
        order.assigned_shipper = shipper
        await self.db_session.flush()

        self.logger.info(f"Order {order.order_code} assigned to shipper {shipper.id}")
        return self._serialize(OrderSchema, order)

    # ==================== HELPERS ====================

    async def _get_visible_order(self, order_id: int, actor: Actor, for_update: bool = False) -> Order:
        """Order yang tidak ada dan yang di luar scope sama-sama NotFoundError"""
        query = self.access_policy.apply_order_scope(
            select(Order).options(*ORDER_RELATIONS).filter(Order.id == order_id), actor
        )
        if for_update:
            query = query.with_for_update()
        result = await self.db_session.execute(query)
        order = result.scalars().first()
        if not order:
            raise NotFoundError('Order', order_id, message="Order not found")
        return order

    async def _quote(self, service_type_id: int, weight, is_fragile: bool, is_valuable: bool) -> Decimal:
        try:
            breakdown = await self.cost_calculator.calculate_cost(
                service_type_id, weight, is_fragile, is_valuable
            )
        except NotFoundError as e:
            raise ValidationError(
                f"No pricing rule covers weight {weight} for this service type", field='weight'
            ) from e
        return breakdown['total_cost']

    async def _generate_unique_code(self) -> str:
        for _ in range(self.max_code_attempts):
            code = self.code_generator()
            result = await self.db_session.execute(
                select(Order.id).filter(Order.order_code == code)
            )
            if result.first() is None:
                return code
            self.logger.warning(f"Order code collision on {code}, retrying")
        raise ConflictError("Could not generate a unique order code, please retry", 'Order')

    def _apply_date_range(self, query, date_from: Optional[date], date_to: Optional[date]):
        """Inklusif per hari kalender pada created_at"""
        if date_from:
            query = query.filter(Order.created_at >= datetime.combine(date_from, time.min))
        if date_to:
            query = query.filter(Order.created_at < datetime.combine(date_to + timedelta(days=1), time.min))
        return query

    @staticmethod
    def _money(value) -> Decimal:
        return Decimal(str(value or 0)).quantize(Decimal('0.01'))
