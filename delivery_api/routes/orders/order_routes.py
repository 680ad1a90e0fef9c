"""
Order Routes
============

CRITICAL ROUTES untuk order CRUD, status update, dan shipper assignment
"""

from datetime import date
from fastapi import APIRouter, Depends, Query, status
from typing import Optional

from ...services import ServiceRegistry, Actor
from ...schemas import OrderCreateSchema, OrderUpdateSchema, OrderStatusUpdateSchema, OrderAssignSchema
from ...dependencies import get_service_registry, get_current_user
from ...responses import APIResponse

router = APIRouter()


@router.get("")
async def get_orders(
    search: Optional[str] = Query(None),
    status_filter: Optional[str] = Query(None, alias="status"),
    service_type_id: Optional[int] = Query(None),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
    sort_by: str = Query("created_at"),
    sort_order: str = Query("desc"),
    page: int = Query(1),
    limit: int = Query(10),
    current_user: Actor = Depends(get_current_user),
    service_registry: ServiceRegistry = Depends(get_service_registry)
):
    """
    Get orders sesuai scope user

    **Query Parameters:**
    - search: Search dalam order code, nama dan telepon sender/receiver
    - status: Filter by status
    - service_type_id: Filter by service type
    - date_from / date_to: Range tanggal created_at (inklusif)
    - sort_by: created_at, updated_at, order_code, total_amount, weight, status
    - sort_order: asc / desc
    - page, limit: Pagination (limit max 100)
    """
    # filter divalidasi di service lewat OrderFilter
    filters = {
        'search': search,
        'status': status_filter or None,
        'service_type_id': service_type_id,
        'date_from': date_from,
        'date_to': date_to,
        'sort_by': sort_by,
        'sort_order': sort_order,
        'page': page,
        'limit': limit,
    }
    result = await service_registry.order_service.list_orders(filters, current_user)

    return APIResponse.paginated(result, message="Orders retrieved successfully")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_order(
    order_data: OrderCreateSchema,
    current_user: Actor = Depends(get_current_user),
    service_registry: ServiceRegistry = Depends(get_service_registry)
):
    """Create order baru; total dihitung dari pricing tier"""
    order = await service_registry.order_service.create_order(order_data, current_user)

    return APIResponse.success(
        data=order,
        message="Order created successfully"
    )


@router.get("/stats/overview")
async def get_order_statistics(
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
    current_user: Actor = Depends(get_current_user),
    service_registry: ServiceRegistry = Depends(get_service_registry)
):
    """
    Statistik order dan revenue

    **Requires admin role**
    """
    stats = await service_registry.order_service.get_statistics(
        current_user, date_from=date_from, date_to=date_to
    )

    return APIResponse.success(
        data=stats,
        message="Order statistics retrieved successfully"
    )


@router.get("/{order_id}")
async def get_order(
    order_id: int,
    current_user: Actor = Depends(get_current_user),
    service_registry: ServiceRegistry = Depends(get_service_registry)
):
    order = await service_registry.order_service.get_order(order_id, current_user)

    return APIResponse.success(
        data=order,
        message="Order retrieved successfully"
    )


@router.put("/{order_id}")
async def update_order(
    order_id: int,
    order_data: OrderUpdateSchema,
    current_user: Actor = Depends(get_current_user),
    service_registry: ServiceRegistry = Depends(get_service_registry)
):
    """Update detail order (hanya status pending)"""
    order = await service_registry.order_service.update_order_fields(
        order_id, order_data.model_dump(exclude_unset=True), current_user
    )

    return APIResponse.success(
        data=order,
        message="Order updated successfully"
    )


@router.delete("/{order_id}")
async def delete_order(
    order_id: int,
    current_user: Actor = Depends(get_current_user),
    service_registry: ServiceRegistry = Depends(get_service_registry)
):
    """Delete order (hanya status pending)"""
    await service_registry.order_service.delete_order(order_id, current_user)

    return APIResponse.success(message="Order deleted successfully")


@router.patch("/{order_id}/status")
async def update_order_status(
    order_id: int,
    status_data: OrderStatusUpdateSchema,
    current_user: Actor = Depends(get_current_user),
    service_registry: ServiceRegistry = Depends(get_service_registry)
):
    order = await service_registry.order_service.update_order_status(
        order_id, status_data.status, current_user
    )

    return APIResponse.success(
        data=order,
        message="Order status updated successfully"
    )


@router.patch("/{order_id}/assign")
async def assign_order(
    order_id: int,
    assign_data: OrderAssignSchema,
    current_user: Actor = Depends(get_current_user),
    service_registry: ServiceRegistry = Depends(get_service_registry)
):
    """
    Assign order ke shipper

    **Requires admin role**
    """
    order = await service_registry.order_service.assign_shipper(
        order_id, assign_data.shipper_id, current_user
    )

    return APIResponse.success(
        data=order,
        message="Order assigned successfully"
    )
