"""
Service Type Routes
===================

Routes untuk master data service type dan tier pricing aktifnya
"""

from fastapi import APIRouter, Depends, Query, status
from typing import Optional

from ...services import ServiceRegistry, Actor
from ...schemas import ServiceTypeCreateSchema, ServiceTypeUpdateSchema
from ...dependencies import get_service_registry, get_current_user
from ...responses import APIResponse

router = APIRouter()


@router.get("")
async def get_active_service_types(
    current_user: Actor = Depends(get_current_user),
    service_registry: ServiceRegistry = Depends(get_service_registry)
):
    """Service type aktif untuk form order"""
    service_types = await service_registry.service_type_service.list_active(current_user)

    return APIResponse.success(
        data=service_types,
        message="Service types retrieved successfully"
    )


@router.get("/admin")
async def get_all_service_types(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = Query(None),
    current_user: Actor = Depends(get_current_user),
    service_registry: ServiceRegistry = Depends(get_service_registry)
):
    """
    Get semua service type (termasuk non-aktif)

    **Requires admin role**
    """
    result = await service_registry.service_type_service.list_service_types(
        current_user, search=search, page=page, limit=limit
    )

    return APIResponse.paginated(result, message="Service types retrieved successfully")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_service_type(
    service_type_data: ServiceTypeCreateSchema,
    current_user: Actor = Depends(get_current_user),
    service_registry: ServiceRegistry = Depends(get_service_registry)
):
    service_type = await service_registry.service_type_service.create_service_type(
        service_type_data, current_user
    )

    return APIResponse.success(
        data=service_type,
        message="Service type created successfully"
    )


@router.put("/{service_type_id}")
async def update_service_type(
    service_type_id: int,
    service_type_data: ServiceTypeUpdateSchema,
    current_user: Actor = Depends(get_current_user),
    service_registry: ServiceRegistry = Depends(get_service_registry)
):
    service_type = await service_registry.service_type_service.update_service_type(
        service_type_id, service_type_data.model_dump(exclude_unset=True), current_user
    )

    return APIResponse.success(
        data=service_type,
        message="Service type updated successfully"
    )


@router.delete("/{service_type_id}")
async def delete_service_type(
    service_type_id: int,
    current_user: Actor = Depends(get_current_user),
    service_registry: ServiceRegistry = Depends(get_service_registry)
):
    """Delete ditolak selama masih ada pricing rule atau order"""
    await service_registry.service_type_service.delete_service_type(service_type_id, current_user)

    return APIResponse.success(message="Service type deleted successfully")


@router.get("/{service_type_id}/pricing")
async def get_service_type_pricing(
    service_type_id: int,
    current_user: Actor = Depends(get_current_user),
    service_registry: ServiceRegistry = Depends(get_service_registry)
):
    """Tier pricing aktif, urut weight_from"""
    rules = await service_registry.pricing_rule_service.list_rules_for_service(
        service_type_id, current_user
    )

    return APIResponse.success(
        data=rules,
        message="Pricing rules retrieved successfully"
    )
