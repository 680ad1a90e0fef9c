"""
User Management Routes
======================

Routes untuk user CRUD dan management (admin only)
"""

from fastapi import APIRouter, Depends, Query, status
from typing import Optional

from ...services import ServiceRegistry, Actor
from ...schemas import UserCreateSchema, UserUpdateSchema
from ...dependencies import get_service_registry, get_current_user
from ...responses import APIResponse

router = APIRouter()


@router.get("")
async def get_users(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = Query(None),
    role: Optional[str] = Query(None),
    current_user: Actor = Depends(get_current_user),
    service_registry: ServiceRegistry = Depends(get_service_registry)
):
    """
    Get users dengan pagination dan filtering

    **Query Parameters:**
    - page: Page number (default: 1)
    - limit: Items per page (default: 10, max: 100)
    - search: Search dalam username, email, full_name
    - role: Filter by role
    """
    result = await service_registry.user_service.list_users(
        current_user, role=role, search=search, page=page, limit=limit
    )

    return APIResponse.paginated(result, message="Users retrieved successfully")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreateSchema,
    current_user: Actor = Depends(get_current_user),
    service_registry: ServiceRegistry = Depends(get_service_registry)
):
    """
    Create new user

    **Requires admin role**
    """
    user = await service_registry.user_service.create_user(user_data, current_user)

    return APIResponse.success(
        data=user,
        message="User created successfully"
    )


@router.get("/{user_id}")
async def get_user(
    user_id: int,
    current_user: Actor = Depends(get_current_user),
    service_registry: ServiceRegistry = Depends(get_service_registry)
):
    """Get user by ID"""
    user = await service_registry.user_service.get_user(user_id, current_user)

    return APIResponse.success(
        data=user,
        message="User retrieved successfully"
    )


@router.put("/{user_id}")
async def update_user(
    user_id: int,
    user_data: UserUpdateSchema,
    current_user: Actor = Depends(get_current_user),
    service_registry: ServiceRegistry = Depends(get_service_registry)
):
    """Update user"""
    user = await service_registry.user_service.update_user(
        user_id, user_data.model_dump(exclude_unset=True), current_user
    )

    return APIResponse.success(
        data=user,
        message="User updated successfully"
    )


@router.delete("/{user_id}")
async def delete_user(
    user_id: int,
    current_user: Actor = Depends(get_current_user),
    service_registry: ServiceRegistry = Depends(get_service_registry)
):
    """Hard delete user yang tidak punya order"""
    await service_registry.user_service.delete_user(user_id, current_user)

    return APIResponse.success(message="User deleted successfully")


@router.patch("/{user_id}/toggle-status")
async def toggle_user_status(
    user_id: int,
    current_user: Actor = Depends(get_current_user),
    service_registry: ServiceRegistry = Depends(get_service_registry)
):
    """Activate / deactivate user account"""
    user = await service_registry.user_service.toggle_status(user_id, current_user)

    return APIResponse.success(
        data=user,
        message=f"User {'activated' if user['is_active'] else 'deactivated'} successfully"
    )
