"""
Authentication Routes
=====================

CRITICAL ROUTES untuk login, profile, dan password
"""

from fastapi import APIRouter, Depends

from ...services import ServiceRegistry, Actor
from ...schemas import LoginSchema, PasswordChangeSchema
from ...dependencies import get_service_registry, get_current_user
from ...responses import APIResponse

router = APIRouter()


@router.post("/login")
async def login(
    login_data: LoginSchema,
    service_registry: ServiceRegistry = Depends(get_service_registry)
):
    """
    Login user dan return access token

    **Parameters:**
    - username: User username
    - password: User password

    **Returns:**
    - access_token: JWT access token
    - expires_in: Lifetime token dalam detik
    - user: User profile data
    """
    auth_result = await service_registry.auth_service.authenticate_user(
        username=login_data.username,
        password=login_data.password
    )

    return APIResponse.success(
        data=auth_result,
        message="Login successful"
    )


@router.get("/profile")
async def get_profile(
    current_user: Actor = Depends(get_current_user),
    service_registry: ServiceRegistry = Depends(get_service_registry)
):
    """Get current user profile"""
    profile = await service_registry.auth_service.get_profile(current_user)

    return APIResponse.success(
        data=profile,
        message="Profile retrieved successfully"
    )


@router.put("/change-password")
async def change_password(
    password_data: PasswordChangeSchema,
    current_user: Actor = Depends(get_current_user),
    service_registry: ServiceRegistry = Depends(get_service_registry)
):
    """
    Change user password

    **Parameters:**
    - current_password: Current password
    - new_password: New password
    """
    await service_registry.auth_service.change_password(
        current_user,
        current_password=password_data.current_password,
        new_password=password_data.new_password
    )

    return APIResponse.success(message="Password changed successfully")


@router.post("/logout")
async def logout(current_user: Actor = Depends(get_current_user)):
    """Token stateless; client cukup membuang token"""
    return APIResponse.success(message="Logout successful")
