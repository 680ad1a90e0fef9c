"""
API Dependencies
================

FastAPI dependencies untuk delivery API.
"""

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional

from .services import ServiceRegistry, Actor, create_service_registry
from .database import get_db_session
from .config import settings
from .services.exceptions import AuthenticationError

# auto_error=False supaya header yang hilang jadi AuthenticationError (401), bukan 403 bawaan FastAPI
security = HTTPBearer(auto_error=False)


# Dependency untuk get service registry
async def get_service_registry(db_session=Depends(get_db_session)) -> ServiceRegistry:
    """Service registry per request, satu session untuk semua service"""
    return create_service_registry(db_session=db_session, config=settings.model_dump())


# Dependency untuk get current user
async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    service_registry: ServiceRegistry = Depends(get_service_registry)
) -> Actor:
    """Get current authenticated actor dari Bearer token"""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Authentication required")

    return await service_registry.auth_service.verify_access_token(credentials.credentials)
