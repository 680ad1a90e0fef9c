"""
Delivery API Application Factory
================================

Pusat perakitan aplikasi FastAPI menggunakan Application Factory Pattern.
"""

import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Import semua router dari modulnya masing-masing
from .routes import auth_router, user_router, service_type_router, pricing_router, order_router

from .services.exceptions import (
    ValidationError, ConflictError, NotFoundError,
    AuthenticationError, AuthorizationError
)
from .responses import APIResponse
from .config import settings

__version__ = "1.0.0"

logger = logging.getLogger(__name__)


def setup_logging():
    """Konfigurasi root logger sekali dari LOG_LEVEL."""
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def setup_middleware(app: FastAPI):
    """Setup semua middleware aplikasi."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH"],
        allow_headers=["*"],
    )
    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=settings.ALLOWED_HOSTS
    )

    @app.middleware("http")
    async def add_request_id_and_process_time(request: Request, call_next):
        request_id = str(uuid.uuid4())
        start_time = time.time()

        request.state.request_id = request_id
        response = await call_next(request)

        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)
        response.headers["X-Request-ID"] = request_id
        return response


def setup_exception_handlers(app: FastAPI):
    """Setup semua custom exception handlers."""

    # RangeOverlapError turunan ValidationError dan ConflictError, keduanya 400
    @app.exception_handler(ValidationError)
    async def validation_exception_handler(request: Request, exc: ValidationError):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=exc.to_dict())

    @app.exception_handler(ConflictError)
    async def conflict_exception_handler(request: Request, exc: ConflictError):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=exc.to_dict())

    @app.exception_handler(NotFoundError)
    async def not_found_exception_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=exc.to_dict())

    @app.exception_handler(AuthenticationError)
    async def authentication_exception_handler(request: Request, exc: AuthenticationError):
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content=exc.to_dict(),
            headers={"WWW-Authenticate": "Bearer"}
        )

    @app.exception_handler(AuthorizationError)
    async def authorization_exception_handler(request: Request, exc: AuthorizationError):
        return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content=exc.to_dict())

    # 404/405 bawaan router juga pakai envelope yang sama
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=APIResponse.error(str(exc.detail)),
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = [
            f"{'.'.join(str(loc) for loc in err['loc'] if loc != 'body') or 'body'}: {err['msg']}"
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=APIResponse.error("Validation failed", errors=errors, error_code='VALIDATION_ERROR')
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception(
            f"Unhandled error on {request.method} {request.url.path} "
            f"(request_id={getattr(request.state, 'request_id', None)})"
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=APIResponse.error("An unexpected error occurred")
        )


def setup_routes(app: FastAPI):
    """Daftarkan (include) semua router ke aplikasi."""
    # Endpoint sistem
    @app.get("/health", tags=["System"])
    async def health_check():
        return {"status": "healthy", "timestamp": time.time(), "version": __version__}

    @app.get("/", tags=["System"])
    async def root():
        return {"message": "Delivery Order API", "version": __version__, "docs": "/docs"}

    # Daftarkan semua router dari modul
    app.include_router(auth_router, prefix="/api/auth", tags=["Authentication"])
    app.include_router(user_router, prefix="/api/users", tags=["User Management"])
    app.include_router(service_type_router, prefix="/api/pricing/service-types", tags=["Service Types"])
    app.include_router(pricing_router, prefix="/api/pricing", tags=["Pricing"])
    app.include_router(order_router, prefix="/api/orders", tags=["Orders"])


def create_app() -> FastAPI:
    """
    Application Factory: Membuat dan mengkonfigurasi instance FastAPI.
    """
    setup_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Kode yang dijalankan saat startup
        logger.info("Delivery API starting up")
        yield
        # Kode yang dijalankan saat shutdown
        logger.info("Delivery API shutting down")

    # 1. Buat instance FastAPI
    app = FastAPI(
        title="Delivery Order Management API",
        description="Order, pricing tier, dan cost calculation API untuk layanan pengiriman",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    # 2. Setup Middleware
    setup_middleware(app)

    # 3. Setup Exception Handlers
    setup_exception_handlers(app)

    # 4. Setup Routes
    setup_routes(app)

    logger.debug("FastAPI app created and configured")
    return app
