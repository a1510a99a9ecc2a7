import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from storefront.core.application.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    PartialWriteError,
    StorageFailureError,
    StorefrontError,
    ValidationError,
)
from storefront.core.exceptions import DataStoreError, UniqueViolationError
from storefront.infrastructure.configuration import Settings
from storefront.infrastructure.entrypoints.api.address_router import router as address_router
from storefront.infrastructure.entrypoints.api.cart_router import router as cart_router
from storefront.infrastructure.entrypoints.api.catalog_router import router as catalog_router
from storefront.infrastructure.entrypoints.api.health_router import router as health_router
from storefront.infrastructure.entrypoints.api.order_router import router as order_router
from storefront.infrastructure.entrypoints.api.vendor_router import router as vendor_router
from storefront.infrastructure.observability.logger_factory_service import configure_logging
from storefront.infrastructure.observability.logging import CorrelationMiddleware
from storefront.infrastructure.observability.tracing_setup import configure_tracing
from storefront.infrastructure.resolution.container import StorefrontContainer

logger = structlog.get_logger()

_STATUS_BY_ERROR: tuple[tuple[type[StorefrontError], int], ...] = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (ConflictError, status.HTTP_409_CONFLICT),
    (StorageFailureError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (PartialWriteError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def status_for(exc: StorefrontError) -> int:
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def create_app(settings: Settings, container: StorefrontContainer | None = None) -> FastAPI:
    configure_logging(settings.app)
    configure_tracing()
    logger.info(
        "Boot diagnostics",
        app_name=settings.app.app_name,
        env=settings.app.env,
        data_backend=settings.app.data_backend.value,
    )
    container = container or StorefrontContainer(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await container.aclose()

    app = FastAPI(title=settings.app.app_name, lifespan=lifespan)
    app.state.container = container
    app.add_middleware(CorrelationMiddleware)
    _register_exception_handlers(app)

    app.include_router(health_router)
    for router in (catalog_router, cart_router, address_router, order_router, vendor_router):
        app.include_router(router, prefix="/api/v1")
    return app


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StorefrontError)
    async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
        code = status_for(exc)
        content: dict[str, object] = {"error": exc.message, "code": exc.code}
        if isinstance(exc, PartialWriteError):
            reference = str(exc.context.get("order_id") or uuid.uuid4())
            content["reference"] = reference
            logger.error("Partial write", reference=reference, error_details=exc.message, **exc.context)
        elif code >= 500:
            logger.error("Request failed", error_type=type(exc).__name__, error_details=exc.message)
        else:
            logger.info("Request rejected", error_type=type(exc).__name__, status_code=code)
        return JSONResponse(status_code=code, content=jsonable_encoder(content))

    @app.exception_handler(DataStoreError)
    async def data_store_error_handler(request: Request, exc: DataStoreError) -> JSONResponse:
        if isinstance(exc, UniqueViolationError):
            return JSONResponse(
                status_code=status.HTTP_409_CONFLICT,
                content={"error": "The resource already exists.", "code": ConflictError.code},
            )
        logger.error("Data service failure", table=exc.table, error_details=str(exc), error_retryable=exc.retryable)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "error": "The data service is unavailable; nothing was changed. Please try again.",
                "code": StorageFailureError.code,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("Request schema validation failed", path=request.url.path)
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"error": "Invalid request.", "code": "invalid_request", "details": jsonable_encoder(exc.errors())},
        )
