from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from prompthub.config import settings
from prompthub.routers.ai_router import router as ai_router
from prompthub.routers.category_router import router as category_router
from prompthub.routers.health_router import router as health_router
from prompthub.routers.prompt_router import router as prompt_router
from prompthub.routers.saved_prompt_router import router as saved_prompt_router
from prompthub.services.prompt_ai_service import PromptAiService
from prompthub.storage.errors import CategoryInUseError, StorageUnavailableError, StorageValidationError
from prompthub.storage.factory import build_storage, sql_storage_of
from prompthub.storage.storage import Storage
from prompthub.utils.rate_limiter import limiter

logger = logging.getLogger(__name__)


def _cors_origins() -> list[str]:
    raw = (settings.allowed_cors_origins or "*").strip()
    if raw == "*":
        return ["*"]
    return [o.strip() for o in raw.split(",") if o.strip()]


def _error(status_code: int, message: str, **extra: object) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, "status_code": status_code, **extra})


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """Handle HTTP exceptions with consistent format."""
        return _error(exc.status_code, exc.detail)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Malformed request bodies and parameters are client errors."""
        logger.warning(f"Request validation error on {request.url.path}: {exc.errors()}")
        return _error(400, "Validation error", details=jsonable_encoder(exc.errors()))

    @app.exception_handler(ValidationError)
    async def validation_exception_handler(request: Request, exc: ValidationError) -> JSONResponse:
        """Handle Pydantic validation errors."""
        logger.warning(f"Validation error: {exc}")
        return _error(400, "Validation error", details=jsonable_encoder(exc.errors()))

    @app.exception_handler(StorageValidationError)
    async def storage_validation_handler(request: Request, exc: StorageValidationError) -> JSONResponse:
        logger.info(f"Rejected by storage: {exc}")
        return _error(400, str(exc))

    @app.exception_handler(CategoryInUseError)
    async def category_in_use_handler(request: Request, exc: CategoryInUseError) -> JSONResponse:
        return _error(409, str(exc))

    @app.exception_handler(StorageUnavailableError)
    async def storage_unavailable_handler(request: Request, exc: StorageUnavailableError) -> JSONResponse:
        logger.error(f"Storage unavailable: {exc}")
        return _error(503, "Storage temporarily unavailable")

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        """Handle database errors."""
        logger.error(f"Database error: {exc}")
        return _error(500, "Database error")

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected errors."""
        logger.exception(f"Unexpected error: {exc}")
        return _error(500, "Internal server error")


def create_app(storage: Storage | None = None, ai_service: PromptAiService | None = None) -> FastAPI:
    """
    Build the application around one storage instance.

    The storage defaults to what settings describe; tests pass their own.
    The AI service is created on first use when not supplied.
    """
    app = FastAPI(title="PromptHub API", version="1.0.0")
    app.state.storage = storage if storage is not None else build_storage(settings)
    app.state.ai_service = ai_service

    # Add rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    @app.on_event("startup")
    async def on_startup() -> None:
        sql = sql_storage_of(app.state.storage)
        if sql is None:
            return
        try:
            await sql.create_schema()
            if settings.seed_on_startup:
                await sql.seed_if_empty()
        except StorageUnavailableError:
            if not settings.seed_fallback_on_storage_error:
                raise
            logger.warning("Database unreachable at startup; continuing with seed fallback for catalog reads")

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        sql = sql_storage_of(app.state.storage)
        if sql is not None:
            await sql.dispose()

    app.include_router(health_router, prefix="/api")
    app.include_router(category_router, prefix="/api")
    app.include_router(prompt_router, prefix="/api")
    app.include_router(saved_prompt_router, prefix="/api")
    app.include_router(ai_router, prefix="/api/ai")
    return app


app = create_app()
