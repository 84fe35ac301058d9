"""
FastAPI Application Factory.
Creates and configures the FastAPI application with routers, middleware, DI
and the mapping from domain errors to HTTP responses.
"""

import logging
import time
from contextlib import asynccontextmanager

from dishka import AsyncContainer
from dishka.integrations.fastapi import setup_dishka
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from parley.application.commands.messages import drain_notifications
from parley.config.logging_config import (
    NO_CORRELATION_ID,
    correlation_id_var,
    setup_logging,
)
from parley.config.settings import Config
from parley.domain.exceptions import (
    AlreadyMemberError,
    DuplicateIdentityError,
    EntityNotFoundError,
    InvalidInputError,
    InvalidParticipantsError,
    NotMemberError,
    UnknownSenderError,
)
from parley.observability import increment_error, observe_request_latency
from parley.presentation.api import (
    conversations_router,
    metrics_router,
    users_router,
)
from parley.setup.ioc.container import create_container

# Setup logging
setup_logging(Config.LOG_LEVEL, Config.LOG_PATH)

logger = logging.getLogger(__name__)

# Domain error -> HTTP status
ERROR_STATUS_CODES = {
    InvalidInputError: 400,
    InvalidParticipantsError: 400,
    DuplicateIdentityError: 409,
    AlreadyMemberError: 409,
    NotMemberError: 403,
    UnknownSenderError: 403,
    EntityNotFoundError: 404,
}


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Middleware to extract and set correlation ID from request headers."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get("X-Correlation-ID", NO_CORRELATION_ID)

        # Set in contextvars (propagates to async tasks and logging)
        correlation_id_var.set(correlation_id)

        response = await call_next(request)
        response.headers["X-Correlation-ID"] = correlation_id
        return response


class RequestLatencyMiddleware(BaseHTTPMiddleware):
    """Records every request in the latency histogram, labelled by route template."""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        route = request.scope.get("route")
        observe_request_latency(
            method=request.method,
            route=getattr(route, "path", "unmatched"),
            status_code=response.status_code,
            duration=time.perf_counter() - start,
        )
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    - Startup: container and Dishka are already set up before the app starts
    - Shutdown: let scheduled push notifications finish, then close the DI
      container (disconnects Prisma when in use)
    """
    logger.info(f"parley started with {Config.STORAGE_BACKEND} storage")
    yield
    await drain_notifications()
    await app.state.dishka_container.close()
    logger.info("parley shutdown. DI container closed.")


def create_fastapi_app(container: AsyncContainer = None) -> FastAPI:
    """
    Application factory for creating the FastAPI app.

    Args:
        container: DI container to use; a new one is created when omitted

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="parley API",
        description="Conversation membership and messaging backend",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Setup Dishka BEFORE app starts (must add middleware before startup)
    setup_dishka(container or create_container(), app)

    app.add_middleware(RequestLatencyMiddleware)
    # Correlation ID middleware (must be added before CORS)
    app.add_middleware(CorrelationIdMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for error_type in ERROR_STATUS_CODES:
        app.add_exception_handler(error_type, domain_exception_handler)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        logger.info(f"Validation error on {request.url.path}: {errors}")
        increment_error("RequestValidationError")
        return JSONResponse(
            status_code=400,
            content={"error": "Validation error", "details": jsonable_errors(errors)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger.info(f"HTTP {exc.status_code} on {request.url.path}: {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.url.path}: {exc}")
        increment_error(type(exc).__name__)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"},
        )

    # Health check routes
    @app.get("/", tags=["health"])
    async def root():
        return {"message": "parley is running."}

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "healthy"}

    # Register routers
    app.include_router(users_router)
    app.include_router(conversations_router)
    app.include_router(metrics_router)

    return app


async def domain_exception_handler(request: Request, exc: Exception):
    error_type = type(exc).__name__
    status_code = next(
        code for cls, code in ERROR_STATUS_CODES.items() if isinstance(exc, cls)
    )
    logger.info(f"{error_type} on {request.method} {request.url.path}: {exc.message}")
    increment_error(error_type)
    return JSONResponse(status_code=status_code, content={"error": exc.message})


def jsonable_errors(errors: list[dict]) -> list[dict]:
    """Pydantic error contexts can hold exception objects; keep them printable."""
    return [
        {key: (str(value) if key == "ctx" else value) for key, value in error.items()}
        for error in errors
    ]


# Create the app instance
app = create_fastapi_app()
