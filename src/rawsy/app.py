"""Rawsy FastAPI application.

Marketplace web server: identity, catalogue, quote negotiation and
notification feed, all served from one process on the ``rawsy`` domain.

Usage:
    uvicorn rawsy.app:app --host 0.0.0.0 --port 8000 --reload
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.exceptions import ValidationError

from rawsy.catalogue.api.routes import router as product_router
from rawsy.config import get_settings
from rawsy.domain import init_domain, rawsy
from rawsy.identity.api.routes import router as identity_router
from rawsy.marketplace import Marketplace
from rawsy.negotiation.api.routes import router as quote_router
from rawsy.notifications.api.routes import router as notification_router
from rawsy.shared.exceptions import (
    ConflictError,
    DependencyError,
    ForbiddenError,
    InvalidTransition,
    MarketplaceError,
    NotFoundError,
)
from rawsy.utils.logging import add_context, clear_context

logger = structlog.get_logger(__name__)

init_domain()

_STATUS_CODES: dict[type[MarketplaceError], int] = {
    ForbiddenError: 403,
    NotFoundError: 404,
    InvalidTransition: 409,
    ConflictError: 409,
    DependencyError: 503,
}


def _status_for(exc: MarketplaceError) -> int:
    for error_cls in type(exc).__mro__:
        if error_cls in _STATUS_CODES:
            return _STATUS_CODES[error_cls]
    return 500


async def marketplace_error_handler(request: Request, exc: MarketplaceError) -> JSONResponse:
    status_code = _status_for(exc)
    if status_code >= 500:
        logger.error("Request failed", path=request.url.path, error=exc.code, messages=exc.messages)
    return JSONResponse(status_code=status_code, content={"error": exc.code, "messages": exc.messages})


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    messages = exc.messages if isinstance(exc.messages, dict) else {"_entity": list(exc.messages)}
    return JSONResponse(status_code=400, content={"error": "validation_error", "messages": messages})


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages: dict[str, list[str]] = {}
    for error in exc.errors():
        # Drop the "body" / "query" / "header" prefix
        field = ".".join(str(part) for part in error["loc"][1:]) or "_entity"
        messages.setdefault(field, []).append(error["msg"])
    return JSONResponse(status_code=400, content={"error": "validation_error", "messages": messages})


def create_app(marketplace: Marketplace | None = None) -> FastAPI:
    app = FastAPI(
        title="Rawsy API",
        description="B2B raw-materials marketplace with quote negotiation",
    )
    app.state.marketplace = marketplace or Marketplace()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        clear_context()
        add_context(method=request.method, path=request.url.path, user_id=request.headers.get("x-user-id"))
        try:
            with rawsy.domain_context():
                response = await call_next(request)
            return response
        finally:
            clear_context()

    app.add_exception_handler(MarketplaceError, marketplace_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)

    app.include_router(identity_router)
    app.include_router(product_router)
    app.include_router(quote_router)
    app.include_router(notification_router)

    @app.get("/health")
    async def health():
        return JSONResponse(
            content={
                "status": "ok",
                "env": get_settings().env,
                "database": rawsy.providers["default"].conn_info["provider"],
                "event_processing": rawsy.config["event_processing"],
            }
        )

    return app


app = create_app()
