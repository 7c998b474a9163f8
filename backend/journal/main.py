# backend/journal/main.py
"""
Trade Journal API application.

Start-up order matters here:
1. setup_logging() before anything logs
2. the FastAPI app, CORS, rate limiting and correlation IDs
3. exception handlers that turn service exceptions into ErrorDetail bodies
4. the trades / valuation / analytics routers
5. info and health probes

Run with:
    uvicorn journal.main:app --reload      (from backend/)
"""

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from journal.config import settings
from journal.database import check_database_health, get_db
from journal.middleware import (
    RATE_LIMIT_HEALTH,
    CorrelationIdMiddleware,
    SlowAPIMiddleware,
    limiter,
    rate_limit_exceeded_handler,
)
from journal.routers import analytics_router, trades_router, valuation_router
from journal.schemas.errors import ErrorDetail, ValidationErrorDetail
from journal.services.exceptions import (
    NotFoundError,
    ServiceError,
    TradeNotFoundError,
    TradeValidationError,
    ValidationError,
)
from journal.utils import setup_logging

setup_logging()

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    description="Gold (XAUUSD) trade journal: trade valuation and performance analytics",
    version="0.1.0",
)

# CORS origins come from CORS_ORIGINS (the journal UI's dev server by default)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# slowapi reads the limiter from app.state.
# Middleware added last runs first: correlation IDs wrap rate limiting.
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(CorrelationIdMiddleware)


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================
# Services raise domain exceptions without HTTP knowledge; this is the one
# place they become status codes. Starlette dispatches on the most specific
# class in the exception's MRO, so TradeValidationError never reaches the
# generic ValidationError handler.

# error field used for HTTPExceptions raised by routers/dependencies
HTTP_ERROR_NAMES = {
    400: "BadRequestError",
    401: "UnauthorizedError",
    403: "ForbiddenError",
    404: "NotFoundError",
    405: "MethodNotAllowedError",
    409: "ConflictError",
    422: "ValidationError",
    429: "RateLimitError",
    500: "InternalServerError",
    503: "ServiceUnavailableError",
}


def error_response(
        status_code: int,
        error: str,
        message: str,
        details: dict | None = None,
        headers: dict | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorDetail(error=error, message=message, details=details).model_dump(),
        headers=headers,
    )


app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)


@app.exception_handler(TradeValidationError)
async def trade_validation_error_handler(
    request: Request, exc: TradeValidationError
) -> JSONResponse:
    """Trade inputs the valuation engine rejected: 400 with the issue kind."""
    logger.warning(f"Trade rejected: {exc.kind} (field={exc.field})")
    return error_response(
        400, "TradeValidationError", str(exc),
        details={"kind": exc.kind, "field": exc.field},
    )


@app.exception_handler(TradeNotFoundError)
async def trade_not_found_handler(request: Request, exc: TradeNotFoundError) -> JSONResponse:
    logger.warning(f"Trade not found: {exc.trade_id}")
    return error_response(
        404, "TradeNotFoundError", str(exc), details={"trade_id": exc.trade_id}
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.warning(f"Not found: {exc.resource_type} {exc.resource_id}")
    details = None
    if exc.resource_type:
        details = {"resource_type": exc.resource_type, "resource_id": exc.resource_id}
    return error_response(404, "NotFoundError", str(exc), details=details)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.warning(f"Validation failed: {exc}")
    details = {"field": exc.field} if exc.field else None
    return error_response(400, "ValidationError", str(exc), details=details)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Any other service failure is a server-side problem (500)."""
    logger.error(f"Unhandled service error: {exc}")
    return error_response(500, "ServiceError", str(exc))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """
    Reshape HTTPExceptions into the ErrorDetail body.

    Registered on Starlette's base class so routing errors (404 for an
    unknown path, 405) get the same body as the ones routers raise.
    """
    return error_response(
        exc.status_code,
        HTTP_ERROR_NAMES.get(exc.status_code, "HTTPError"),
        str(exc.detail) if exc.detail else "An error occurred",
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Schema failures (422), one {field, message, type} entry per problem."""
    details = [
        {
            "field": ".".join(str(part) for part in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content=ValidationErrorDetail(details=details).model_dump(),
    )


# =============================================================================
# ROUTERS
# =============================================================================

app.include_router(trades_router)  # /trades/*
app.include_router(valuation_router)  # /valuation/*
app.include_router(analytics_router)  # /analytics/*


# =============================================================================
# INFO & HEALTH
# =============================================================================

@app.get("/", tags=["Health"])
@limiter.limit(RATE_LIMIT_HEALTH)
def root(request: Request):
    """Application name, instrument and documentation links."""
    return {
        "message": f"Welcome to {settings.app_name}!",
        "pair": settings.default_pair,
        "docs": "/docs",
        "redoc": "/redoc",
    }


@app.get("/health", tags=["Health"])
@limiter.limit(RATE_LIMIT_HEALTH)
def health_check(request: Request):
    """
    Detailed health report.

    200 when the database answers, 503 otherwise. Pool usage is included
    for PostgreSQL.
    """
    database = check_database_health()
    database["critical"] = True
    healthy = database["status"] == "healthy"

    body = {
        "status": "healthy" if healthy else "unhealthy",
        "checks": {"database": database},
    }
    if not healthy:
        return JSONResponse(status_code=503, content=body)
    return body


@app.get("/health/live", tags=["Health"])
@limiter.limit(RATE_LIMIT_HEALTH)
def liveness_check(request: Request):
    """Process is up. Dependencies are not checked (see /health/ready)."""
    return {"status": "alive"}


@app.get("/health/ready", tags=["Health"])
@limiter.limit(RATE_LIMIT_HEALTH)
def readiness_check(request: Request, db: Session = Depends(get_db)):
    """Ready to serve: 503 while the database cannot be queried."""
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Readiness check failed: {e}")
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "error": "Database unavailable"},
        )
    return {"status": "ready"}
