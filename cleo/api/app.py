"""FastAPI server for Cleo file detection"""

from __future__ import annotations

import math
import os

from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cleo.api.models import ErrorResponse
from cleo.api.routes.files import router as files_router
from cleo.api.routes.health import router as health_router
from cleo.config import APP_ENV, APP_VERSION
from cleo.infrastructure.call_limiter import CallLimiter, CallLimitExceeded
from cleo.observability.logging import get_logger
from cleo.observability.telemetry import counter

# Load environment variables from .env file
load_dotenv()

logger = get_logger(__name__)

ALLOWED_ORIGINS = [
    origin.strip() for origin in os.getenv("CLEO_ALLOWED_ORIGINS", "").split(",") if origin.strip()
]

# Allow localhost in development only
if APP_ENV == "development":
    ALLOWED_ORIGINS.extend(
        [
            "http://localhost:3000",
            "http://localhost:8000",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:8000",
        ]
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Return field names only, never the validation rules or input values.

    Side Effects:
        - Logs the full validation errors
        - Increments api.validation_errors counter
    """
    logger.warning("Validation error on %s: %s", request.url.path, exc.errors())
    counter("api.validation_errors")

    body = ErrorResponse(
        detail="Invalid request format. Please check your request and try again.",
        error_count=len(exc.errors()),
        invalid_fields=[str(err["loc"][-1]) for err in exc.errors()],
    )
    return JSONResponse(status_code=422, content=body.model_dump(exclude_none=True))


async def call_limit_exception_handler(request: Request, exc: CallLimitExceeded) -> JSONResponse:
    retry_after = max(1, math.ceil(exc.retry_after))
    logger.info("Call limit hit on %s (limit %d)", request.url.path, exc.limit)
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content=ErrorResponse(detail=str(exc), retry_after=retry_after).model_dump(),
        headers={"Retry-After": str(retry_after)},
    )


def create_app(call_limiter: CallLimiter | None = None) -> FastAPI:
    """
    Build the API application.

    Args:
        call_limiter: Per-caller limiter for /api/files/process. A fresh
                      one with configured defaults is created when omitted.
    """
    application = FastAPI(title="Cleo Files API", version=APP_VERSION)
    application.state.call_limiter = call_limiter or CallLimiter()

    application.add_exception_handler(RequestValidationError, validation_exception_handler)
    application.add_exception_handler(CallLimitExceeded, call_limit_exception_handler)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-ID", "X-User-ID"],
    )

    application.include_router(health_router)
    application.include_router(files_router)

    logger.info("Cleo Files API %s ready (%s)", APP_VERSION, APP_ENV)
    return application


app = create_app()
