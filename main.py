from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from core.errors import ErrorCode
from core.middleware import RateLimitingMiddleware, RequestIdMiddleware, RequestTimingMiddleware
from core.payments import StripeIntentGateway
from core.response_envelope import (
    apply_response_documentation,
    document_response,
    error_response,
    http_exception_response,
)
from core.settings import get_settings
from core.validation_errors import format_validation_error_details
from services.intent_service import IntentService

settings = get_settings()
BASE_DIR = Path(__file__).resolve().parent

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One provider client per process, injected into routes through app.state.
    gateway = StripeIntentGateway.from_settings(settings)
    app.state.intent_service = IntentService(gateway=gateway, currency=settings.checkout_currency)
    logger.info(
        "Checkout service ready (env=%s, currency=%s, amount=%s)",
        settings.env,
        settings.checkout_currency,
        settings.checkout_amount_minor,
    )
    try:
        yield
    finally:
        app.state.intent_service = None


app = FastAPI(lifespan=lifespan, title="Checkout API")
# Last added runs first: request ids are assigned before rate limiting answers.
app.add_middleware(
    RateLimitingMiddleware,
    rule=settings.checkout_rate_limit,
    storage_uri=settings.rate_limit_storage_uri,
)
app.add_middleware(RequestTimingMiddleware)
app.add_middleware(RequestIdMiddleware)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session_secret_key or "dev-only-session-secret",
    https_only=settings.is_production,
    same_site="strict",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins) if settings.cors_origins else ["http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")


@app.exception_handler(HTTPException)
async def custom_http_exception_handler(request: Request, exc: HTTPException):
    return http_exception_response(exc=exc, request=request)


@app.exception_handler(RequestValidationError)
async def custom_validation_exception_handler(request: Request, exc: RequestValidationError):
    return error_response(
        status_code=422,
        message="Validation error",
        data={"code": ErrorCode.VALIDATION_FAILED.value, "details": format_validation_error_details(exc.errors())},
        request_id=getattr(request.state, "request_id", None),
    )


@app.exception_handler(Exception)
async def custom_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    details = str(exc) if (settings.debug_include_error_details and not settings.is_production) else None
    return error_response(
        status_code=500,
        message="Internal Server Error",
        data={"code": ErrorCode.INTERNAL_ERROR.value, "details": details},
        request_id=getattr(request.state, "request_id", None),
    )


@app.get("/health", tags=["Health"])
@document_response(
    message="Health check completed",
    success_example={"status": "healthy", "payments": "configured"},
)
async def health_check(request: Request):
    configured = getattr(request.app.state, "intent_service", None) is not None
    return {
        "status": "healthy" if configured else "degraded",
        "payments": "configured" if configured else "unavailable",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


from api.rest.checkout_route import router as rest_checkout_router
from api.web.checkout_page_route import router as web_checkout_page_router

app.include_router(rest_checkout_router, prefix="/api")
app.include_router(web_checkout_page_router)

apply_response_documentation(app)
