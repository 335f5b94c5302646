"""FastAPI application entry point."""
import asyncio
import logging
import uuid
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from camp_api.core.config import settings
from camp_api.core.redis_client import redis_status
from camp_api.core.structured_logging import build_log_context
from camp_api.db.session import engine

logger = logging.getLogger(__name__)

# ============================================================================
# Sentry Integration (optional, for production error tracking)
# ============================================================================

if settings.SENTRY_DSN and settings.ENV != "dev":
    import sentry_sdk
    from sentry_sdk.integrations.fastapi import FastApiIntegration
    from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENV,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
        ],
        traces_sample_rate=0.1,
        send_default_pii=False,  # Applicant answers stay out of Sentry
    )
    logging.info("Sentry initialized for error tracking")

# ============================================================================
# Rate Limiting
# ============================================================================

from slowapi import _rate_limit_exceeded_handler
from slowapi.middleware import SlowAPIMiddleware
from slowapi.errors import RateLimitExceeded
from camp_api.core.rate_limit import (
    build_application_limiter,
    build_click_limiter,
    limiter,
    sweep_periodically,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Run the click limiter sweep for the lifetime of the process."""
    sweeper = asyncio.create_task(
        sweep_periodically(
            app.state.click_limiter,
            settings.RATE_LIMIT_CLICK_SWEEP_SECONDS,
        )
    )
    try:
        yield
    finally:
        sweeper.cancel()
        with suppress(asyncio.CancelledError):
            await sweeper


# ============================================================================
# FastAPI App
# ============================================================================

app = FastAPI(
    title="Camp HQ API",
    description="Campaign tracking, applications, and recruit pipeline for camp organizers",
    version=settings.VERSION,
    docs_url="/docs" if settings.ENV == "dev" else None,
    redoc_url="/redoc" if settings.ENV == "dev" else None,
    lifespan=lifespan,
)

# Add rate limiters
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)  # Applies the general per-minute default limit
app.state.application_limiter = build_application_limiter()
app.state.click_limiter = build_click_limiter()

# CORS middleware - must be added before routers
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,  # Required for cookies
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "X-Requested-With", "X-Request-ID"],
    expose_headers=["X-Request-ID"],
)


@app.middleware("http")
async def request_logging(request: Request, call_next):
    """Tag each request with an ID and log a PII-safe summary line."""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    logger.info(
        "request completed",
        extra=build_log_context(
            request_id=request_id,
            route=request.url.path,
            method=request.method,
            status_code=response.status_code,
        ),
    )
    return response


# ============================================================================
# Routers
# ============================================================================

from camp_api.routers import applications, auth, campaigns, recruits, tracking

# Public (unauthenticated, rate limited per client IP)
app.include_router(applications.router)
app.include_router(tracking.router)

# Staff auth
app.include_router(auth.router, prefix="/auth")

# Admin
app.include_router(campaigns.router, prefix="/campaigns")
app.include_router(recruits.router, prefix="/recruits")


# ============================================================================
# Health Check
# ============================================================================

@app.get("/health")
def health():
    """
    Health check endpoint.

    Verifies database connectivity and returns environment info. The
    rate limit store is reported but never fails the check: limiters fall
    back to process memory without it.
    """
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    return {
        "status": "ok",
        "env": settings.ENV,
        "version": settings.VERSION,
        "redis": redis_status(),
    }
