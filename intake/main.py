"""Intake API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map IntakeError → {"error": message} responses
    - CORS and the request-size limit come from settings (not hardcoded)
    - The request-size limit never turns a webhook delivery into a non-200
    - Database, cache and email sender initialized on startup via lifespan and
      released on shutdown
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from intake.api.error_handlers import register_error_handlers
from intake.api.routes import health, identity, notifications, otp, payments
from intake.api.routes.payments import WEBHOOK_PATH
from intake.config import get_settings
from intake.infrastructure import database
from intake.infrastructure.brevo_client import close_mailer, init_mailer
from intake.infrastructure.cache import close_cache, init_cache
from intake.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    init_cache(
        settings.redis_url,
        socket_timeout=settings.redis_socket_timeout_seconds,
    )
    init_mailer(
        settings.brevo_api_key,
        settings.mail_from,
        settings.notification_sender_name,
        api_url=settings.brevo_api_url,
        timeout_seconds=settings.brevo_timeout_seconds,
    )
    logger.info("Intake API started")
    yield
    logger.info("Intake API shutting down")
    await close_mailer()
    await close_cache()
    if database.db_manager is not None:
        await database.db_manager.dispose()


app = FastAPI(title="Intake API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def limit_body_size(request: Request, call_next):
    """Reject bodies whose declared length exceeds max_body_bytes.

    The payment webhook is exempt: it must acknowledge every delivery and
    enforces the limit itself.
    """
    if request.url.path == WEBHOOK_PATH:
        return await call_next(request)
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > settings.max_body_bytes:
        return JSONResponse(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            content={"error": "Request body too large"},
        )
    return await call_next(request)


# Routes: explicit registration
app.include_router(health.router)
app.include_router(otp.router)
app.include_router(identity.router)
app.include_router(payments.router)
app.include_router(notifications.router)

register_error_handlers(app)


def run() -> None:
    """Console entry point: uvicorn with `workers` processes."""
    uvicorn.run(
        "intake.main:app",
        host=settings.host,
        port=settings.port,
        workers=settings.workers,
    )
