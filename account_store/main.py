"""Account Store API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map AccountStoreError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Every response carries the security headers in SECURITY_HEADERS
    - Pool and users table initialized on startup, pool drained on shutdown

Design Decisions:
    - Lifespan over @app.on_event: cleaner startup/shutdown pairing
    - Manager and hasher stored on app.state and injected per request
    - Security headers set by a small http middleware, same set as helmet defaults
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from account_store.api.error_handlers import register_error_handlers
from account_store.api.routes import accounts, health
from account_store.config import get_settings
from account_store.infrastructure.database import DatabaseSessionManager
from account_store.infrastructure.observability import setup_logging
from account_store.infrastructure.password_hasher import BcryptPasswordHasher

logger = logging.getLogger(__name__)

SECURITY_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "X-DNS-Prefetch-Control": "off",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        connect_args=settings.database_connect_args(),
    )
    await db_manager.create_schema()
    app.state.db_manager = db_manager
    app.state.password_hasher = BcryptPasswordHasher(settings.bcrypt_rounds)
    logger.info("Account Store API started")
    try:
        yield
    finally:
        logger.info("Account Store API shutting down")
        await db_manager.dispose()


app = FastAPI(
    title="Account Store API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response


app.include_router(health.router)
app.include_router(accounts.router)

register_error_handlers(app)
