# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the App Launcher portal.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   poetry run uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from app import __version__
from app.auth import routes as auth_routes
from app.config import settings
from app.dependencies import get_frontegg_client
from app.exceptions import (
    PortalException,
    portal_exception_handler,
    validation_exception_handler,
)
from app.routers import apps, frontegg, health, launcher

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: log effective configuration
    - Shutdown: close the pooled Frontegg HTTP client
    """
    logger.info(f"Starting App Launcher in {settings.ENVIRONMENT} mode")
    logger.info(f"App types: {settings.app_types_list}")
    if not settings.frontegg_credentials_configured:
        logger.warning("FRONTEGG_CLIENT_ID / FRONTEGG_SECRET not set; entitlement lookups will fail")

    yield

    logger.info("Shutting down App Launcher")
    if get_frontegg_client.cache_info().currsize:
        get_frontegg_client().close()


# Create FastAPI application
app = FastAPI(
    title="App Launcher",
    description="""
## App Launcher Portal

Lists the applications your organization has been granted in Frontegg,
lets you open them, and shows the ones you don't have yet.

### Endpoints

| Endpoint | Purpose |
|----------|---------|
| `GET /` | Launcher page |
| `GET /api/apps/config` | Configured application catalog |
| `GET /api/frontegg/vendor-token` | Cached Frontegg vendor token |
| `GET /api/frontegg/user-apps?tenantId=...` | Entitled Frontegg application IDs |
| `GET /account/login` / `GET /account/logout` | Frontegg hosted login |
""",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Apps",
            "description": "Application catalog read from configuration",
        },
        {
            "name": "Frontegg",
            "description": "Vendor token and entitlement lookups",
        },
        {
            "name": "Account",
            "description": "Frontegg hosted login and logout",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Signed-cookie session: holds the signed-in user and per-tenant app cache.
# No max_age, so the cookie ends with the browser session.
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SECRET_KEY,
    session_cookie=settings.SESSION_COOKIE_NAME,
    max_age=None,
    same_site="lax",
    https_only=settings.is_production,
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(PortalException)
async def handle_portal_exception(request: Request, exc: PortalException):
    """Handle custom portal exceptions."""
    if exc.status_code >= 500:
        logger.error(f"{exc.code}: {exc.message}")
    return await portal_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Handle request validation errors."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Launcher page
app.include_router(
    launcher.router,
    tags=["Launcher"]
)

# Application catalog
app.include_router(
    apps.router,
    prefix="/api/apps",
    tags=["Apps"]
)

# Frontegg proxy endpoints
app.include_router(
    frontegg.router,
    prefix="/api/frontegg",
    tags=["Frontegg"]
)

# Hosted login
app.include_router(
    auth_routes.router,
    prefix="/account",
    tags=["Account"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)
