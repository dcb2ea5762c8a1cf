# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Cafe Places API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.dependencies import PlaceServiceDep
from app.exceptions import (
    CafePlacesException,
    LoginRequiredError,
    cafe_places_exception_handler,
    login_required_handler,
    validation_exception_handler,
)
from app.routers import health, places
from app.auth import routes as auth_routes
from core.models.place import PlaceList

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

    Logs configuration on startup and shutdown.
    """
    logger.info(f"Starting Cafe Places API in {settings.ENVIRONMENT} mode")
    logger.info(f"Place store backend: {settings.PLACE_STORE_BACKEND}")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    yield

    logger.info("Shutting down Cafe Places API")


# Create FastAPI application
app = FastAPI(
    title="Cafe Places API",
    description="""
## Share the cafes you like

Anyone can browse places. Signed-in users can add places and edit or
delete the ones they added.

| Action | Route |
|--------|-------|
| List | `GET /places` |
| New form | `GET /places/new` |
| Create | `POST /places` |
| Show | `GET /places/{id}` |
| Edit form | `GET /places/{id}/edit` |
| Update | `PATCH /places/{id}` |
| Delete | `DELETE /places/{id}` |
| Duplicate check | `POST /places/check_unique` |

A user cannot add the same name and address twice.
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Places",
            "description": "Browse, add, edit and delete places",
        },
        {
            "name": "Auth",
            "description": "Inspect the current session token",
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


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(LoginRequiredError)
async def handle_login_required(request: Request, exc: LoginRequiredError):
    """Redirect anonymous callers to the login page."""
    return await login_required_handler(request, exc)


@app.exception_handler(CafePlacesException)
async def handle_cafe_places_exception(request: Request, exc: CafePlacesException):
    """Handle custom Cafe Places exceptions."""
    return await cafe_places_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    """Handle malformed request bodies."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Authentication endpoints
app.include_router(
    auth_routes.router,
    prefix="/api/v1/auth",
    tags=["Auth"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

# Place endpoints
app.include_router(
    places.router,
    prefix=settings.PLACES_PREFIX,
    tags=["Places"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Places"], response_model=PlaceList)
async def root(service: PlaceServiceDep):
    """
    Root endpoint - the place index.

    Create and delete redirect here.
    """
    outcome = service.list_places()
    return PlaceList(places=outcome.places, total=len(outcome.places))
