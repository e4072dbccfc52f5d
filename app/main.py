# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Starter API.
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

from app.config import settings
from app.exceptions import (
    StarterApiException,
    starter_api_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from app.routers import health, users

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Settings are validated at import time, so reaching startup means the
    environment is complete.
    """
    logger.info(f"Starting Starter API in {settings.ENVIRONMENT} mode")
    logger.info(f"User store: {settings.USER_STORE}")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    yield

    logger.info("Shutting down Starter API")


# Create FastAPI application
app = FastAPI(
    title="Starter API",
    description="""
## Users CRUD Starter

A small REST API for a `users` resource. Every response is wrapped in the
same envelope:

```json
{"success": true, "data": {...}, "message": "..."}
{"success": false, "error": "User not found"}
```

### Storage

Set `USER_STORE=memory` (default, resets on restart) or
`USER_STORE=supabase` (hosted table, requires Supabase credentials).

### Quick Start

```bash
# List users
curl "http://localhost:8000/api/users?page=1&limit=10&search=jane"

# Create a user
curl -X POST http://localhost:8000/api/users \\
  -H "Content-Type: application/json" \\
  -d '{"name": "Jane Smith", "email": "jane@example.com"}'
```
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Users",
            "description": "Create, list, read, update and delete users",
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

@app.exception_handler(StarterApiException)
async def handle_starter_api_exception(request: Request, exc: StarterApiException):
    """Handle service exceptions (400/404/409/500)."""
    return await starter_api_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Handle malformed bodies and query strings."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    return await unhandled_exception_handler(request, exc)


# =============================================================================
# Routers
# =============================================================================

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api",
    tags=["Health"]
)

# User CRUD endpoints
app.include_router(
    users.router,
    prefix="/api/users",
    tags=["Users"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Starter API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/health",
    }
