# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Wedding Planner API.
# It configures the FastAPI application with middleware, routers, handlers
# and the Redis listener that feeds the WebSocket change feed.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import asyncio
import json
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.websocket import websocket_manager, CHANGE_CHANNEL
from app.exceptions import (
    WeddingPlannerException,
    wedding_planner_exception_handler,
    validation_exception_handler,
)
from app.routers import (
    health,
    weddings,
    tasks,
    guests,
    budget,
    vendors,
    inspirations,
    messages,
    notes,
    dashboard,
    profile,
    notifications,
    invitations,
)
from app.auth import routes as auth_routes
from app.websocket import routes as websocket_routes

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


_redis_listener_task = None


async def handle_change_message(raw: bytes | str) -> None:
    """Decode one pub/sub payload and hand it to the WebSocket manager."""
    try:
        event = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning(f"Invalid JSON in Redis message: {e}")
        return

    if not isinstance(event, dict):
        logger.warning("Ignoring non-object change event")
        return

    await websocket_manager.publish(event)


async def redis_pubsub_listener():
    """
    Background task that listens to Redis pub/sub and feeds the WebSockets.

    Every API process publishes its writes to CHANGE_CHANNEL and every
    process listens, so a partner connected to another instance still
    receives the change.
    """
    import redis.asyncio as aioredis

    logger.info("Starting Redis pub/sub listener for the change feed")

    redis_client = aioredis.from_url(settings.REDIS_URL)
    pubsub = redis_client.pubsub()

    try:
        await pubsub.subscribe(CHANGE_CHANNEL)

        async for message in pubsub.listen():
            if message["type"] != "message":
                continue
            try:
                await handle_change_message(message["data"])
            except Exception as e:
                logger.error(f"Error processing change event: {e}")

    except asyncio.CancelledError:
        logger.info("Redis pub/sub listener cancelled")
        raise
    except Exception as e:
        # Realtime is degraded, the API keeps serving requests
        logger.error(f"Redis pub/sub listener error: {e}")
    finally:
        await pubsub.aclose()
        await redis_client.aclose()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: log config, start the Redis listener
    - Shutdown: stop the listener, drop pending WebSocket deliveries
    """
    global _redis_listener_task

    logger.info(f"Starting Wedding Planner API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    _redis_listener_task = asyncio.create_task(redis_pubsub_listener())

    yield

    logger.info("Shutting down Wedding Planner API")

    _redis_listener_task.cancel()
    try:
        await _redis_listener_task
    except asyncio.CancelledError:
        pass
    await websocket_manager.close()


# Create FastAPI application
app = FastAPI(
    title="Wedding Planner API",
    description="""
## Shared Wedding Planning API

Backend for a planning app used by both partners of a couple. Every
signed-in user gets a wedding automatically; the second partner joins it
with its Wedding ID, after which both see and edit the same plan.

### How It Works

1. **Sign in** - Supabase Auth issues the bearer token
2. **Get your wedding** - `GET /api/v1/weddings/me` creates it on first call
3. **Connect your partner** - they call `POST /api/v1/weddings/join` with your Wedding ID
4. **Plan together** - tasks, guests, budget, vendors, mood board, chat and notes
5. **Invite guests** - share `/invite/{wedding_id}`; guests RSVP without an account

### Realtime

Open `ws://host/ws/weddings/{wedding_id}?token=...&tables=tasks,guests` and
refetch a list whenever a `change` event names its table.
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Auth", "description": "Sign-up, login and token checks"},
        {"name": "Weddings", "description": "Current wedding, partner connection, invitation link"},
        {"name": "Tasks", "description": "Shared planning checklist"},
        {"name": "Guests", "description": "Guest list and RSVP status"},
        {"name": "Budget", "description": "Estimated and actual costs"},
        {"name": "Vendors", "description": "Saved vendors and booking state"},
        {"name": "Inspirations", "description": "Mood board images"},
        {"name": "Messages", "description": "Private chat between the partners"},
        {"name": "Notes", "description": "Shared notes"},
        {"name": "Dashboard", "description": "Home screen summary"},
        {"name": "Profile", "description": "Display name and avatar"},
        {"name": "Notifications", "description": "Per-user notifications"},
        {"name": "Invitations", "description": "Public invitation page and RSVP"},
        {"name": "WebSocket", "description": "Realtime change feed"},
        {"name": "Health", "description": "API health and readiness checks"},
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

@app.exception_handler(WeddingPlannerException)
async def handle_wedding_planner_exception(request: Request, exc: WeddingPlannerException):
    """Handle the API's structured exceptions."""
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.url.path}: {exc.details}")
    return await wedding_planner_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
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

API_PREFIX = "/api/v1"

# Authentication endpoints (router carries its own /auth prefix)
app.include_router(auth_routes.router, prefix=API_PREFIX, tags=["Auth"])

# Health check endpoints
app.include_router(health.router, prefix=API_PREFIX, tags=["Health"])

# Wedding aggregate and partner connection
app.include_router(weddings.router, prefix=f"{API_PREFIX}/weddings", tags=["Weddings"])

# Wedding-scoped planning records
app.include_router(tasks.router, prefix=f"{API_PREFIX}/tasks", tags=["Tasks"])
app.include_router(guests.router, prefix=f"{API_PREFIX}/guests", tags=["Guests"])
app.include_router(budget.router, prefix=f"{API_PREFIX}/budget", tags=["Budget"])
app.include_router(vendors.router, prefix=f"{API_PREFIX}/vendors", tags=["Vendors"])
app.include_router(inspirations.router, prefix=f"{API_PREFIX}/inspirations", tags=["Inspirations"])
app.include_router(messages.router, prefix=f"{API_PREFIX}/messages", tags=["Messages"])
app.include_router(notes.router, prefix=f"{API_PREFIX}/notes", tags=["Notes"])

# Read models and per-user data
app.include_router(dashboard.router, prefix=API_PREFIX, tags=["Dashboard"])
app.include_router(profile.router, prefix=f"{API_PREFIX}/profile", tags=["Profile"])
app.include_router(notifications.router, prefix=f"{API_PREFIX}/notifications", tags=["Notifications"])

# Public invitation (no auth, no /api prefix)
app.include_router(invitations.router, tags=["Invitations"])

# WebSocket endpoints (Real-time updates)
app.include_router(websocket_routes.router, tags=["WebSocket"])


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Wedding Planner API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/v1/health",
    }
