# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Marketplace API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.websocket import websocket_manager, decode_event, WEBSOCKET_CHANNEL
from app.exceptions import (
    MarketplaceException,
    marketplace_exception_handler,
    validation_exception_handler,
)
from app.routers import health, chats, commissioners, orders
from app.auth import routes as auth_routes
from app.websocket import routes as websocket_routes

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# Global flag for Redis listener task
_redis_listener_task = None
_shutdown_event = None


async def redis_pubsub_listener():
    """
    Background task that listens to Redis pub/sub and broadcasts to WebSockets.

    Every API process runs one listener, so a message sent through any
    process reaches listeners connected to all of them.
    """
    import redis.asyncio as aioredis

    logger.info("Starting Redis pub/sub listener for chat broadcasts")

    redis_client = None
    pubsub = None
    try:
        redis_client = aioredis.from_url(settings.REDIS_URL)
        pubsub = redis_client.pubsub()
        await pubsub.subscribe(WEBSOCKET_CHANNEL)

        async for message in pubsub.listen():
            if _shutdown_event and _shutdown_event.is_set():
                break

            if message["type"] != "message":
                continue

            decoded = decode_event(message["data"])
            if decoded is None:
                continue

            room, frame = decoded
            try:
                await websocket_manager.broadcast(room, frame)
            except Exception as e:
                logger.error(f"Error broadcasting to chat {room}: {e}")

    except asyncio.CancelledError:
        logger.info("Redis pub/sub listener cancelled")
    except Exception as e:
        logger.error(f"Redis pub/sub listener error: {e}")
    finally:
        try:
            if pubsub is not None:
                await pubsub.unsubscribe(WEBSOCKET_CHANNEL)
            if redis_client is not None:
                await redis_client.close()
        except Exception as e:
            logger.debug(f"Redis listener cleanup failed: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: start the Redis listener
    - Shutdown: stop it
    """
    global _redis_listener_task, _shutdown_event

    logger.info(f"Starting Marketplace API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    _shutdown_event = asyncio.Event()
    _redis_listener_task = asyncio.create_task(redis_pubsub_listener())

    yield

    logger.info("Shutting down Marketplace API")

    if _shutdown_event:
        _shutdown_event.set()
    if _redis_listener_task:
        _redis_listener_task.cancel()
        try:
            await _redis_listener_task
        except asyncio.CancelledError:
            pass


# Create FastAPI application
app = FastAPI(
    title="Marketplace API",
    description="""
## Service Marketplace Backend

Clients, employees and commissioners chat about service items;
clients manage the commissioners who act on their behalf.

### Roles

| Role | Can |
|------|-----|
| **CLIENT** | Read and send in own chats, manage own commissioners |
| **EMPLOYEE** | Read and send in assigned chats |
| **COMMISSIONER** | Read the chats of the client they act for |
| **ADMIN** | Send in any chat, list all chats |

Authentication uses an http-only `token` cookie (or a Bearer header).
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Auth", "description": "Current session"},
        {"name": "Chats", "description": "Chats and messages"},
        {"name": "Commissioners", "description": "Commissioner management and login"},
        {"name": "Orders", "description": "Commissioner assignment to orders"},
        {"name": "WebSocket", "description": "Real-time chat messages"},
        {"name": "Health", "description": "API health and readiness checks"},
    ],
)


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(MarketplaceException)
async def handle_marketplace_exception(request: Request, exc: MarketplaceException):
    """Handle typed API errors."""
    return await marketplace_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Report malformed requests as 400."""
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

app.include_router(auth_routes.router, prefix="/api/v1/auth", tags=["Auth"])
app.include_router(health.router, prefix="/api/v1", tags=["Health"])
app.include_router(chats.router, prefix="/api/v1/chats", tags=["Chats"])
app.include_router(commissioners.router, prefix="/api/v1/commissioners", tags=["Commissioners"])
app.include_router(orders.router, prefix="/api/v1/orders", tags=["Orders"])
app.include_router(websocket_routes.router, tags=["WebSocket"])


@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Marketplace API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/v1/health",
    }
