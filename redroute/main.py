"""
RedRoute API - Main Application Entry Point

Hotel and event booking backend:
- Cookie sessions (JWT) with header and body identity fallbacks
- Capacity-checked hotel and event bookings, one transaction per request
- Reviews with a denormalized, recomputed rating
- Redis caching of listings, structured logging, Prometheus metrics
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from redroute.core.config import get_settings
from redroute.core.logging import setup_logging, get_logger
from redroute.core.metrics import metrics_endpoint
from redroute.db.session import Database
from redroute.api.router import api_router
from redroute.api.middleware import RequestLoggingMiddleware
from redroute.api.errors import register_exception_handlers
from redroute.services.cache_service import get_redis, close_redis

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup and shutdown hooks."""
    setup_logging()
    logger = get_logger(__name__)

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
    )

    app.state.database = Database.from_settings(settings)

    redis_client = await get_redis()
    if redis_client:
        logger.info("redis_ready")
    else:
        logger.warning("redis_unavailable", message="Running without cache")

    yield

    await close_redis()
    await app.state.database.dispose()
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Hotel and event booking API",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Credentialed CORS: the session cookie must travel with cross-site requests
origins = [settings.FRONTEND_ORIGIN] if settings.FRONTEND_ORIGIN else settings.CORS_ORIGINS
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestLoggingMiddleware)

register_exception_handlers(app)

app.include_router(api_router)


@app.get("/metrics", include_in_schema=False)
async def metrics():
    return metrics_endpoint()


@app.get("/", tags=["Root"])
async def root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs": "/docs",
    }
