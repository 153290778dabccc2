"""
FastAPI Application Entry Point

This module initializes the FastAPI application and configures:
- API routes
- Middleware (logging, CORS, rate limiting)
- Resource startup/shutdown (database, cache, resolution service)

Run with:
    uvicorn app.main:app
"""

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.api import endpoints
from app.api.dependencies import get_cache
from app.cache.safe_cache import SafeCache
from app.core.lifecycle import initialize_resources, shutdown_resources
from app.core.logging_config import setup_logging
from app.core.rate_limit import limiter
from app.core.setting import settings
from app.middleware.logging import add_logging_middleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL)
    await initialize_resources(app, settings)
    try:
        yield
    finally:
        await shutdown_resources(app)


app = FastAPI(
    title="URL Shortener Service",
    description="Shortens long URLs, redirects short codes and counts clicks",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

add_logging_middleware(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


# Health endpoints defined before router to match before catch-all route
@app.get("/", tags=["Health"])
async def root():
    return {
        "message": "URL Shortener Service",
        "version": "1.0.0",
        "docs": "/docs"
    }


@app.get("/health", tags=["Health"])
async def health_check(cache: SafeCache = Depends(get_cache)):
    """
    Health check endpoint for monitoring.

    The cache is optional, so a disconnected cache still reports healthy.
    """
    return {"status": "healthy", "cache_connected": cache.connected}


app.include_router(endpoints.router, tags=["URL Shortener"])
