"""
FastAPI application for the feedsmith API.

Provides endpoints serving the configured feed as RSS or Atom.

Responsibility: Main API application setup and configuration
"""

# Load .env BEFORE importing settings (critical for pydantic-settings)
from dotenv import load_dotenv
load_dotenv('.env', override=False)

from fastapi import FastAPI
from fastapi.responses import JSONResponse
import logging

from feedsmith import __version__
from feedsmith.config import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.app.log_level, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="feedsmith API",
    description="Atom/RSS feeds with server-side caching",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)


@app.on_event("startup")
async def startup_event():
    """Log configuration on startup"""
    logger.info("Starting feedsmith API...")
    logger.info(f"Environment: {settings.app.environment}")
    logger.info(f"Debug mode: {settings.app.debug}")
    logger.info(f"Feed items: {settings.feed.items_path or 'not configured'}")
    logger.info(f"Feed cache TTL: {settings.feed.cache_ttl}s")
    logger.info(f"Redis cache: {'enabled' if settings.redis.enabled else 'disabled'}")


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown"""
    logger.info("Shutting down feedsmith API...")


@app.get("/")
async def root():
    """Root endpoint - API information."""
    return {
        "name": settings.app.app_name,
        "version": __version__,
        "status": "operational",
        "endpoints": {
            "rss": "/api/v1/feeds/rss.xml",
            "atom": "/api/v1/feeds/atom.xml",
            "links": "/api/v1/feeds/links",
            "docs": "/docs"
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {
        "status": "healthy",
        "service": "feedsmith-api"
    }


# Exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler."""
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": str(exc) if settings.app.debug else "An unexpected error occurred"
        }
    )


# Import and include routers
from api.v1.endpoints import feeds

app.include_router(
    feeds.router,
    prefix="/api/v1",
    tags=["feeds"]
)
