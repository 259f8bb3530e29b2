"""
Image Operations Engine - Main FastAPI Application
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Add project directory to path
sys.path.append(str(Path(__file__).parent))

from api.exceptions import register_exception_handlers  # noqa: E402
from api.routers import image, system  # noqa: E402
from config import get_settings  # noqa: E402
from core.constants import SystemConstants  # noqa: E402
from core.engine import Engine  # noqa: E402

# Get configuration
settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.system.log_level),
    format=SystemConstants.LOG_FORMAT,
)
logger = logging.getLogger(__name__)

# Suppress watchfiles debug messages
logging.getLogger("watchfiles").setLevel(logging.WARNING)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle"""
    # Startup
    logger.info("Starting Image Operations server...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Debug mode: {settings.system.debug}")

    # The engine is stateless; one instance serves all requests
    app.state.engine = Engine()
    app.state.settings = settings

    yield

    # Shutdown
    logger.info("Server shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="Image Operations Engine",
    description="Composable raster image operations over HTTP",
    version=VERSION,
    lifespan=lifespan,
)

# Configure CORS
if settings.api.cors_enabled:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Register exception handlers
register_exception_handlers(app)

# Include routers
app.include_router(image.router, prefix="/api/image", tags=["Image"])
app.include_router(system.router, prefix="/api/system", tags=["System"])


# Root endpoint
@app.get("/")
async def root():
    return {
        "name": "Image Operations Engine",
        "status": "running",
        "version": VERSION,
        "endpoints": {
            "image": "/api/image",
            "system": "/api/system",
            "docs": "/docs",
        },
    }


# Health check endpoint
@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "services": {
            "engine": getattr(app.state, "engine", None) is not None,
        },
    }


# Error handler
@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"detail": f"Internal server error: {str(exc)}"})


if __name__ == "__main__":
    reload_excludes = (
        ["*.log", "*.pyc", "__pycache__", ".git", ".venv", "venv"]
        if settings.system.debug
        else None
    )

    server_config = uvicorn.Config(
        "main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.system.debug,
        reload_excludes=reload_excludes,
        log_level=settings.system.log_level.lower(),
        loop="asyncio",
    )

    server = uvicorn.Server(server_config)

    try:
        server.run()
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, shutting down...")
    finally:
        logger.info("Server exiting...")
