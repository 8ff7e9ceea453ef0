"""Main FastAPI application for the Instance Command API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from instance_api.api.conversations import get_instance_service
from instance_api.api.conversations import router as conversations_router
from instance_api.clients.memory import InMemoryMessagingClient
from instance_api.config import get_settings

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown tasks."""
    # Startup
    logger.info(f"Starting {settings.app_name}")

    registry = get_instance_service().registry
    bootstrapped = [
        registry.register(name, InMemoryMessagingClient()) for name in settings.bootstrap_instances
    ]
    if bootstrapped:
        logger.info(f"Registered {len(bootstrapped)} in-memory instance(s)")

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")
    for instance in bootstrapped:
        if registry.exists(instance.id):
            registry.remove(instance.id)


app = FastAPI(
    title=settings.app_name,
    description="Drive messaging instances through conversation commands",
    version=settings.app_version,
    debug=settings.debug,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(conversations_router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "docs_url": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": settings.app_version,
        "instances": len(get_instance_service().registry.list_instances()),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=8000,
    )
