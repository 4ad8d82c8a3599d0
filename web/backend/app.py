#!/usr/bin/env python3
"""
VolunteerMatch API - FastAPI Application

Ranking, swipe and match endpoints with automatic API documentation.

Usage:
    python -m web.backend.app

Then open:
    - http://localhost:8080/docs - API Documentation (Swagger UI)
    - http://localhost:8080/redoc - Alternative API Documentation
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError

from core.config_loader import get_config
from core.exceptions import ServiceException
from .dependencies import shutdown_app_context
from .exceptions import (
    service_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    general_exception_handler
)
from .routers import (
    rankings_router,
    swipes_router,
    matches_router,
    admin_router
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    shutdown_app_context()


# Create FastAPI app
app = FastAPI(
    title="VolunteerMatch API",
    description="Ranks vacancies for volunteers and volunteers for vacancies",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Register exception handlers
app.add_exception_handler(ServiceException, service_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

# Include routers
app.include_router(rankings_router)
app.include_router(swipes_router)
app.include_router(matches_router)
app.include_router(admin_router)


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "volunteermatch-api"}


def main():
    """Run the web server."""
    import uvicorn

    config = get_config()
    logger.info(f"Starting VolunteerMatch API on {config.web.host}:{config.web.port}")
    logger.info(f"API Docs: http://{config.web.host}:{config.web.port}/docs")

    uvicorn.run(
        "web.backend.app:app",
        host=config.web.host,
        port=config.web.port,
        reload=False,
        log_level="info"
    )


if __name__ == "__main__":
    main()
