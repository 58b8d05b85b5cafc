#!/usr/bin/env python3
"""
VoteMatch API - FastAPI Application

Scores quiz answers against candidate policy positions and publishes an
anonymous aggregate of the results.

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
from fastapi.middleware.cors import CORSMiddleware

from core.config_loader import get_config
from .dependencies import get_app_context
from .exceptions import (
    ServiceException,
    service_exception_handler,
    http_exception_handler,
    request_validation_exception_handler,
    general_exception_handler
)
from .routers import match_router, stats_router, catalog_router
from .routers.match import add_rate_limit_handlers

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Load configuration
config = get_config()


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Only stop the recorder if a context was ever built; never connect on shutdown
    if get_app_context.cache_info().currsize:
        logger.info("Stopping result recorder; queued match records are abandoned")
        get_app_context().close()


# Create FastAPI app
app = FastAPI(
    title="VoteMatch API",
    description="Candidate compatibility scoring with anonymous aggregate statistics",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Configure rate limiting
add_rate_limit_handlers(app)

# Register exception handlers
app.add_exception_handler(ServiceException, service_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.web.allowed_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"]
)

# Include routers
app.include_router(match_router)
app.include_router(stats_router)
app.include_router(catalog_router)


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "votematch-api"}


def main():
    """Run the web server."""
    import uvicorn

    logger.info(f"Starting VoteMatch API on {config.web.host}:{config.web.port}")
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
