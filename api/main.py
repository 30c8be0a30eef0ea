"""
Safe Walk Routing API - FastAPI Main Application

A RESTful API for calculating safety-weighted walking routes.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from safe_walk_routing import __version__
from api.routes.routing import router as routing_router
from api.services.routing_service import routing_service

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle - startup and shutdown events.
    """
    logger.info("Starting Safe Walk Routing API...")

    routing_service.initialize()
    health = routing_service.get_health_status()
    if health.graph_loaded:
        logger.info(f"Routing service ready with {health.edge_count} street segments")
    else:
        logger.warning("Routing service running in degraded mode - street data not loaded")

    yield

    logger.info("Shutting down Safe Walk Routing API...")


app = FastAPI(
    title="Safe Walk Routing API",
    description="""
    **Walking routes that balance distance against neighborhood safety**

    Every street segment gets a deterministic crime score from the neighborhood
    it lies in. Routes minimise crime score plus distance, with 10 meters of
    walking costing about one crime point.

    ## Quick Start

    1. Check service health: `GET /api/routing/health`
    2. Calculate a route: `POST /api/routing/calculate`
    3. View results in GeoJSON format for mapping applications
    """,
    version=__version__,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handle request validation errors with detailed information.
    """
    logger.warning(f"Validation error for {request.url}: {exc}")
    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "error": "validation_error",
            "message": "Request validation failed",
            "details": jsonable_errors(exc)
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """
    Handle unexpected errors gracefully.
    """
    logger.error(f"Unexpected error for {request.url}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "internal_server_error",
            "message": "An unexpected error occurred",
            "details": None
        }
    )


def jsonable_errors(exc: RequestValidationError):
    # pydantic v2 puts the raw exception object into ctx
    return [
        {key: value for key, value in error.items() if key in ("type", "loc", "msg")}
        for error in exc.errors()
    ]


app.include_router(routing_router)


@app.get("/", tags=["general"])
async def root():
    """
    API root endpoint with basic information.
    """
    return {
        "api": "Safe Walk Routing API",
        "version": __version__,
        "status": "operational",
        "documentation": "/docs",
        "health_check": "/api/routing/health"
    }


@app.get("/health", tags=["general"])
async def api_health():
    """
    Simple health check endpoint.
    """
    service_health = routing_service.get_health_status()
    return {
        "api_status": "healthy",
        "service_status": service_health.status
    }


if __name__ == "__main__":
    uvicorn.run(
        "api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
