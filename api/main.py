"""
Wayfarer AI - Main FastAPI Application.

This is the REST API layer that exposes the location workflows
(IP geolocation, weather, travel planning) and their execution records.
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
import time

from api.routes import executions, health, lookups, travel, travel_plans, workflows
from core.domain.exceptions import CollaboratorError, InvalidInputError, MissingCredentialError
from core.infrastructure.logging import configure_logging


# Setup logging
configure_logging()
logger = logging.getLogger(__name__)


# =============================================================================
# CREATE FASTAPI APP
# =============================================================================

app = FastAPI(
    title="Wayfarer AI - Location Workflow API",
    description="""
    Location data aggregation with tracked workflows.

    Features:
    - IP geolocation
    - Current weather by coordinates or city
    - Rule-based travel plans
    - AI-enriched travel plans (OpenAI)
    - Stored travel plans
    - Step-by-step execution records with live updates
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)


# =============================================================================
# CORS MIDDLEWARE
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["*"],
)


# =============================================================================
# REQUEST LOGGING MIDDLEWARE
# =============================================================================

@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests with timing."""
    start_time = time.time()

    logger.info(f"→ {request.method} {request.url.path}")

    response = await call_next(request)

    duration = time.time() - start_time
    logger.info(
        f"← {request.method} {request.url.path} "
        f"[{response.status_code}] ({duration:.3f}s)"
    )

    return response


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError):
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid input", "detail": str(exc), "path": request.url.path},
    )


@app.exception_handler(MissingCredentialError)
async def missing_credential_handler(request: Request, exc: MissingCredentialError):
    return JSONResponse(
        status_code=503,
        content={"error": "Service not configured", "detail": str(exc), "path": request.url.path},
    )


@app.exception_handler(CollaboratorError)
async def collaborator_error_handler(request: Request, exc: CollaboratorError):
    logger.warning(f"Upstream failure on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=502,
        content={"error": "Upstream service error", "detail": str(exc), "path": request.url.path},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all uncaught exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": str(exc),
            "path": request.url.path
        }
    )


# =============================================================================
# STARTUP/SHUTDOWN EVENTS
# =============================================================================

@app.on_event("startup")
async def startup_event():
    """Run on application startup."""
    logger.info("Wayfarer AI API starting up...")
    logger.info("Swagger UI available at: /docs")


@app.on_event("shutdown")
async def shutdown_event():
    """Run on application shutdown."""
    from api.dependencies import shutdown_dependencies

    logger.info("Wayfarer AI API shutting down...")
    await shutdown_dependencies()


# =============================================================================
# INCLUDE ROUTERS
# =============================================================================

app.include_router(
    health.router,
    tags=["Health"]
)

app.include_router(
    workflows.router,
    prefix="/api/v1/workflows",
    tags=["Workflows"]
)

app.include_router(
    executions.router,
    prefix="/api/v1/executions",
    tags=["Executions"]
)

app.include_router(
    lookups.router,
    prefix="/api/v1",
    tags=["Lookups"]
)

app.include_router(
    travel_plans.router,
    prefix="/api/v1/travel-plans",
    tags=["Travel Plans"]
)

app.include_router(
    travel.router,
    prefix="/api/v1/travel",
    tags=["Travel"]
)


# =============================================================================
# ROOT ENDPOINT
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """API root endpoint."""
    return {
        "message": "Wayfarer AI - Location Workflow API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
