"""
Health check endpoints.

Used for monitoring and load balancer health checks.
"""
from fastapi import APIRouter, Depends
import platform

from api.dependencies import get_execution_store, get_settings
from core.domain.clock import utc_now


router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns system health status.
    """
    return {
        "status": "healthy",
        "timestamp": utc_now().isoformat(),
        "service": "wayfarer-ai",
        "version": "1.0.0",
        "python_version": platform.python_version(),
    }


@router.get("/health/ready")
async def readiness_check(
    settings=Depends(get_settings),
    store=Depends(get_execution_store),
):
    """
    Readiness check endpoint.

    Reports which API keys are configured and whether the execution
    store answers. Missing keys only degrade the matching workflow steps,
    so the service stays ready unless the store is down.
    """
    try:
        await store.get("readiness-probe")
        store_check = "ok"
    except Exception as e:
        store_check = f"error: {e}"

    ready = store_check == "ok"
    return {
        "status": "ready" if ready else "not_ready",
        "timestamp": utc_now().isoformat(),
        "checks": {
            "api": "ok",
            "execution_store": store_check,
            "ipgeolocation_api_key": "configured" if settings.ipgeolocation_api_key else "missing",
            "openweather_api_key": "configured" if settings.openweather_api_key else "missing",
            "openai_api_key": "configured" if settings.openai_api_key else "missing",
        }
    }
