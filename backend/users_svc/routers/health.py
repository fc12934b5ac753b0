"""
Health check router for liveness and readiness probes.
"""
from fastapi import APIRouter, status

from users_svc.config import get_settings
from users_svc.database.connections import get_mongo_client

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
)
async def health_check():
    """
    Basic health check endpoint.
    Returns 200 if the API is running.
    """
    settings = get_settings()
    return {
        "status": "healthy",
        "service": "users",
        "environment": settings.environment,
        "remote_secrets": settings.remote_secrets_enabled,
    }


@router.get(
    "/health/ready",
    status_code=status.HTTP_200_OK,
    summary="Readiness check with dependencies",
)
async def readiness_check():
    """
    Readiness check that verifies the database connection.
    Returns 200 with status ``degraded`` when MongoDB is not reachable.
    """
    checks = {
        "api": "healthy",
        "mongodb": "unknown",
    }

    try:
        client = await get_mongo_client()
        await client.admin.command("ping")
        checks["mongodb"] = "healthy"
    except Exception as e:
        checks["mongodb"] = f"unhealthy: {str(e)}"

    all_healthy = all(v == "healthy" for v in checks.values())

    return {
        "status": "healthy" if all_healthy else "degraded",
        "checks": checks,
    }


@router.get(
    "/version",
    status_code=status.HTTP_200_OK,
    summary="Service version",
)
async def version():
    """Deployed version and environment name."""
    settings = get_settings()
    return {"version": settings.app_version, "environment": settings.environment}
