"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from src.user_api.api.http.deps import get_database_service
from src.user_api.core.services import MongoService
from src.user_api.runtime.context import get_config

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
def health() -> dict[str, str]:
    """Liveness probe: 200 while the process is running, no dependency checks."""
    return {"status": "healthy", "service": "user-api"}


@router.get("/ready", response_model=None)
def readiness(
    database_service: MongoService = Depends(get_database_service),
) -> dict[str, Any] | JSONResponse:
    """Readiness probe: 503 when MongoDB does not answer a ping."""
    config = get_config()
    db_healthy = database_service.health_check()
    checks = {
        "database": {
            "status": "healthy" if db_healthy else "unhealthy",
            "type": "mongodb",
            "database": config.mongo.database,
        }
    }

    if not db_healthy:
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "checks": checks},
        )
    return {"status": "ready", "checks": checks}
