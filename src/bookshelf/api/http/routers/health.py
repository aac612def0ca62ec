"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from src.bookshelf.api.http.deps import get_database_service
from src.bookshelf.core.services import DbSessionService
from src.bookshelf.runtime.context import get_config

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Liveness probe: 200 as long as the process is serving requests."""
    return {"status": "healthy", "service": "books-api"}


@router.get("/ready", response_model=None)
async def readiness(
    database_service: DbSessionService | None = Depends(get_database_service),
) -> dict[str, Any] | JSONResponse:
    """Readiness probe. Returns 503 when the database cannot be reached."""
    config = get_config()
    checks: dict[str, Any] = {}
    all_healthy = True

    if database_service is None:
        checks["database"] = {"status": "disabled", "type": "in-memory"}
    else:
        db_healthy = database_service.health_check()
        checks["database"] = {
            "status": "healthy" if db_healthy else "unhealthy",
            "type": database_service.dialect,
        }
        all_healthy = db_healthy

    response = {
        "status": "ready" if all_healthy else "not_ready",
        "environment": config.app.environment,
        "checks": checks,
    }
    if not all_healthy:
        return JSONResponse(status_code=503, content=response)
    return response
