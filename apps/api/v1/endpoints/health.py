"""Liveness and readiness probes."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from core.infrastructure.database.config import check_database

from apps.api.deps import get_container

router = APIRouter(prefix="/health", tags=["health"])

READINESS_TIMEOUT_SECONDS = 3.0


@router.get("")
async def health_check() -> dict[str, str]:
    """Health check endpoint.

    Returns:
        Health status
    """
    return {"status": "healthy"}


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    container = get_container(request)
    database_ok = await check_database(container.engine, timeout=READINESS_TIMEOUT_SECONDS)
    status = "ready" if database_ok else "unavailable"
    return JSONResponse(
        status_code=200 if database_ok else 503,
        content={"status": status, "database": "ok" if database_ok else "unreachable"},
    )
