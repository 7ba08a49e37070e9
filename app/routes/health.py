"""
Health check endpoint for monitoring.
"""
from datetime import datetime, timezone
from fastapi import APIRouter, Request

from app.config import settings
from app.schemas.health import HealthResponse
from app.utils.logger import get_logger

logger = get_logger("health")
router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Report which spell-check languages are loaded",
    responses={
        200: {"description": "Service is running (dictionaries may be degraded)"}
    }
)
async def health_check(request: Request) -> HealthResponse:
    """
    Health check endpoint.

    Always answers 200: a missing or fallback dictionary degrades checking
    but never takes the service down.

    Returns:
        HealthResponse with per-language readiness and timestamp
    """
    engine = getattr(request.app.state, "spellcheck_engine", None)

    ready = []
    degraded = []
    if engine is not None:
        for info in engine.list_languages():
            if not engine.is_ready(info.language):
                continue
            ready.append(info.language)
            if info.degraded:
                degraded.append(info.language)

    health_status = "degraded" if degraded or engine is None else "healthy"
    logger.debug("Health check", status=health_status, ready=",".join(ready))

    return HealthResponse(
        status=health_status,
        spellcheck_enabled=settings.SPELLCHECK_ENABLED,
        languages_ready=ready,
        languages_degraded=degraded,
        timestamp=datetime.now(timezone.utc)
    )
