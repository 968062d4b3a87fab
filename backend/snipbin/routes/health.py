"""
SnipBin Backend: Health Check Route
=====================================

What:  Liveness probe for Docker health checks and load balancers.
How:   Answers from the process alone; it does not touch the database, so a
       storage outage shows up as 500s on the snippet routes, not here.
"""

from datetime import datetime, timezone

from fastapi import APIRouter

from snipbin.schemas.snippet import HealthResponse

router = APIRouter(tags=["Health"])


def utc_timestamp() -> str:
    """Current UTC time as ISO 8601 with milliseconds and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="OK", timestamp=utc_timestamp())
