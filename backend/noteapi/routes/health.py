"""
NoteAPI Backend — Health Check Route
======================================

What:  Health check endpoint for monitoring and container liveness checks.
Why:   Lets a load balancer or Docker tell a live process from one that can
       actually authorize requests.
How:   Reads the store size and checks the admin directory.
Who:   Called by health checks; not behind the AuthGate.

Status levels:
    - healthy:   Admin allow-list readable (HTTP 200)
    - degraded:  Allow-list unreadable; every /notes request would get 500
"""

import logging
import time

from fastapi import APIRouter, Request

from noteapi import __version__
from noteapi.schemas.note import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Module-level: initialized once when the module loads
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request) -> HealthResponse:
    """
    Report service status, stored note count and allow-list availability.
    """
    directory_ok = await request.app.state.admin_directory.health_check()

    return HealthResponse(
        status="healthy" if directory_ok else "degraded",
        version=__version__,
        note_count=len(request.app.state.note_store),
        admin_directory="available" if directory_ok else "unavailable",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
