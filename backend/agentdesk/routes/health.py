"""
AgentDesk Backend - Health Check Route
========================================

What:  GET /health for monitoring and load balancer probes.
How:   Runs SELECT 1 through the connection pool and reports uptime.

Status levels:
    - healthy:   database reachable
    - unhealthy: database unreachable (still HTTP 200; the body carries the state)
"""

import logging
import time

from fastapi import APIRouter, Depends

from agentdesk import __version__
from agentdesk.database import Database, get_database
from agentdesk.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Service start time for uptime reporting
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Returns the health status of the backend service and its database.",
)
async def health_check(database: Database = Depends(get_database)) -> HealthResponse:
    """
    Check the health of the service.

    Database: borrows one pooled connection and executes SELECT 1. This also
    exercises pool acquisition, so an exhausted pool shows as disconnected.
    """
    connected = await database.ping()
    if not connected:
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
