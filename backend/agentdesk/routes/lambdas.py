"""
AgentDesk Backend - Lookup Proxy Route
========================================

What:  GET /lambdas/say?keyword=..., relaying the external lookup API.
How:   Delegates to LookupService; the remote JSON body is returned with 200.

Error bodies differ from the rest of the API:
    400 {"error": "Keyword query parameter is required"}
    500 {"error": "Failed to fetch data", "details": "<underlying error>"}
"""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query

from agentdesk.schemas.common import LookupErrorResponse
from agentdesk.services.lookup_service import LookupService, get_lookup_service

router = APIRouter(prefix="/lambdas", tags=["Lambdas"])


@router.get(
    "/say",
    responses={
        200: {"description": "JSON returned by the external API"},
        400: {"description": "Missing keyword", "model": LookupErrorResponse},
        500: {"description": "External API failure", "model": LookupErrorResponse},
    },
    summary="Relay a keyword to the external say API",
)
async def say(
    keyword: Optional[str] = Query(default=None, description="Keyword forwarded to the external API"),
    service: LookupService = Depends(get_lookup_service),
) -> Any:
    return await service.say(keyword)
