"""
AgentDesk Backend - Food Route Handlers
=========================================

What:  GET /foods, the full foods table returned as-is.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncConnection

from agentdesk.database import get_db_connection
from agentdesk.schemas.common import ErrorResponse
from agentdesk.services.food_service import food_service

router = APIRouter(prefix="/foods", tags=["Foods"])


@router.get(
    "",
    responses={
        200: {"description": "Array of food rows, columns unmodified"},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List all foods",
)
async def list_foods(conn: AsyncConnection = Depends(get_db_connection)) -> List[Dict[str, Any]]:
    return await food_service.list_foods(conn)
