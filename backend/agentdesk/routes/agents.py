"""
AgentDesk Backend - Agent Route Handlers
==========================================

What:  CRUD endpoints for sales agents under /agents.
How:   Each handler borrows one pooled connection (released by the dependency
       on every exit path) and delegates to AgentService.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncConnection

from agentdesk.database import get_db_connection
from agentdesk.schemas.agent import AgentPayload, AgentResponse
from agentdesk.schemas.common import ErrorResponse, MessageResponse
from agentdesk.services.agent_service import agent_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/agents", tags=["Agents"])


@router.get(
    "",
    response_model=List[AgentResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all agents",
)
async def list_agents(conn: AsyncConnection = Depends(get_db_connection)) -> List[dict]:
    """Returns every agent. An empty table returns an empty array."""
    return await agent_service.list_agents(conn)


@router.get(
    "/area/{working_area}",
    response_model=List[AgentResponse],
    responses={
        404: {"description": "No agents in this working area", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List agents by working area",
    description="Returns agents whose working area matches exactly. An empty match returns 404.",
)
async def list_agents_by_area(
    working_area: str,
    conn: AsyncConnection = Depends(get_db_connection),
) -> List[dict]:
    return await agent_service.list_agents_by_area(conn, working_area)


@router.get(
    "/{agent_code}",
    response_model=AgentResponse,
    responses={
        404: {"description": "Agent not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get an agent by code",
)
async def get_agent(
    agent_code: str,
    conn: AsyncConnection = Depends(get_db_connection),
) -> dict:
    return await agent_service.get_agent(conn, agent_code)


@router.post(
    "",
    response_model=AgentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Duplicate code or invalid commission", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create an agent",
)
async def create_agent(
    payload: AgentPayload,
    conn: AsyncConnection = Depends(get_db_connection),
) -> dict:
    """
    Creates an agent and echoes the stored values.

    String values are sanitized and trimmed; commission must have at most
    two decimal places; an existing agentCode is rejected with 400.
    """
    return await agent_service.create_agent(conn, payload.to_fields())


@router.put(
    "/{agent_code}",
    response_model=MessageResponse,
    responses={
        400: {"description": "Invalid commission", "model": ErrorResponse},
        404: {"description": "Agent not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Replace an agent",
    description="Overwrites name, working area, commission, phone number and country.",
)
async def replace_agent(
    agent_code: str,
    payload: AgentPayload,
    conn: AsyncConnection = Depends(get_db_connection),
) -> MessageResponse:
    await agent_service.replace_agent(conn, agent_code, payload.to_fields())
    return MessageResponse(message="Agent updated successfully")


@router.patch(
    "/{agent_code}",
    response_model=MessageResponse,
    responses={
        400: {"description": "No fields to update or invalid commission", "model": ErrorResponse},
        404: {"description": "Agent not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Partially update an agent",
    description="Updates only the fields present in the body.",
)
async def update_agent(
    agent_code: str,
    payload: AgentPayload,
    conn: AsyncConnection = Depends(get_db_connection),
) -> MessageResponse:
    await agent_service.update_agent(conn, agent_code, payload.to_fields())
    return MessageResponse(message="Agent updated successfully")


@router.delete(
    "/{agent_code}",
    response_model=MessageResponse,
    responses={
        404: {"description": "Agent not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete an agent",
)
async def delete_agent(
    agent_code: str,
    conn: AsyncConnection = Depends(get_db_connection),
) -> MessageResponse:
    await agent_service.delete_agent(conn, agent_code)
    return MessageResponse(message="Agent deleted successfully")
