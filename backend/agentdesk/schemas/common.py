"""
AgentDesk Backend - Shared Response Schemas
=============================================

What:  Acknowledgement, error and health response models used across routers.
"""

from typing import Optional

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Acknowledgement for PUT, PATCH and DELETE."""
    message: str = Field(description="Human-readable result", examples=["Agent updated successfully"])


class ErrorResponse(BaseModel):
    """
    Standardized error body for agent and food endpoints.

    Example:
        {
            "error": "not_found",
            "message": "Agent not found",
            "request_id": "1f2e3d4c"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class LookupErrorResponse(BaseModel):
    """Error body for the lookup proxy: {"error": ..., "details": ...}."""
    error: str = Field(description="Error description")
    details: Optional[str] = Field(default=None, description="Underlying error text")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
