"""
AgentDesk Backend - Agent Request/Response Schemas
====================================================

What:  Pydantic models for the /agents endpoints.
How:   snake_case attributes with a camelCase alias generator, so the wire
       format is agentCode, agentName, workingArea, commission, phoneNumber,
       country.

Validation here is shallow: every field is optional and numbers
are accepted as strings. Business rules (required code, commission format,
sanitization) live in services/validation.py so POST, PUT and PATCH share them.
"""

from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _number_to_string(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    return value


class AgentPayload(BaseModel):
    """
    Request body for POST, PUT and PATCH /agents.

    Unknown fields are ignored. Clients may send commission as a JSON number
    (0.15) or string ("0.15").
    """

    agent_code: Optional[str] = Field(default=None, description="Unique agent code (POST only)")
    agent_name: Optional[str] = Field(default=None, description="Agent full name")
    working_area: Optional[str] = Field(default=None, description="City or region")
    commission: Optional[str] = Field(
        default=None,
        description="Commission rate, decimal with at most 2 fraction digits",
        examples=["0.15"],
    )
    phone_number: Optional[str] = Field(default=None, description="Contact phone number")
    country: Optional[str] = Field(default=None, description="Country")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        json_schema_extra={
            "example": {
                "agentCode": "A007",
                "agentName": "John Doe",
                "workingArea": "New York",
                "commission": "0.05",
                "phoneNumber": "077-25814763",
                "country": "USA",
            }
        },
    )

    @field_validator("*", mode="before")
    @classmethod
    def coerce_numbers(cls, v: Any) -> Any:
        return _number_to_string(v)

    def to_fields(self) -> dict:
        """Fields the client actually sent, keyed by API (camelCase) name."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class AgentResponse(BaseModel):
    """
    One agent as returned by the API.

    Columns without a fixed API name are passed through under their lowercased
    column name (extra fields are kept). COMMISSION is rendered as a decimal
    string, e.g. "0.15".
    """

    agent_code: Optional[str] = None
    agent_name: Optional[str] = None
    working_area: Optional[str] = None
    commission: Optional[str] = None
    phone_number: Optional[str] = None
    country: Optional[str] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    @field_validator("commission", mode="before")
    @classmethod
    def commission_as_string(cls, v: Any) -> Any:
        return _number_to_string(v)
