"""
AgentDesk Backend - Field Mapper
==================================

What:  Translates between database column names (UPPER_SNAKE_CASE) and API
       field names (lowerCamelCase) for agent rows.

    DB column       API field
    ────────────    ───────────
    AGENT_CODE      agentCode
    AGENT_NAME      agentName
    WORKING_AREA    workingArea
    COMMISSION      commission
    PHONE_NO        phoneNumber
    COUNTRY         country

Both directions are pure functions: the same input always yields the same
output and unknown keys never raise.
"""

from typing import Any, Dict, Mapping

COLUMN_TO_FIELD: Dict[str, str] = {
    "AGENT_CODE": "agentCode",
    "AGENT_NAME": "agentName",
    "WORKING_AREA": "workingArea",
    "COMMISSION": "commission",
    "PHONE_NO": "phoneNumber",
    "COUNTRY": "country",
}

FIELD_TO_COLUMN: Dict[str, str] = {field: column for column, field in COLUMN_TO_FIELD.items()}

# Fields PUT overwrites and PATCH may touch; agentCode is the row identity
UPDATABLE_FIELDS = ("agentName", "workingArea", "commission", "phoneNumber", "country")


def to_api(row: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Convert a database row into the API representation.

    Unmapped columns fall back to their lowercased name; string values are
    trimmed. Accepts any mapping, including SQLAlchemy `RowMapping`.
    """
    result: Dict[str, Any] = {}
    for column, value in row.items():
        key = COLUMN_TO_FIELD.get(column, column.lower())
        result[key] = value.strip() if isinstance(value, str) else value
    return result


def to_db(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Convert API fields into column values.

    Only the six known agent fields are translated; anything else in the
    payload is dropped, so callers can never name an arbitrary column.
    """
    return {
        FIELD_TO_COLUMN[field]: value
        for field, value in payload.items()
        if field in FIELD_TO_COLUMN
    }
