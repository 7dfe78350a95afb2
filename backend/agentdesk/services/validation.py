"""
AgentDesk Backend - Agent Payload Validation Pipeline
=======================================================

What:  One ordered list of named rules applied to every agent write
       (POST, PUT, PATCH).
How:   Each rule takes the payload dict (API field names) and returns a new
       dict, or raises ValidationError. `run_pipeline` applies rules in order,
       so later rules always see sanitized values.

Pipelines:
    CREATE_RULES:  sanitize_strings → require_agent_code → field_lengths → commission_format
    UPDATE_RULES:  sanitize_strings → field_lengths → commission_format

Length policy:
    String fields may not exceed their column's VARCHAR length, read from
    the `agents` table definition (agentCode 6, agentName 40, ...).

Commission policy:
    When `commission` is supplied and non-empty it must be a non-negative
    decimal with at most two fraction digits ("0.15", "12", "3.5") that fits
    DECIMAL(10,2), i.e. at most 8 integer digits.
"""

import re
from typing import Any, Callable, Dict, Sequence, Tuple

from sqlalchemy import String

from agentdesk.exceptions import ValidationError
from agentdesk.models.agent import Agent
from agentdesk.services.field_mapper import COLUMN_TO_FIELD
from agentdesk.services.sanitizer import sanitize_payload

Payload = Dict[str, Any]
Rule = Callable[[Payload], Payload]

COMMISSION_PATTERN = re.compile(r"^\d+(\.\d{1,2})?$")

_COLUMNS_BY_NAME = {column.name: column for column in Agent.__table__.columns}

_COMMISSION_TYPE = _COLUMNS_BY_NAME["COMMISSION"].type
COMMISSION_MAX_INTEGER_DIGITS = _COMMISSION_TYPE.precision - _COMMISSION_TYPE.scale

# API field → VARCHAR length of its column
FIELD_MAX_LENGTHS: Dict[str, int] = {
    COLUMN_TO_FIELD[column.name]: column.type.length
    for column in _COLUMNS_BY_NAME.values()
    if isinstance(column.type, String) and column.name in COLUMN_TO_FIELD
}


def sanitize_strings(payload: Payload) -> Payload:
    return sanitize_payload(payload)


def require_agent_code(payload: Payload) -> Payload:
    code = payload.get("agentCode")
    if code is None or code == "":
        raise ValidationError(message="agentCode is required", field="agentCode")
    return payload


def field_lengths(payload: Payload) -> Payload:
    for field, max_length in FIELD_MAX_LENGTHS.items():
        value = payload.get(field)
        if isinstance(value, str) and len(value) > max_length:
            raise ValidationError(
                message=f"{field} must be at most {max_length} characters",
                field=field,
                context={"max_length": max_length, "length": len(value)},
            )
    return payload


def commission_format(payload: Payload) -> Payload:
    commission = payload.get("commission")
    if commission is None or commission == "":
        return payload
    if not COMMISSION_PATTERN.match(str(commission)):
        raise ValidationError(
            message="Commission must be a decimal number with at most 2 decimal places",
            field="commission",
            context={"value": str(commission)},
        )
    if len(str(commission).split(".")[0]) > COMMISSION_MAX_INTEGER_DIGITS:
        raise ValidationError(
            message=f"Commission must have at most {COMMISSION_MAX_INTEGER_DIGITS} integer digits",
            field="commission",
            context={"value": str(commission)},
        )
    return payload


CREATE_RULES: Tuple[Tuple[str, Rule], ...] = (
    ("sanitize_strings", sanitize_strings),
    ("require_agent_code", require_agent_code),
    ("field_lengths", field_lengths),
    ("commission_format", commission_format),
)

UPDATE_RULES: Tuple[Tuple[str, Rule], ...] = (
    ("sanitize_strings", sanitize_strings),
    ("field_lengths", field_lengths),
    ("commission_format", commission_format),
)


def run_pipeline(payload: Payload, rules: Sequence[Tuple[str, Rule]]) -> Payload:
    """
    Apply `rules` in order and return the resulting payload.

    Raises:
        ValidationError: from the first rule that rejects the payload; the
            rule name is added to the error context.
    """
    for name, rule in rules:
        try:
            payload = rule(payload)
        except ValidationError as e:
            e.context.setdefault("rule", name)
            raise
    return payload
