"""
AgentDesk Backend - Agent Service (CRUD over `agents`)
========================================================

What:  Business logic for every /agents operation.
How:   Each method receives the request's pooled connection, runs one
       parameterized SQLAlchemy Core statement (create runs an existence
       check first), and maps rows to the API shape with field_mapper.
Who:   Called by routes/agents.py.

Operation Summary:
    list_agents          SELECT *                       → [] when empty
    get_agent            SELECT * WHERE AGENT_CODE      → NotFoundError
    list_agents_by_area  SELECT * WHERE WORKING_AREA    → NotFoundError when empty
    create_agent         SELECT + INSERT                → ConflictError on duplicate
    replace_agent        UPDATE all updatable columns   → NotFoundError on 0 rows
    update_agent         UPDATE present columns only    → ValidationError if none
    delete_agent         DELETE WHERE AGENT_CODE        → NotFoundError on 0 rows

Error Handling Strategy:
    Application exceptions propagate unchanged. SQLAlchemy errors are logged
    with the statement context and re-raised as DatabaseError, which the
    global handler turns into a generic 500. The connection itself is
    released by Database.connection(), never here.

Design Decision:
    AgentService is stateless; the connection is passed into each call.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy import Column, delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection

from agentdesk.exceptions import ConflictError, DatabaseError, NotFoundError, ValidationError
from agentdesk.models.agent import Agent
from agentdesk.services.field_mapper import UPDATABLE_FIELDS, to_api, to_db
from agentdesk.services.sanitizer import sanitize
from agentdesk.services.validation import CREATE_RULES, UPDATE_RULES, run_pipeline

logger = logging.getLogger(__name__)

agents_table = Agent.__table__

_COLUMNS_BY_NAME: Dict[str, Column] = {column.name: column for column in agents_table.columns}

COMMISSION_QUANTUM = Decimal("0.01")


def _column(name: str) -> Column:
    return _COLUMNS_BY_NAME[name]


def _stored(fields: Dict[str, Any]) -> Dict[str, Any]:
    """
    API fields → column values as DECIMAL(10,2) will hold them.

    An empty commission becomes NULL; any other commission is quantized to
    two places ("0.1" → Decimal("0.10")).
    """
    row = to_db(fields)
    if "COMMISSION" in row:
        commission = row["COMMISSION"]
        if commission is None or commission == "":
            row["COMMISSION"] = None
        else:
            row["COMMISSION"] = Decimal(str(commission)).quantize(COMMISSION_QUANTUM)
    return row


def _values(fields: Dict[str, Any]) -> Dict[Column, Any]:
    """API fields → {Column: value}, restricted to known columns."""
    return {_column(name): value for name, value in _stored(fields).items()}


def _is_present(value: Any) -> bool:
    return value is not None and value != ""


class AgentService:
    """
    CRUD operations for sales agents.

    Every public method takes `conn` (an AsyncConnection borrowed for the
    current request) as its first argument.
    """

    async def list_agents(self, conn: AsyncConnection) -> List[Dict[str, Any]]:
        """Return every agent in API shape. An empty table yields []."""
        try:
            result = await conn.execute(select(agents_table))
            return [to_api(row) for row in result.mappings().all()]
        except SQLAlchemyError as e:
            raise self._database_error("list agents", e) from e

    async def get_agent(self, conn: AsyncConnection, agent_code: str) -> Dict[str, Any]:
        """
        Return one agent by code.

        Raises:
            NotFoundError: No agent has this code (→ 404)
        """
        code = sanitize(agent_code)
        try:
            result = await conn.execute(
                select(agents_table).where(_column("AGENT_CODE") == code)
            )
            row = result.mappings().first()
        except SQLAlchemyError as e:
            raise self._database_error("get agent", e, agent_code=code) from e

        if row is None:
            raise NotFoundError(resource="Agent", resource_id=code)
        return to_api(row)

    async def list_agents_by_area(
        self, conn: AsyncConnection, working_area: str
    ) -> List[Dict[str, Any]]:
        """
        Return agents whose WORKING_AREA equals `working_area`.

        Unlike list_agents, an empty result is reported as NotFoundError
        (→ 404). Existing clients rely on this.
        """
        area = sanitize(working_area)
        try:
            result = await conn.execute(
                select(agents_table).where(_column("WORKING_AREA") == area)
            )
            rows = result.mappings().all()
        except SQLAlchemyError as e:
            raise self._database_error("list agents by area", e, working_area=area) from e

        if not rows:
            raise NotFoundError(
                resource="Agent",
                message="No agents found for this working area",
                context={"working_area": area},
            )
        return [to_api(row) for row in rows]

    async def create_agent(self, conn: AsyncConnection, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert a new agent.

        Workflow:
            1. Run the create validation pipeline (sanitize, require code, commission)
            2. Reject if an agent with the same code exists (ConflictError → 400)
            3. INSERT and commit
            4. Return the values as stored (commission quantized, "" as null)

        Concurrent creates of the same code can both pass step 2; the primary
        key then rejects the second INSERT, which surfaces as DatabaseError.
        """
        fields = run_pipeline(payload, CREATE_RULES)
        code = fields["agentCode"]

        try:
            existing = await conn.execute(
                select(_column("AGENT_CODE")).where(_column("AGENT_CODE") == code)
            )
            if existing.first() is not None:
                raise ConflictError(
                    message="Agent with this code already exists",
                    context={"agent_code": code},
                )

            await conn.execute(insert(agents_table).values(_values(fields)))
            await conn.commit()
        except SQLAlchemyError as e:
            raise self._database_error("create agent", e, agent_code=code) from e

        logger.info("Agent %s created", code)
        return to_api(_stored(fields))

    async def replace_agent(
        self, conn: AsyncConnection, agent_code: str, payload: Dict[str, Any]
    ) -> None:
        """
        Overwrite every updatable column of one agent (PUT semantics).

        Fields missing from the payload are written as NULL.

        Raises:
            NotFoundError: No row matched the code (→ 404)
        """
        code = sanitize(agent_code)
        fields = run_pipeline(payload, UPDATE_RULES)
        values = {field: fields.get(field) for field in UPDATABLE_FIELDS}

        affected = await self._update(conn, code, values, operation="replace agent")
        if affected == 0:
            raise NotFoundError(resource="Agent", resource_id=code)
        logger.info("Agent %s replaced", code)

    async def update_agent(
        self, conn: AsyncConnection, agent_code: str, payload: Dict[str, Any]
    ) -> None:
        """
        Update only the fields present in the payload (PATCH semantics).

        A field is present when its value is neither null nor an empty string
        after sanitization. agentCode is never updated.

        Raises:
            ValidationError: No updatable field is present (→ 400)
            NotFoundError: No row matched the code (→ 404)
        """
        code = sanitize(agent_code)
        fields = run_pipeline(payload, UPDATE_RULES)
        values = {
            field: fields[field]
            for field in UPDATABLE_FIELDS
            if _is_present(fields.get(field))
        }
        if not values:
            raise ValidationError(message="No fields to update")

        affected = await self._update(conn, code, values, operation="update agent")
        if affected == 0:
            raise NotFoundError(resource="Agent", resource_id=code)
        logger.info("Agent %s updated (%s)", code, ", ".join(sorted(values)))

    async def delete_agent(self, conn: AsyncConnection, agent_code: str) -> None:
        """
        Delete one agent.

        Raises:
            NotFoundError: No row matched the code (→ 404)
        """
        code = sanitize(agent_code)
        try:
            result = await conn.execute(
                delete(agents_table).where(_column("AGENT_CODE") == code)
            )
            await conn.commit()
        except SQLAlchemyError as e:
            raise self._database_error("delete agent", e, agent_code=code) from e

        if result.rowcount == 0:
            raise NotFoundError(resource="Agent", resource_id=code)
        logger.info("Agent %s deleted", code)

    # ── Internals ─────────────────────────────────────────────────────────

    async def _update(
        self,
        conn: AsyncConnection,
        code: str,
        values: Dict[str, Any],
        operation: str,
    ) -> int:
        """Run one UPDATE ... WHERE AGENT_CODE = :code and return the matched row count."""
        try:
            result = await conn.execute(
                update(agents_table)
                .where(_column("AGENT_CODE") == code)
                .values(_values(values))
            )
            await conn.commit()
        except SQLAlchemyError as e:
            raise self._database_error(operation, e, agent_code=code) from e
        return result.rowcount

    @staticmethod
    def _database_error(operation: str, error: Exception, **context: Any) -> DatabaseError:
        logger.error("Database error during %s: %s", operation, str(error), exc_info=True)
        return DatabaseError(
            message="Error occurred. The request is invalid.",
            context={"operation": operation, "error_type": type(error).__name__, **context},
        )


# ── Singleton Instance ────────────────────────────────────────────────────
agent_service = AgentService()
