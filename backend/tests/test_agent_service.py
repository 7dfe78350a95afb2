"""
AgentDesk Backend - Agent Service Unit Tests
==============================================

What:  AgentService business rules against a mocked connection.
How:   mock_conn.execute returns fake results; no database needed.

What we test:
    ✅ Not-found translation for get / area / update / delete
    ✅ Duplicate code rejected before INSERT
    ✅ PATCH with nothing to update never reaches the database
    ✅ SQLAlchemy errors become DatabaseError with a generic message
"""

from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from agentdesk.exceptions import ConflictError, DatabaseError, NotFoundError, ValidationError
from agentdesk.services.agent_service import AgentService


def _row():
    return {
        "AGENT_CODE": "A001  ",
        "AGENT_NAME": "Subbarao",
        "WORKING_AREA": "Bangalore",
        "COMMISSION": Decimal("0.14"),
        "PHONE_NO": "077-12346674",
        "COUNTRY": None,
    }


class TestAgentServiceRead:

    def setup_method(self):
        self.service = AgentService()

    @pytest.mark.asyncio
    async def test_list_agents_maps_rows(self, mock_conn, make_result):
        mock_conn.execute.return_value = make_result(rows=[_row()])

        result = await self.service.list_agents(mock_conn)

        assert result == [{
            "agentCode": "A001",
            "agentName": "Subbarao",
            "workingArea": "Bangalore",
            "commission": Decimal("0.14"),
            "phoneNumber": "077-12346674",
            "country": None,
        }]

    @pytest.mark.asyncio
    async def test_list_agents_empty(self, mock_conn, make_result):
        mock_conn.execute.return_value = make_result(rows=[])
        assert await self.service.list_agents(mock_conn) == []

    @pytest.mark.asyncio
    async def test_get_agent_not_found(self, mock_conn, make_result):
        mock_conn.execute.return_value = make_result(first=None)

        with pytest.raises(NotFoundError, match="Agent not found"):
            await self.service.get_agent(mock_conn, "Z999")

    @pytest.mark.asyncio
    async def test_list_by_area_empty_is_not_found(self, mock_conn, make_result):
        mock_conn.execute.return_value = make_result(rows=[])

        with pytest.raises(NotFoundError):
            await self.service.list_agents_by_area(mock_conn, "Atlantis")

    @pytest.mark.asyncio
    async def test_database_failure_becomes_database_error(self, mock_conn):
        mock_conn.execute.side_effect = OperationalError("SELECT", {}, Exception("gone away"))

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.list_agents(mock_conn)

        assert "gone away" not in exc_info.value.message
        assert exc_info.value.context["operation"] == "list agents"


class TestAgentServiceWrite:

    def setup_method(self):
        self.service = AgentService()

    @pytest.mark.asyncio
    async def test_create_agent_inserts_and_commits(self, mock_conn, make_result, sample_agent):
        mock_conn.execute.side_effect = [make_result(first=None), make_result(rowcount=1)]

        result = await self.service.create_agent(mock_conn, sample_agent)

        assert result == {**sample_agent, "commission": Decimal("0.05")}
        assert mock_conn.execute.await_count == 2
        mock_conn.commit.assert_awaited_once()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("commission, expected", [
        ("0.1", Decimal("0.10")),
        ("12", Decimal("12.00")),
        ("", None),
    ])
    async def test_create_returns_commission_as_stored(
        self, mock_conn, make_result, sample_agent, commission, expected
    ):
        mock_conn.execute.side_effect = [make_result(first=None), make_result(rowcount=1)]
        sample_agent["commission"] = commission

        result = await self.service.create_agent(mock_conn, sample_agent)

        assert result["commission"] == expected
        inserted = mock_conn.execute.await_args_list[1].args[0].compile().params
        assert inserted["COMMISSION"] == expected

    @pytest.mark.asyncio
    async def test_create_duplicate_rejected(self, mock_conn, make_result, sample_agent):
        mock_conn.execute.return_value = make_result(first=("A007",))

        with pytest.raises(ConflictError, match="already exists"):
            await self.service.create_agent(mock_conn, sample_agent)

        assert mock_conn.execute.await_count == 1
        mock_conn.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_invalid_commission_never_queries(self, mock_conn, sample_agent):
        sample_agent["commission"] = "0.123"

        with pytest.raises(ValidationError):
            await self.service.create_agent(mock_conn, sample_agent)

        mock_conn.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_replace_agent_not_found(self, mock_conn, make_result, sample_agent):
        mock_conn.execute.return_value = make_result(rowcount=0)

        with pytest.raises(NotFoundError):
            await self.service.replace_agent(mock_conn, "Z999", sample_agent)

    @pytest.mark.asyncio
    async def test_replace_agent_sets_every_updatable_column(self, mock_conn, make_result):
        mock_conn.execute.return_value = make_result(rowcount=1)

        await self.service.replace_agent(mock_conn, "A007", {"agentName": "Jane"})

        statement = mock_conn.execute.await_args.args[0]
        params = statement.compile().params
        assert params["AGENT_NAME"] == "Jane"
        for column in ("WORKING_AREA", "COMMISSION", "PHONE_NO", "COUNTRY"):
            assert column in params
            assert params[column] is None

    @pytest.mark.asyncio
    async def test_update_agent_only_sets_present_fields(self, mock_conn, make_result):
        mock_conn.execute.return_value = make_result(rowcount=1)

        await self.service.update_agent(
            mock_conn, "A007", {"country": "UK", "agentName": "", "phoneNumber": None}
        )

        statement = mock_conn.execute.await_args.args[0]
        params = statement.compile().params
        assert params["COUNTRY"] == "UK"
        assert "AGENT_NAME" not in params
        assert "PHONE_NO" not in params

    @pytest.mark.asyncio
    async def test_update_agent_ignores_agent_code(self, mock_conn):
        with pytest.raises(ValidationError, match="No fields to update"):
            await self.service.update_agent(mock_conn, "A007", {"agentCode": "B001"})

        mock_conn.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_agent_empty_payload(self, mock_conn):
        with pytest.raises(ValidationError, match="No fields to update"):
            await self.service.update_agent(mock_conn, "A007", {})

        mock_conn.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_agent_not_found(self, mock_conn, make_result):
        mock_conn.execute.return_value = make_result(rowcount=0)

        with pytest.raises(NotFoundError):
            await self.service.delete_agent(mock_conn, "Z999")

    @pytest.mark.asyncio
    async def test_delete_agent_sanitizes_code(self, mock_conn, make_result):
        mock_conn.execute.return_value = make_result(rowcount=1)

        await self.service.delete_agent(mock_conn, " A007'; ")

        statement = mock_conn.execute.await_args.args[0]
        assert list(statement.compile().params.values()) == ["A007"]
