"""
AgentDesk Backend - Food Endpoint Tests
=========================================

What:  GET /foods returns the foods table unmodified.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from agentdesk.exceptions import DatabaseError
from agentdesk.services.food_service import FoodService

FOOD_ROWS = [
    {"ITEM_ID": "1", "ITEM_NAME": "Chex Mix", "ITEM_UNIT": "Pcs", "COMPANY_ID": "16"},
    {"ITEM_ID": "6", "ITEM_NAME": "Cheez-It", "ITEM_UNIT": "Pcs", "COMPANY_ID": "15"},
]


@pytest.mark.asyncio
async def test_list_foods_returns_rows_as_stored(test_client, database):
    async with database.engine.begin() as conn:
        await conn.execute(
            text(
                "INSERT INTO foods (ITEM_ID, ITEM_NAME, ITEM_UNIT, COMPANY_ID) "
                "VALUES (:ITEM_ID, :ITEM_NAME, :ITEM_UNIT, :COMPANY_ID)"
            ),
            FOOD_ROWS,
        )

    response = await test_client.get("/foods")

    assert response.status_code == 200
    assert sorted(response.json(), key=lambda row: row["ITEM_ID"]) == FOOD_ROWS


@pytest.mark.asyncio
async def test_list_foods_empty(test_client):
    response = await test_client.get("/foods")
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_list_foods_database_failure():
    """Driver errors surface as DatabaseError without the driver message."""
    conn = MagicMock()
    conn.execute = AsyncMock(
        side_effect=OperationalError("SELECT * FROM foods", {}, Exception("Lost connection"))
    )

    with pytest.raises(DatabaseError) as exc_info:
        await FoodService().list_foods(conn)

    assert exc_info.value.message == "Internal Server Error"
