"""
AgentDesk Backend - Food Service
==================================

What:  Read-only listing of the `foods` table.
How:   Runs `SELECT * FROM foods` as textual SQL so the response carries
       whatever columns the table has, unmapped and unfiltered.
"""

import logging
from typing import Any, Dict, List

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection

from agentdesk.exceptions import DatabaseError

logger = logging.getLogger(__name__)

LIST_FOODS_SQL = text("SELECT * FROM foods")


class FoodService:
    """Listing operations for food items."""

    async def list_foods(self, conn: AsyncConnection) -> List[Dict[str, Any]]:
        """Return every food row as a plain dict keyed by column name."""
        try:
            result = await conn.execute(LIST_FOODS_SQL)
            return [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as e:
            logger.error("Database error listing foods: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Internal Server Error",
                context={"operation": "list foods", "error_type": type(e).__name__},
            ) from e


food_service = FoodService()
