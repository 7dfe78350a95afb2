"""
AgentDesk Backend - Food SQLAlchemy Model
===========================================

What:  ORM model for the `foods` table.
Note:  The API never depends on these column names. GET /foods runs
       `SELECT * FROM foods` and returns whatever columns exist, so the table
       can gain or lose columns without code changes. The model exists so
       migrations and tests can create the table.
"""

from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from agentdesk.database import Base


class Food(Base):
    """A catalogue item supplied by a company."""

    __tablename__ = "foods"

    item_id: Mapped[str] = mapped_column("ITEM_ID", String(6), primary_key=True)
    item_name: Mapped[Optional[str]] = mapped_column("ITEM_NAME", String(25), nullable=True)
    item_unit: Mapped[Optional[str]] = mapped_column("ITEM_UNIT", String(5), nullable=True)
    company_id: Mapped[Optional[str]] = mapped_column("COMPANY_ID", String(6), nullable=True)

    def __repr__(self) -> str:
        return f"<Food(item_id='{self.item_id}', item_name='{self.item_name}')>"
