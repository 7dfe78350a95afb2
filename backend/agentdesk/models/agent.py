"""
AgentDesk Backend - Agent SQLAlchemy Model
============================================

What:  ORM model for the `agents` table.
How:   Python attribute names are snake_case; the database column names keep
       the legacy UPPER_SNAKE_CASE convention (AGENT_CODE, PHONE_NO, ...).
Who:   Services query `Agent.__table__` with SQLAlchemy Core so result rows are
       keyed by column name, which is what the field mapper expects.

Table Design:
    - AGENT_CODE: short natural key, primary key (unique)
    - COMMISSION: DECIMAL(10,2); exposed to the API as a decimal string
    - All other columns are free-form text, nullable
"""

from decimal import Decimal
from typing import Optional

from sqlalchemy import Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from agentdesk.database import Base


class Agent(Base):
    """
    A sales agent keyed by a unique code.

    Lifecycle:
        1. Inserted by POST /agents after an existence check
        2. Overwritten by PUT or partially updated by PATCH
        3. Removed by DELETE (no soft delete)

    Query Patterns:
        - Get by code: WHERE AGENT_CODE = :code → primary key lookup
        - List by area: WHERE WORKING_AREA = :area → index on WORKING_AREA
    """

    __tablename__ = "agents"

    agent_code: Mapped[str] = mapped_column(
        "AGENT_CODE",
        String(6),
        primary_key=True,
        comment="Unique agent code",
    )
    agent_name: Mapped[Optional[str]] = mapped_column("AGENT_NAME", String(40), nullable=True)
    working_area: Mapped[Optional[str]] = mapped_column(
        "WORKING_AREA",
        String(35),
        nullable=True,
        index=True,
    )
    commission: Mapped[Optional[Decimal]] = mapped_column(
        "COMMISSION",
        Numeric(10, 2),
        nullable=True,
        comment="Commission rate, at most 2 decimal places",
    )
    phone_no: Mapped[Optional[str]] = mapped_column("PHONE_NO", String(15), nullable=True)
    country: Mapped[Optional[str]] = mapped_column("COUNTRY", String(25), nullable=True)

    def __repr__(self) -> str:
        return f"<Agent(agent_code='{self.agent_code}', working_area='{self.working_area}')>"
