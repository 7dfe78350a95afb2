"""Create agents and foods tables

Revision ID: 001
Revises: None
Create Date: 2026-10-18 00:00:00.000000+00:00

What:  Creates the `agents` and `foods` tables with the legacy UPPER_SNAKE_CASE
       column names the API maps from.
Rollback: downgrade() drops both tables (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "agents",
        sa.Column("AGENT_CODE", sa.String(6), nullable=False, comment="Unique agent code"),
        sa.Column("AGENT_NAME", sa.String(40), nullable=True),
        sa.Column("WORKING_AREA", sa.String(35), nullable=True),
        sa.Column(
            "COMMISSION",
            sa.Numeric(10, 2),
            nullable=True,
            comment="Commission rate, at most 2 decimal places",
        ),
        sa.Column("PHONE_NO", sa.String(15), nullable=True),
        sa.Column("COUNTRY", sa.String(25), nullable=True),
        sa.PrimaryKeyConstraint("AGENT_CODE"),
    )
    op.create_index("ix_agents_WORKING_AREA", "agents", ["WORKING_AREA"])

    op.create_table(
        "foods",
        sa.Column("ITEM_ID", sa.String(6), nullable=False),
        sa.Column("ITEM_NAME", sa.String(25), nullable=True),
        sa.Column("ITEM_UNIT", sa.String(5), nullable=True),
        sa.Column("COMPANY_ID", sa.String(6), nullable=True),
        sa.PrimaryKeyConstraint("ITEM_ID"),
    )


def downgrade() -> None:
    op.drop_table("foods")
    op.drop_index("ix_agents_WORKING_AREA", table_name="agents")
    op.drop_table("agents")
