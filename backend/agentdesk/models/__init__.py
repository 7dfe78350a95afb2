"""
AgentDesk Backend - ORM Models
================================

Importing this package registers every table on `Base.metadata`
(used by Alembic autogenerate and by the test suite's schema setup).
"""

from agentdesk.models.agent import Agent
from agentdesk.models.food import Food

__all__ = ["Agent", "Food"]
