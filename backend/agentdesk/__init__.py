"""
AgentDesk Backend - Application Package Initializer
===================================================

What: Marks the `agentdesk` directory as a Python package.
Who:  Imported by uvicorn (`agentdesk.main:app`), Alembic and pytest.

Architecture Note:
    The backend keeps a layered layout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │  Services (sanitize, validate, SQL) │  ← Business rules, error translation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy tables + Pydantic
    ├─────────────────────────────────────┤
    │      Database (pooled connections)  │  ← Async SQLAlchemy engine
    └─────────────────────────────────────┘

    Routes never touch SQL; services never touch HTTP status codes.
"""

__version__ = "1.0.0"
