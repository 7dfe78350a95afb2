"""
AgentDesk Backend - Pydantic Schemas
======================================

API contracts for request bodies and responses. Field names on the wire are
lowerCamelCase; Python attributes stay snake_case.
"""
