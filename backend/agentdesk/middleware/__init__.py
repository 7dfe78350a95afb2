"""
AgentDesk Backend - Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: assigns the correlation ID used by every log line
    2. Logging: logs method, path, status and duration with that ID
    3. GZip / CORS: FastAPI's bundled middleware

    Responses pass back through the chain in reverse order.
"""
