"""
AgentDesk Backend - Services Layer
====================================

What:  Business logic between routes (HTTP) and the database connection.

Service Inventory:
    - sanitizer:        Strips markup and quote characters from untrusted strings
    - field_mapper:     Translates DB column names ↔ API field names
    - validation:       Ordered rule pipeline applied to agent write payloads
    - AgentService:     CRUD over the `agents` table
    - FoodService:      Read-only listing of the `foods` table
    - LookupService:    Relays keyword lookups to the external "say" API

Services receive a connection per call and never build HTTP responses;
failures are reported by raising agentdesk.exceptions types.
"""
