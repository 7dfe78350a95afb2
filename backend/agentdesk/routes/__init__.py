"""
AgentDesk Backend - API Routes Package
========================================

Route Inventory:
    - agents.py:   GET/POST /agents, GET/PUT/PATCH/DELETE /agents/{agentCode},
                   GET /agents/area/{workingArea}
    - foods.py:    GET /foods
    - lambdas.py:  GET /lambdas/say?keyword=
    - health.py:   GET /health

Routes stay thin: extract path/query/body values, borrow a connection through
Depends(get_db_connection), call the service, pick the status code.
"""
