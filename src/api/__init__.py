"""FastAPI routes and endpoints.

Endpoints:
- GET /health: Service health status
- GET /config: Effective configuration
"""
