"""
FastAPI routers grouped by concern (blob proxy, users, events).

Each file exposes an APIRouter included by roster.app.create_app. Routers pull
their collaborators from ``request.app.state`` and never touch blobs for
entities directly.
"""
