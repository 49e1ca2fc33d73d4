"""API route aggregation.

All routers registered here get mounted in main.py under /api.

Auth is not applied at the include_router level: the spaces and token
routes take get_current_identity themselves because they need the
resolved Identity, not just a gate. Health is open.
"""

from fastapi import APIRouter

from muzer.api.health import router as health_router
from muzer.api.spaces import router as spaces_router
from muzer.api.tokens import router as tokens_router

api_router = APIRouter(prefix="/api")

# Open routes: no auth required
api_router.include_router(health_router, tags=["health"])

# Session-scoped routes
api_router.include_router(spaces_router, tags=["spaces"])
api_router.include_router(tokens_router, tags=["tokens"])
