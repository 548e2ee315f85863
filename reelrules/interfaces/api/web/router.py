"""
Combined router for all web endpoints.

Aggregates the web routers into a single router under /api/web.
"""

from fastapi import APIRouter

from reelrules.interfaces.api.web import rules_if

router = APIRouter(prefix="/api/web")

router.include_router(rules_if.router)
