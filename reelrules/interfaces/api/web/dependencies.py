"""
FastAPI dependency injection helpers for web endpoints.

ARCHITECTURE:
- Endpoints should ONLY inject services, never the registry or candidate pools
- Services encapsulate all business logic
- Endpoints are thin presentation layers that call services and format responses
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import HTTPException

if TYPE_CHECKING:
    from reelrules.services.domain.selection_svc import SelectionService


def get_selection_service() -> SelectionService:
    """Get SelectionService instance."""
    from reelrules.app import application

    service = application.services.get("selection")
    if not service:
        raise HTTPException(status_code=503, detail="Selection service not available")
    return service  # type: ignore[no-any-return]
