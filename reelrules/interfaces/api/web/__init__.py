"""Web API routers."""

from .router import router

__all__ = ["router"]
