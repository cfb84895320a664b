"""Versioned API route modules."""

from fastapi import APIRouter

from gridcombat.api.routes.combat import router as combat_router
from gridcombat.api.routes.config import router as config_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(combat_router, tags=["Combat"])
api_router.include_router(config_router, tags=["Config"])

__all__ = ["api_router"]
