"""
Main API router
"""
from fastapi import APIRouter

from leavedesk.api.v1 import (
    health,
    version,
    calendar,
    balances,
    leaves,
)

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(version.router, tags=["version"])
api_router.include_router(calendar.router, prefix="/calendar", tags=["calendar"])
api_router.include_router(balances.router, prefix="/balances", tags=["balances"])
api_router.include_router(leaves.router, prefix="/leaves", tags=["leaves"])
