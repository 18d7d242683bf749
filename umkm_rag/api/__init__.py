"""
API routes module.

FastAPI routers for all HTTP endpoints.
"""

from fastapi import APIRouter

from .routers import health_router, rag_router

api_router = APIRouter()

# Include all routers
api_router.include_router(health_router)
api_router.include_router(rag_router)

__all__ = ["api_router"]
