"""
Health check API endpoints.

Routes: GET /health, GET /health/index

Dependencies: umkm_rag.application.services.rag_service
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from umkm_rag.api.deps import get_rag_service
from umkm_rag.application.services.rag_service import RAGService


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


# Health checks stay outside the per-client quota; only /rag routes are throttled.
router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/index", response_model=HealthResponse, responses={503: {"model": HealthResponse}})
async def health_check_index(rag_service: RAGService = Depends(get_rag_service)):
    """Vector index readiness check."""
    if not rag_service.is_ready:
        return JSONResponse(
            status_code=503,
            content=HealthResponse(status="unavailable", message="Vector index not built").model_dump(),
        )
    return HealthResponse(
        status="healthy",
        message=f"Vector index ready ({rag_service.index_size} chunks)",
    )
