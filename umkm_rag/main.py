"""
FastAPI application entry point.

Initializes FastAPI app, registers routers, adds middleware, and configures lifespan.

Dependencies: fastapi, umkm_rag.api, umkm_rag.observability, umkm_rag.configs
System role: Application initialization and configuration
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from umkm_rag.api import api_router
from umkm_rag.api.deps import get_service_cache
from umkm_rag.configs import get_settings
from umkm_rag.core.exceptions import RateLimitExceeded
from umkm_rag.models.rag import ErrorResponse
from umkm_rag.observability.logger import configure_logging
from umkm_rag.observability.middleware import (
    CorrelationMiddleware,
    RequestLoggingMiddleware,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Builds the vector index and generation chain before serving requests.
    A failed build aborts startup.
    """
    # Startup
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Application startup: logging configured")

    cache = get_service_cache()
    try:
        result = await cache.rag_service.initialize()
        _ = cache.throttler_guard
    except Exception as e:
        logger.exception(
            "Failed to initialize RAG system",
            extra={"error": str(e)},
        )
        raise

    logger.info(
        f"Application startup complete: {result.document_count} documents, "
        f"{result.chunk_count} chunks indexed"
    )

    yield

    # Shutdown
    cache.clear()
    logger.info("Application shutdown: service cache cleared")


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Render a throttled request as 429 with quota and Retry-After headers."""
    return JSONResponse(
        status_code=429,
        content=ErrorResponse(message=exc.message, error="Too Many Requests").model_dump(),
        headers=exc.headers,
    )


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    settings = get_settings()

    app = FastAPI(
        title="UMKM RAG API",
        description="Question answering and insights over the UMKM dataset",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Add observability middleware (added first = last to execute)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Retry-After", "X-RateLimit-Limit", "X-RateLimit-Remaining", "X-RateLimit-Reset", "X-Correlation-ID"],
    )

    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # Register API routes with /api/v1 prefix for versioning
    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "umkm_rag.main:app",
        host="0.0.0.0",
        port=8000,
    )
