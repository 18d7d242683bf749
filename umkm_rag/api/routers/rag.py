"""RAG API endpoints.

Routes:
- POST /rag/query - Answer a question from the dataset
- GET /rag/insights - Generate key insights and strategies over the dataset

Every route counts against the caller's rate limit.

Dependencies: umkm_rag.application.services.rag_service, umkm_rag.api.deps
System role: RAG question answering HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from umkm_rag.api.deps import enforce_rate_limit, get_rag_service
from umkm_rag.application.services.rag_service import RAGService
from umkm_rag.core.exceptions import UMKMRagException
from umkm_rag.models.rag import ErrorResponse, QueryRequest, RAGResultResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/rag",
    tags=["rag"],
    dependencies=[Depends(enforce_rate_limit)],
)

FAILURE_MESSAGE = "Failed to process your question"


def _error_response(response: Response, exc: Exception) -> JSONResponse:
    """Map a query-time failure to a 500 carrying the rate limit headers."""
    cause = exc.message if isinstance(exc, UMKMRagException) else "Internal server error"
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(message=FAILURE_MESSAGE, error=cause).model_dump(),
        headers=dict(response.headers),
    )


@router.post(
    "/query",
    response_model=RAGResultResponse,
    responses={500: {"model": ErrorResponse}, 429: {"model": ErrorResponse}},
)
async def query(
    request: QueryRequest,
    response: Response,
    rag_service: RAGService = Depends(get_rag_service),
):
    """Answer a question using retrieval over the dataset.

    Args:
        request: QueryRequest with the question
        response: Sub-response carrying rate limit headers
        rag_service: Injected RAGService

    Returns:
        RAGResultResponse: Answer text
    """
    try:
        answer = await rag_service.answer(request.question)
    except UMKMRagException as e:
        logger.error(f"Error processing query: {e}")
        return _error_response(response, e)
    except Exception as e:
        logger.exception("Unexpected error processing query")
        return _error_response(response, e)

    return RAGResultResponse(message="Successfully answered the question", data=answer)


@router.get(
    "/insights",
    response_model=RAGResultResponse,
    responses={500: {"model": ErrorResponse}, 429: {"model": ErrorResponse}},
)
async def insights(
    response: Response,
    rag_service: RAGService = Depends(get_rag_service),
):
    """Generate key insights and strategies over the dataset.

    Args:
        response: Sub-response carrying rate limit headers
        rag_service: Injected RAGService

    Returns:
        RAGResultResponse: Insight report text
    """
    logger.info("Processing insights")
    try:
        report = await rag_service.insights()
    except UMKMRagException as e:
        logger.error(f"Error generating insights: {e}")
        return _error_response(response, e)
    except Exception as e:
        logger.exception("Unexpected error generating insights")
        return _error_response(response, e)

    return RAGResultResponse(message="Successfully generated insights", data=report)
