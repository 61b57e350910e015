"""Health check endpoint"""

from fastapi import APIRouter, Depends, Response, status
import logging

from transcript_search.schemas.response import HealthResponse
from transcript_search.search.embeddings import OpenAIEmbeddingsService
from transcript_search.services.search_service import TranscriptSearchService, get_search_service

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health", response_model=HealthResponse)
async def health_check(
    response: Response,
    service: TranscriptSearchService = Depends(get_search_service)
):
    """
    Health check endpoint
    Reports:
    - Chunk store size
    - Query log size
    - Embedding provider
    - Redis embedding cache (openai provider only, optional)
    """
    health_status = {
        "status": "healthy",
        "dependencies": {}
    }

    try:
        health_status["dependencies"]["chunk_store"] = f"{service.repository.count()} chunks"
        health_status["dependencies"]["query_log"] = f"{len(service.query_log.store.all())} entries"
    except Exception as e:
        health_status["dependencies"]["chunk_store"] = f"error: {str(e)}"
        health_status["status"] = "unhealthy"
        logger.error(f"Store health check failed: {str(e)}")

    health_status["dependencies"]["embeddings"] = service.embeddings.provider

    # Cache is optional - don't fail if not available
    if isinstance(service.embeddings, OpenAIEmbeddingsService):
        if service.embeddings.cache_available():
            health_status["dependencies"]["redis"] = "connected"
        else:
            health_status["dependencies"]["redis"] = "not available"
            logger.warning("Redis embedding cache not available")

    if health_status["status"] == "unhealthy":
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(**health_status)
