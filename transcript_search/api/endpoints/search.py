"""Transcript search API endpoints"""

from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List, Optional
import logging

from transcript_search.schemas.search import (
    SearchRequest,
    RankedSnippet,
    SearchQueryLogEntry,
    SearchAnalytics
)
from transcript_search.services.search_service import TranscriptSearchService, get_search_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/search", response_model=List[RankedSnippet])
async def search_transcripts(
    search_request: SearchRequest,
    service: TranscriptSearchService = Depends(get_search_service)
):
    """
    Semantic search over indexed lesson transcripts

    Scope with lesson_id (wins) or course_id. Results are merged passages
    sorted by descending confidence; the query is added to the search log.
    """
    if not search_request.query.strip():
        raise HTTPException(status_code=400, detail="Query cannot be empty")

    return await service.search(
        search_request.query,
        course_id=search_request.course_id,
        lesson_id=search_request.lesson_id,
        limit=search_request.limit,
        threshold=search_request.threshold,
        user_id=search_request.user_id
    )


@router.get("/search/recent", response_model=List[SearchQueryLogEntry])
async def recent_searches(
    user_id: int,
    limit: int = Query(default=10, ge=1, le=100),
    service: TranscriptSearchService = Depends(get_search_service)
):
    """A user's most recent queries, newest first"""
    return await service.recent_searches(user_id, limit)


@router.get("/search/analytics", response_model=SearchAnalytics)
async def search_analytics(
    course_id: Optional[int] = None,
    service: TranscriptSearchService = Depends(get_search_service)
):
    """Total searches, unique users and the ten most popular queries"""
    return await service.analytics(course_id)
