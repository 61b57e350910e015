"""Lesson transcript indexing endpoints"""

from fastapi import APIRouter, Depends
from typing import List
import logging

from transcript_search.schemas.search import (
    IndexTranscriptRequest,
    IndexTranscriptResponse,
    TranscriptChunkResponse
)
from transcript_search.services.search_service import TranscriptSearchService, get_search_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/lessons/{lesson_id}/transcript", response_model=IndexTranscriptResponse)
async def index_transcript(
    lesson_id: int,
    request: IndexTranscriptRequest,
    service: TranscriptSearchService = Depends(get_search_service)
):
    """Replace the lesson's indexed chunks with a fresh chunking of the transcript"""
    chunk_count = await service.index_transcript(
        lesson_id,
        request.transcript_text,
        request.timecodes
    )
    return IndexTranscriptResponse(lesson_id=lesson_id, chunk_count=chunk_count)


@router.get("/lessons/{lesson_id}/chunks", response_model=List[TranscriptChunkResponse])
async def list_lesson_chunks(
    lesson_id: int,
    service: TranscriptSearchService = Depends(get_search_service)
):
    """Indexed chunks of a lesson, without vectors"""
    return [
        TranscriptChunkResponse.model_validate(chunk, from_attributes=True)
        for chunk in service.get_lesson_chunks(lesson_id)
    ]
