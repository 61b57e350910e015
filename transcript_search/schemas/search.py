"""Transcript search schemas"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime


class Timecode(BaseModel):
    """Transcript timecode entry; entry N supplies the start of chunk N"""
    start_seconds: Optional[int] = Field(default=None, ge=0)
    end_seconds: Optional[int] = Field(default=None, ge=0)
    text: Optional[str] = None


class TextWindow(BaseModel):
    """Chunker output window"""
    text: str
    start_seconds: int
    end_seconds: int


class TranscriptChunk(BaseModel):
    """Indexed transcript chunk"""
    id: int
    lesson_id: int
    start_seconds: int = Field(ge=0)
    end_seconds: int = Field(ge=0)
    text: str
    embedding_vector: List[float]


class TranscriptChunkResponse(BaseModel):
    """Indexed chunk without its embedding vector"""
    id: int
    lesson_id: int
    start_seconds: int
    end_seconds: int
    text: str

    model_config = ConfigDict(from_attributes=True)


class RankedSnippet(BaseModel):
    """Search result"""
    chunk_id: int
    lesson_id: int
    lesson_title: str
    start_seconds: int
    end_seconds: int
    text: str
    confidence: float
    snippet: str


class SearchQueryLogEntry(BaseModel):
    """Logged search query"""
    id: int
    user_id: int
    course_id: Optional[int] = None
    query_text: str
    created_at: datetime
    top_result_ids: List[int] = Field(default_factory=list)


class PopularQuery(BaseModel):
    """Query string with its frequency"""
    query: str
    count: int


class SearchAnalytics(BaseModel):
    """Aggregate search analytics"""
    total_searches: int
    unique_users: int
    popular_queries: List[PopularQuery]


class SearchRequest(BaseModel):
    """Search request schema"""
    query: str
    course_id: Optional[int] = None
    lesson_id: Optional[int] = None
    limit: int = Field(default=20, ge=1, le=100)
    threshold: float = Field(default=0.55, ge=-1.0, le=1.0)
    user_id: Optional[int] = None


class IndexTranscriptRequest(BaseModel):
    """Index (or reindex) a lesson transcript"""
    transcript_text: str
    timecodes: List[Timecode] = Field(default_factory=list)


class IndexTranscriptResponse(BaseModel):
    """Index result"""
    lesson_id: int
    chunk_count: int
