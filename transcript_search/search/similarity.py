"""Cosine similarity scoring over indexed chunks"""

from typing import Iterable, List, Optional, Sequence
import math
import logging

from transcript_search.schemas.search import TranscriptChunk, RankedSnippet
from transcript_search.search.catalog import LessonCatalog
from transcript_search.search.snippets import build_snippet

logger = logging.getLogger(__name__)

UNKNOWN_LESSON_TITLE = "Unknown Lesson"


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity; 0.0 when either vector has zero magnitude"""
    if len(a) != len(b):
        raise ValueError(f"Vector length mismatch: {len(a)} != {len(b)}")

    dot = sum(x * y for x, y in zip(a, b))
    norm_a = math.sqrt(sum(x * x for x in a))
    norm_b = math.sqrt(sum(y * y for y in b))
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return dot / (norm_a * norm_b)


class SimilarityScorer:
    """Scores chunks against a query vector and renders ranked snippets"""

    def __init__(
        self,
        catalog: LessonCatalog,
        snippet_length: int = 240,
        snippet_context: int = 50
    ):
        self.catalog = catalog
        self.snippet_length = snippet_length
        self.snippet_context = snippet_context

    def filter_scope(
        self,
        chunks: Iterable[TranscriptChunk],
        lesson_id: Optional[int] = None,
        course_id: Optional[int] = None
    ) -> List[TranscriptChunk]:
        """Restrict chunks to one lesson, or to the lessons of one course"""
        if lesson_id is not None:
            return [chunk for chunk in chunks if chunk.lesson_id == lesson_id]
        if course_id is not None:
            lesson_ids = self.catalog.lesson_ids_for_course(course_id)
            return [chunk for chunk in chunks if chunk.lesson_id in lesson_ids]
        return list(chunks)

    def lesson_title(self, lesson_id: int) -> str:
        lesson = self.catalog.get_lesson(lesson_id)
        return lesson.title if lesson else UNKNOWN_LESSON_TITLE

    def score(
        self,
        query: str,
        query_vector: Sequence[float],
        chunks: Iterable[TranscriptChunk],
        threshold: float
    ) -> List[RankedSnippet]:
        """
        Score chunks against the query vector

        Args:
            query: Raw query text, used for snippet highlighting
            query_vector: Query embedding
            chunks: Candidate chunks, in scan order
            threshold: Minimum cosine similarity to keep a chunk

        Returns:
            Results with confidence >= threshold, sorted by descending
            confidence (ties keep scan order)
        """
        results = []
        scanned = 0
        for chunk in chunks:
            scanned += 1
            similarity = cosine_similarity(query_vector, chunk.embedding_vector)
            if similarity < threshold:
                continue

            results.append(RankedSnippet(
                chunk_id=chunk.id,
                lesson_id=chunk.lesson_id,
                lesson_title=self.lesson_title(chunk.lesson_id),
                start_seconds=chunk.start_seconds,
                end_seconds=chunk.end_seconds,
                text=chunk.text,
                confidence=similarity,
                snippet=build_snippet(
                    chunk.text,
                    query,
                    max_length=self.snippet_length,
                    left_context=self.snippet_context
                )
            ))

        results.sort(key=lambda result: result.confidence, reverse=True)
        logger.debug(f"Scored {scanned} chunks, {len(results)} above threshold {threshold}")
        return results
