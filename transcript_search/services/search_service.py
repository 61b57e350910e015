"""Transcript indexing and search service"""

from collections import defaultdict
from datetime import timezone
from functools import lru_cache
from typing import Dict, List, Optional, Sequence
import asyncio
import logging

from transcript_search.exceptions import IndexingFailure, SearchFailure, ValidationException
from transcript_search.schemas.search import (
    RankedSnippet,
    SearchAnalytics,
    SearchQueryLogEntry,
    TranscriptChunk
)
from transcript_search.search.catalog import LessonCatalog, load_fixture
from transcript_search.search.chunker import TranscriptChunker, TimecodeLike
from transcript_search.search.config import search_config, SearchConfig
from transcript_search.search.embeddings import EmbeddingsService
from transcript_search.search.factory import EmbeddingsFactory, get_embeddings_service
from transcript_search.search.merger import merge_results
from transcript_search.search.query_log import QueryLog, InMemoryQueryLogStore
from transcript_search.search.repository import ChunkRepository, InMemoryChunkRepository
from transcript_search.search.similarity import SimilarityScorer

logger = logging.getLogger(__name__)


class CancellationToken:
    """Caller-side flag checked between search phases"""

    def __init__(self):
        self._cancelled = False

    def cancel(self):
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def raise_if_cancelled(self):
        if self._cancelled:
            raise asyncio.CancelledError("Search superseded")


class TranscriptSearchService:
    """Index lesson transcripts and run logged similarity searches over them"""

    def __init__(
        self,
        embeddings: EmbeddingsService,
        catalog: Optional[LessonCatalog] = None,
        repository: Optional[ChunkRepository] = None,
        query_log: Optional[QueryLog] = None,
        config: Optional[SearchConfig] = None
    ):
        self.config = config or search_config
        self.embeddings = embeddings
        self.catalog = catalog or LessonCatalog()
        self.repository = repository or InMemoryChunkRepository()
        self.query_log = query_log or QueryLog()
        self._index_locks: Dict[int, asyncio.Lock] = defaultdict(asyncio.Lock)
        self.chunker = TranscriptChunker(config=self.config)
        self.scorer = SimilarityScorer(
            self.catalog,
            snippet_length=self.config.snippet_length,
            snippet_context=self.config.snippet_context
        )

    @classmethod
    def from_fixtures(
        cls,
        config: Optional[SearchConfig] = None,
        embeddings: Optional[EmbeddingsService] = None
    ) -> "TranscriptSearchService":
        """Build a service seeded from the fixtures directory"""
        config = config or search_config
        fixtures_dir = config.fixtures_dir

        seed_chunks = [
            TranscriptChunk.model_validate(item)
            for item in load_fixture(fixtures_dir, "transcript_chunks.json")
        ]
        seed_queries = []
        for item in load_fixture(fixtures_dir, "search_queries.json"):
            entry = SearchQueryLogEntry.model_validate(item)
            if entry.created_at.tzinfo is None:
                entry.created_at = entry.created_at.replace(tzinfo=timezone.utc)
            seed_queries.append(entry)

        logger.info(f"Seeded {len(seed_chunks)} chunks and {len(seed_queries)} logged queries")
        return cls(
            embeddings=embeddings or EmbeddingsFactory.create(config),
            catalog=LessonCatalog.from_fixtures(fixtures_dir),
            repository=InMemoryChunkRepository(seed_chunks),
            query_log=QueryLog(InMemoryQueryLogStore(seed_queries)),
            config=config
        )

    async def index_transcript(
        self,
        lesson_id: int,
        transcript_text: str,
        timecodes: Optional[Sequence[TimecodeLike]] = None
    ) -> int:
        """
        Replace a lesson's chunks with a fresh chunking of its transcript

        Existing chunks are removed first and are not restored if chunking
        or embedding fails afterwards. Reindexes of the same lesson run one
        at a time, in the order they were requested.

        Args:
            lesson_id: Lesson to (re)index
            transcript_text: Full transcript text
            timecodes: Optional per-chunk start times

        Returns:
            Number of chunks stored
        """
        try:
            async with self._index_locks[lesson_id]:
                removed = self.repository.delete_by_lesson(lesson_id)
                windows = self.chunker.chunk_transcript(transcript_text, timecodes)
                vectors = await self.embeddings.embed_batch([window.text for window in windows])
                chunks = self.repository.replace_lesson(lesson_id, windows, vectors)
        except asyncio.CancelledError:
            logger.warning(f"Indexing of lesson {lesson_id} cancelled")
            raise
        except Exception as e:
            logger.error(f"Indexing error for lesson {lesson_id}: {e}", exc_info=True)
            raise IndexingFailure("Transcript indexing failed") from e

        logger.info(f"Indexed lesson {lesson_id}: {len(chunks)} chunks (replaced {removed})")
        return len(chunks)

    async def search(
        self,
        query: str,
        course_id: Optional[int] = None,
        lesson_id: Optional[int] = None,
        limit: Optional[int] = None,
        threshold: Optional[float] = None,
        user_id: Optional[int] = None,
        cancel_token: Optional[CancellationToken] = None
    ) -> List[RankedSnippet]:
        """
        Search indexed transcripts

        Args:
            query: Free-text query
            course_id: Restrict to lessons of this course
            lesson_id: Restrict to this lesson (takes precedence over course_id)
            limit: Maximum number of passages returned
            threshold: Minimum cosine similarity
            user_id: Issuer recorded in the query log
            cancel_token: Optional token to abandon a superseded search

        Returns:
            Merged passages sorted by descending confidence
        """
        if not query or not query.strip():
            return []

        limit = limit if limit is not None else self.config.default_limit
        threshold = threshold if threshold is not None else self.config.default_threshold
        user_id = user_id if user_id is not None else self.config.default_user_id
        if limit < 1:
            raise ValidationException(f"limit must be at least 1, got {limit}")

        try:
            await self._simulate_latency(self.config.search_delay_ms)
            if cancel_token:
                cancel_token.raise_if_cancelled()

            logger.info(f"Searching transcripts for: {query[:50]}")
            query_vector = await self.embeddings.embed(query)
            if cancel_token:
                cancel_token.raise_if_cancelled()

            candidates = self.scorer.filter_scope(
                self.repository.scan(),
                lesson_id=lesson_id,
                course_id=course_id
            )
            results = self.scorer.score(query, query_vector, candidates, threshold)
            merged = merge_results(
                results,
                gap_seconds=self.config.merge_gap_seconds,
                strategy=self.config.merge_strategy
            )
        except asyncio.CancelledError:
            logger.info(f"Search cancelled: {query[:50]}")
            raise
        except Exception as e:
            logger.error(f"Search error: {e}", exc_info=True)
            raise SearchFailure("Search failed") from e

        self.query_log.log(
            user_id=user_id,
            query_text=query,
            course_id=course_id,
            top_result_ids=[result.chunk_id for result in merged[:self.config.logged_results]]
        )

        logger.info(
            f"Search matched {len(results)} chunks in {len(candidates)} candidates, "
            f"{len(merged)} passages"
        )
        return merged[:limit]

    async def recent_searches(self, user_id: int, limit: int = 10) -> List[SearchQueryLogEntry]:
        """User's most recent queries, newest first"""
        if limit < 1:
            raise ValidationException(f"limit must be at least 1, got {limit}")
        await self._simulate_latency(self.config.recent_delay_ms)
        return self.query_log.recent(user_id, limit)

    async def analytics(self, course_id: Optional[int] = None) -> SearchAnalytics:
        """Search totals and popular queries"""
        await self._simulate_latency(self.config.analytics_delay_ms)
        return self.query_log.analytics(course_id)

    def get_lesson_chunks(self, lesson_id: int) -> List[TranscriptChunk]:
        """Currently indexed chunks of one lesson"""
        return [chunk for chunk in self.repository.scan() if chunk.lesson_id == lesson_id]

    @staticmethod
    async def _simulate_latency(delay_ms: int):
        if delay_ms:
            await asyncio.sleep(delay_ms / 1000)


class LatestSearchRunner:
    """Runs searches so that a newer query cancels the one still in flight"""

    def __init__(self, service: TranscriptSearchService):
        self.service = service
        self._task: Optional[asyncio.Task] = None
        self._token: Optional[CancellationToken] = None

    async def run(self, query: str, **options) -> List[RankedSnippet]:
        """
        Start a search, cancelling the previous one if it has not finished

        Raises:
            asyncio.CancelledError: when this search is superseded
        """
        self.cancel()

        self._token = CancellationToken()
        self._task = asyncio.create_task(
            self.service.search(query, cancel_token=self._token, **options)
        )
        return await self._task

    def cancel(self):
        """Cancel the in-flight search, if any"""
        if self._token is not None:
            self._token.cancel()
        if self._task is not None and not self._task.done():
            self._task.cancel()


@lru_cache
def get_search_service() -> TranscriptSearchService:
    """Shared service instance, seeded from fixtures on first use"""
    return TranscriptSearchService.from_fixtures(embeddings=get_embeddings_service())
