"""Append-only search query log with recent-search and analytics reads"""

from abc import ABC, abstractmethod
from collections import Counter
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence
import itertools
import logging
import threading

from transcript_search.schemas.search import (
    SearchQueryLogEntry,
    SearchAnalytics,
    PopularQuery
)

logger = logging.getLogger(__name__)

POPULAR_QUERY_COUNT = 10


class QueryLogStore(ABC):
    """Storage for logged queries"""

    @abstractmethod
    def append(self, entry: SearchQueryLogEntry):
        """Store one entry"""

    @abstractmethod
    def all(self) -> List[SearchQueryLogEntry]:
        """Snapshot of all entries in insertion order"""

    @abstractmethod
    def next_id(self) -> int:
        """Allocate the next entry id"""


class InMemoryQueryLogStore(QueryLogStore):
    """Process-local entry list guarded by a lock"""

    def __init__(self, seed_entries: Optional[Iterable[SearchQueryLogEntry]] = None):
        self._entries: List[SearchQueryLogEntry] = list(seed_entries or [])
        self._lock = threading.RLock()
        self._ids = itertools.count(max((entry.id for entry in self._entries), default=0) + 1)

    def append(self, entry: SearchQueryLogEntry):
        with self._lock:
            self._entries.append(entry)

    def all(self) -> List[SearchQueryLogEntry]:
        with self._lock:
            return list(self._entries)

    def next_id(self) -> int:
        with self._lock:
            return next(self._ids)


class QueryLog:
    """Best-effort query log; writing never fails the caller"""

    def __init__(self, store: Optional[QueryLogStore] = None):
        self.store = store or InMemoryQueryLogStore()

    def log(
        self,
        user_id: int,
        query_text: str,
        course_id: Optional[int] = None,
        top_result_ids: Sequence[int] = ()
    ) -> Optional[SearchQueryLogEntry]:
        """
        Append a query to the log

        Returns:
            The stored entry, or None if the store failed
        """
        try:
            entry = SearchQueryLogEntry(
                id=self.store.next_id(),
                user_id=user_id,
                course_id=course_id,
                query_text=query_text,
                created_at=datetime.now(timezone.utc),
                top_result_ids=list(top_result_ids)
            )
            self.store.append(entry)
            logger.debug(f"Logged query {entry.id} for user {user_id}")
            return entry
        except Exception:
            logger.exception(f"Query logging error for user {user_id}")
            return None

    def recent(self, user_id: int, limit: int = 10) -> List[SearchQueryLogEntry]:
        """User's queries, newest first"""
        entries = [entry for entry in self.store.all() if entry.user_id == user_id]
        entries.sort(key=lambda entry: (entry.created_at, entry.id), reverse=True)
        return entries[:limit]

    def analytics(self, course_id: Optional[int] = None) -> SearchAnalytics:
        """Totals and the most frequent query strings, optionally for one course"""
        entries = self.store.all()
        if course_id is not None:
            entries = [entry for entry in entries if entry.course_id == course_id]

        counts = Counter(entry.query_text for entry in entries)
        return SearchAnalytics(
            total_searches=len(entries),
            unique_users=len({entry.user_id for entry in entries}),
            popular_queries=[
                PopularQuery(query=query, count=count)
                for query, count in counts.most_common(POPULAR_QUERY_COUNT)
            ]
        )
