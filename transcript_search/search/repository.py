"""Chunk store interface and in-memory implementation"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional
import itertools
import logging
import threading

from transcript_search.schemas.search import TextWindow, TranscriptChunk

logger = logging.getLogger(__name__)


class ChunkRepository(ABC):
    """Storage for indexed transcript chunks"""

    @abstractmethod
    def insert(self, lesson_id: int, windows: List[TextWindow], vectors: List[List[float]]) -> List[TranscriptChunk]:
        """Store windows with their vectors, assigning chunk ids"""

    @abstractmethod
    def delete_by_lesson(self, lesson_id: int) -> int:
        """Remove every chunk of a lesson, returning how many were removed"""

    @abstractmethod
    def replace_lesson(self, lesson_id: int, windows: List[TextWindow], vectors: List[List[float]]) -> List[TranscriptChunk]:
        """Delete a lesson's chunks and insert new ones in one step"""

    @abstractmethod
    def scan(self) -> List[TranscriptChunk]:
        """Snapshot of all chunks in insertion order"""

    def count(self) -> int:
        return len(self.scan())


class InMemoryChunkRepository(ChunkRepository):
    """Process-local chunk list guarded by a lock"""

    def __init__(self, seed_chunks: Optional[Iterable[TranscriptChunk]] = None):
        self._chunks: List[TranscriptChunk] = list(seed_chunks or [])
        self._lock = threading.RLock()
        next_id = max((chunk.id for chunk in self._chunks), default=0) + 1
        self._ids = itertools.count(next_id)

    def insert(self, lesson_id: int, windows: List[TextWindow], vectors: List[List[float]]) -> List[TranscriptChunk]:
        if len(windows) != len(vectors):
            raise ValueError(f"Got {len(windows)} windows but {len(vectors)} vectors")

        with self._lock:
            chunks = [
                TranscriptChunk(
                    id=next(self._ids),
                    lesson_id=lesson_id,
                    start_seconds=window.start_seconds,
                    end_seconds=window.end_seconds,
                    text=window.text,
                    embedding_vector=vector
                )
                for window, vector in zip(windows, vectors)
            ]
            self._chunks.extend(chunks)

        logger.debug(f"Inserted {len(chunks)} chunks for lesson {lesson_id}")
        return chunks

    def delete_by_lesson(self, lesson_id: int) -> int:
        with self._lock:
            before = len(self._chunks)
            self._chunks = [chunk for chunk in self._chunks if chunk.lesson_id != lesson_id]
            removed = before - len(self._chunks)

        if removed:
            logger.debug(f"Deleted {removed} chunks for lesson {lesson_id}")
        return removed

    def replace_lesson(self, lesson_id: int, windows: List[TextWindow], vectors: List[List[float]]) -> List[TranscriptChunk]:
        with self._lock:
            self.delete_by_lesson(lesson_id)
            return self.insert(lesson_id, windows, vectors)

    def scan(self) -> List[TranscriptChunk]:
        with self._lock:
            return list(self._chunks)

    def count(self) -> int:
        with self._lock:
            return len(self._chunks)
