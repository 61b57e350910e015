"""Search module - transcript chunking, embedding, scoring and query logging"""

from transcript_search.search.chunker import TranscriptChunker
from transcript_search.search.embeddings import (
    EmbeddingsService,
    MockEmbeddingsService,
    OpenAIEmbeddingsService
)
from transcript_search.search.similarity import SimilarityScorer, cosine_similarity
from transcript_search.search.snippets import build_snippet
from transcript_search.search.merger import merge_adjacent_chunks, merge_transitive
from transcript_search.search.repository import ChunkRepository, InMemoryChunkRepository
from transcript_search.search.query_log import QueryLog, InMemoryQueryLogStore
from transcript_search.search.catalog import LessonCatalog

__all__ = [
    'TranscriptChunker',
    'EmbeddingsService',
    'MockEmbeddingsService',
    'OpenAIEmbeddingsService',
    'SimilarityScorer',
    'cosine_similarity',
    'build_snippet',
    'merge_adjacent_chunks',
    'merge_transitive',
    'ChunkRepository',
    'InMemoryChunkRepository',
    'QueryLog',
    'InMemoryQueryLogStore',
    'LessonCatalog'
]
