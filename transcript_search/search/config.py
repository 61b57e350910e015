"""Search system configuration"""

from transcript_search.config import settings
from dataclasses import dataclass


@dataclass
class SearchConfig:
    """Configuration for transcript indexing and search"""

    # Embedding provider selection
    embedding_provider: str = settings.EMBEDDING_PROVIDER  # "mock" or "openai"
    embedding_dimensions: int = settings.EMBEDDING_DIMENSIONS
    embedding_delay_ms: int = settings.EMBEDDING_DELAY_MS
    embedding_seed: int = settings.EMBEDDING_SEED

    # OpenAI Settings
    openai_api_key: str = settings.OPENAI_API_KEY
    embedding_model: str = settings.OPENAI_EMBEDDING_MODEL

    # Redis Cache
    redis_url: str = settings.REDIS_URL
    enable_cache: bool = settings.EMBEDDING_CACHE_ENABLED
    cache_ttl: int = settings.EMBEDDING_CACHE_TTL

    # Chunking
    chunk_size: int = settings.SEARCH_CHUNK_SIZE
    chunk_overlap: int = settings.SEARCH_CHUNK_OVERLAP
    boundary_ratio: float = settings.SEARCH_BOUNDARY_RATIO
    seconds_per_chunk: int = settings.SEARCH_SECONDS_PER_CHUNK
    chars_per_second: int = settings.SEARCH_CHARS_PER_SECOND

    # Search
    default_limit: int = settings.SEARCH_DEFAULT_LIMIT
    default_threshold: float = settings.SEARCH_DEFAULT_THRESHOLD
    search_delay_ms: int = settings.SEARCH_DELAY_MS
    merge_gap_seconds: int = settings.SEARCH_MERGE_GAP_SECONDS
    merge_strategy: str = settings.SEARCH_MERGE_STRATEGY
    snippet_length: int = settings.SEARCH_SNIPPET_LENGTH
    snippet_context: int = settings.SEARCH_SNIPPET_CONTEXT
    logged_results: int = settings.SEARCH_LOGGED_RESULTS

    # Query log
    recent_delay_ms: int = settings.RECENT_SEARCHES_DELAY_MS
    analytics_delay_ms: int = settings.ANALYTICS_DELAY_MS

    # Fixtures
    fixtures_dir: str = settings.FIXTURES_DIR
    default_user_id: int = settings.DEFAULT_USER_ID


# Global search config instance
search_config = SearchConfig()
