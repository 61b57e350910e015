"""Application configuration"""

from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from functools import lru_cache
from pathlib import Path

# Get the project directory (parent of the package directory)
PACKAGE_DIR = Path(__file__).parent
PROJECT_DIR = PACKAGE_DIR.parent
ENV_FILE = PROJECT_DIR / ".env"


class Settings(BaseSettings):
    """Application settings"""

    # Application
    APP_NAME: str = "Lesson Transcript Search"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # Static fixtures (lessons, modules, courses, seed query log)
    FIXTURES_DIR: str = str(PACKAGE_DIR / "fixtures")
    DEFAULT_USER_ID: int = 1

    # Embeddings
    EMBEDDING_PROVIDER: str = "mock"  # "mock" or "openai"
    EMBEDDING_DIMENSIONS: int = 384
    EMBEDDING_DELAY_MS: int = 100
    EMBEDDING_SEED: int = -1  # -1 means unseeded

    # OpenAI
    OPENAI_API_KEY: str = ""
    OPENAI_EMBEDDING_MODEL: str = "text-embedding-3-small"

    # Redis (embedding cache)
    REDIS_URL: str = "redis://localhost:6379/0"
    EMBEDDING_CACHE_ENABLED: bool = True
    EMBEDDING_CACHE_TTL: int = 86400

    # Chunking
    SEARCH_CHUNK_SIZE: int = 500
    SEARCH_CHUNK_OVERLAP: int = 100
    SEARCH_BOUNDARY_RATIO: float = 0.8
    SEARCH_SECONDS_PER_CHUNK: int = 30
    SEARCH_CHARS_PER_SECOND: int = 10

    # Search
    SEARCH_DEFAULT_LIMIT: int = 20
    SEARCH_DEFAULT_THRESHOLD: float = 0.55
    SEARCH_DELAY_MS: int = 300
    SEARCH_MERGE_GAP_SECONDS: int = 5
    SEARCH_MERGE_STRATEGY: str = "sequential"  # "sequential" or "transitive"
    SEARCH_SNIPPET_LENGTH: int = 240
    SEARCH_SNIPPET_CONTEXT: int = 50
    SEARCH_LOGGED_RESULTS: int = 5

    # Query log
    RECENT_SEARCHES_DELAY_MS: int = 100
    ANALYTICS_DELAY_MS: int = 200

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"  # "text" or "json"

    model_config = ConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding='utf-8',
        case_sensitive=True,
        extra="ignore"  # Ignore extra fields in .env
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
