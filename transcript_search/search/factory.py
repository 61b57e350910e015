"""Factory for embedding providers"""

import logging
from typing import Optional

from transcript_search.exceptions import ProviderConfigurationException
from transcript_search.search.config import search_config, SearchConfig
from transcript_search.search.embeddings import (
    EmbeddingsService,
    MockEmbeddingsService,
    OpenAIEmbeddingsService
)

logger = logging.getLogger(__name__)


class EmbeddingsFactory:
    """Factory to get the correct embeddings service based on configuration"""

    _embeddings_service: Optional[EmbeddingsService] = None

    @classmethod
    def create(cls, config: Optional[SearchConfig] = None) -> EmbeddingsService:
        """Build a new embeddings service for the configured provider"""
        config = config or search_config
        provider = config.embedding_provider.lower()

        logger.info(f"Embedding provider: {provider.upper()}")
        if provider == "mock":
            return MockEmbeddingsService(config=config)
        if provider == "openai":
            if not config.openai_api_key:
                raise ProviderConfigurationException("OPENAI_API_KEY is required for the openai provider")
            return OpenAIEmbeddingsService(config=config)

        raise ProviderConfigurationException(f"Unknown embedding provider: {config.embedding_provider}")

    @classmethod
    def get_embeddings_service(cls) -> EmbeddingsService:
        """Get the shared embeddings service, creating it on first use"""
        if cls._embeddings_service is None:
            cls._embeddings_service = cls.create()
        return cls._embeddings_service


def get_embeddings_service() -> EmbeddingsService:
    """Get the configured embeddings service"""
    return EmbeddingsFactory.get_embeddings_service()
