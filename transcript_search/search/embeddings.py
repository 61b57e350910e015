"""Embedding services (mock random vectors and OpenAI)"""

from abc import ABC, abstractmethod
from typing import List, Optional
import asyncio
import hashlib
import json
import logging
import random

import redis
from openai import AsyncOpenAI

from transcript_search.exceptions import EmbeddingException
from transcript_search.search.config import search_config, SearchConfig

logger = logging.getLogger(__name__)


class EmbeddingsService(ABC):
    """Text in, fixed-length float vector out"""

    provider: str = "base"
    dimensions: int = 0

    @abstractmethod
    async def embed(self, text: str) -> List[float]:
        """Generate the embedding for one text"""

    async def embed_batch(self, texts: List[str]) -> List[List[float]]:
        """Generate embeddings for several texts, in order"""
        return [await self.embed(text) for text in texts]


class MockEmbeddingsService(EmbeddingsService):
    """
    Random-vector embedder.

    Every call sleeps ``delay_ms`` to mimic a network round trip and returns
    uniform noise in [-0.5, 0.5) regardless of the input text, so the
    similarity scores it enables carry no meaning.
    """

    provider = "mock"

    def __init__(
        self,
        dimensions: Optional[int] = None,
        delay_ms: Optional[int] = None,
        seed: Optional[int] = None,
        config: Optional[SearchConfig] = None
    ):
        config = config or search_config
        self.dimensions = dimensions if dimensions is not None else config.embedding_dimensions
        self.delay_ms = delay_ms if delay_ms is not None else config.embedding_delay_ms
        if seed is None and config.embedding_seed >= 0:
            seed = config.embedding_seed
        self._random = random.Random(seed)

        logger.warning(
            "Mock embeddings enabled: vectors are random noise, search scores are not semantic"
        )

    async def embed(self, text: str) -> List[float]:
        if self.delay_ms:
            await asyncio.sleep(self.delay_ms / 1000)
        return [self._random.random() - 0.5 for _ in range(self.dimensions)]


class OpenAIEmbeddingsService(EmbeddingsService):
    """Service for generating embeddings using OpenAI, cached in Redis"""

    provider = "openai"

    def __init__(
        self,
        config: Optional[SearchConfig] = None,
        client: Optional[AsyncOpenAI] = None,
        redis_client: Optional[redis.Redis] = None
    ):
        config = config or search_config
        self.client = client or AsyncOpenAI(api_key=config.openai_api_key)
        self.model = config.embedding_model
        self.dimensions = config.embedding_dimensions
        self.cache_ttl = config.cache_ttl

        # Redis cache for embeddings
        self.cache_enabled = config.enable_cache
        self.redis_client = redis_client
        if self.cache_enabled and self.redis_client is None:
            try:
                self.redis_client = redis.from_url(
                    config.redis_url,
                    decode_responses=False  # Store bytes for embeddings
                )
                logger.info("Redis cache enabled for embeddings")
            except Exception as e:
                logger.warning(f"Failed to connect to Redis cache: {e}")
                self.cache_enabled = False

    def _get_cache_key(self, text: str) -> str:
        """Generate cache key for text"""
        return f"emb:{self.model}:{self.dimensions}:{hashlib.md5(text.encode()).hexdigest()}"

    def _get_from_cache(self, text: str) -> Optional[List[float]]:
        """Get embedding from cache"""
        if not self.cache_enabled:
            return None

        try:
            cached = self.redis_client.get(self._get_cache_key(text))
            if cached:
                logger.debug("Cache hit for embedding")
                return json.loads(cached)
        except Exception as e:
            logger.warning(f"Cache retrieval error: {e}")

        return None

    def _save_to_cache(self, text: str, embedding: List[float]):
        """Save embedding to cache"""
        if not self.cache_enabled:
            return

        try:
            self.redis_client.setex(
                self._get_cache_key(text),
                self.cache_ttl,
                json.dumps(embedding)
            )
            logger.debug("Cached embedding")
        except Exception as e:
            logger.warning(f"Cache save error: {e}")

    def cache_available(self) -> bool:
        """Check if the Redis cache answers"""
        if not self.cache_enabled:
            return False
        try:
            return bool(self.redis_client.ping())
        except Exception as e:
            logger.warning(f"Redis ping failed: {e}")
            return False

    async def embed(self, text: str) -> List[float]:
        cached = self._get_from_cache(text)
        if cached:
            return cached

        try:
            response = await self.client.embeddings.create(
                model=self.model,
                input=text,
                dimensions=self.dimensions
            )
        except Exception as e:
            logger.error(f"Error generating embedding: {e}")
            raise EmbeddingException(f"Embedding request failed: {e}") from e

        embedding = response.data[0].embedding
        self._save_to_cache(text, embedding)

        logger.debug(f"Generated embedding for text of length {len(text)}")
        return embedding

    async def embed_batch(self, texts: List[str]) -> List[List[float]]:
        if not texts:
            return []

        embeddings: List[Optional[List[float]]] = [self._get_from_cache(text) for text in texts]
        missing = [i for i, embedding in enumerate(embeddings) if not embedding]

        if missing:
            try:
                response = await self.client.embeddings.create(
                    model=self.model,
                    input=[texts[i] for i in missing],
                    dimensions=self.dimensions
                )
            except Exception as e:
                logger.error(f"Error generating batch embeddings: {e}")
                raise EmbeddingException(f"Batch embedding request failed: {e}") from e

            for i, item in zip(missing, response.data):
                embeddings[i] = item.embedding
                self._save_to_cache(texts[i], item.embedding)

        logger.info(
            f"Generated {len(missing)} embeddings in batch ({len(texts) - len(missing)} cached)"
        )
        return embeddings
