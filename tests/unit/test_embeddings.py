"""Test embedding services and provider selection"""

import asyncio
from types import SimpleNamespace

import pytest

from transcript_search.exceptions import EmbeddingException, ProviderConfigurationException
from transcript_search.search.config import SearchConfig
from transcript_search.search.embeddings import MockEmbeddingsService, OpenAIEmbeddingsService
from transcript_search.search.factory import EmbeddingsFactory, get_embeddings_service


class FakeEmbeddingsAPI:
    def __init__(self, fail=False):
        self.fail = fail
        self.requests = []

    async def create(self, model, input, dimensions):
        self.requests.append(input)
        if self.fail:
            raise RuntimeError("rate limited")
        texts = input if isinstance(input, list) else [input]
        return SimpleNamespace(data=[
            SimpleNamespace(embedding=[float(len(text))] * dimensions)
            for text in texts
        ])


class FakeRedis:
    def __init__(self):
        self.values = {}

    def get(self, key):
        return self.values.get(key)

    def setex(self, key, ttl, value):
        self.values[key] = value

    def ping(self):
        return True


def make_openai_service(fail=False, enable_cache=True):
    config = SearchConfig(embedding_dimensions=4, enable_cache=enable_cache, embedding_model="test-model")
    api = FakeEmbeddingsAPI(fail=fail)
    service = OpenAIEmbeddingsService(
        config=config,
        client=SimpleNamespace(embeddings=api),
        redis_client=FakeRedis()
    )
    return service, api


def test_mock_embedding_has_fixed_length_and_range():
    service = MockEmbeddingsService(dimensions=384, delay_ms=0, seed=1)
    vector = asyncio.run(service.embed("anything"))

    assert len(vector) == 384
    assert all(-0.5 <= value < 0.5 for value in vector)


def test_mock_embedding_ignores_text_content():
    first = MockEmbeddingsService(dimensions=8, delay_ms=0, seed=42)
    second = MockEmbeddingsService(dimensions=8, delay_ms=0, seed=42)

    assert asyncio.run(first.embed("react hooks")) == asyncio.run(second.embed("pricing"))


def test_mock_batch_returns_one_vector_per_text():
    service = MockEmbeddingsService(dimensions=8, delay_ms=0)
    vectors = asyncio.run(service.embed_batch(["a", "b", "c"]))

    assert len(vectors) == 3
    assert all(len(v) == 8 for v in vectors)


def test_openai_embedding_is_cached_by_content():
    service, api = make_openai_service()

    first = asyncio.run(service.embed("hooks"))
    second = asyncio.run(service.embed("hooks"))

    assert first == second == [5.0] * 4
    assert len(api.requests) == 1


def test_openai_batch_only_requests_uncached_texts():
    service, api = make_openai_service()
    asyncio.run(service.embed("cached"))

    vectors = asyncio.run(service.embed_batch(["cached", "fresh one"]))

    assert vectors == [[6.0] * 4, [9.0] * 4]
    assert api.requests[-1] == ["fresh one"]


def test_openai_failure_raises_embedding_exception():
    service, _ = make_openai_service(fail=True, enable_cache=False)

    with pytest.raises(EmbeddingException):
        asyncio.run(service.embed("hooks"))


def test_factory_defaults_to_mock():
    service = EmbeddingsFactory.create(SearchConfig(embedding_provider="mock", embedding_delay_ms=0))
    assert isinstance(service, MockEmbeddingsService)


def test_factory_rejects_unknown_provider():
    with pytest.raises(ProviderConfigurationException):
        EmbeddingsFactory.create(SearchConfig(embedding_provider="word2vec"))


def test_factory_requires_openai_key():
    with pytest.raises(ProviderConfigurationException):
        EmbeddingsFactory.create(SearchConfig(embedding_provider="openai", openai_api_key=""))


def test_shared_embeddings_service_is_created_once(monkeypatch):
    monkeypatch.setattr(EmbeddingsFactory, "_embeddings_service", None)
    monkeypatch.setattr(
        "transcript_search.search.factory.search_config",
        SearchConfig(embedding_provider="mock", embedding_delay_ms=0)
    )

    first = get_embeddings_service()

    assert isinstance(first, MockEmbeddingsService)
    assert get_embeddings_service() is first
