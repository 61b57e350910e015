"""Pytest configuration and fixtures"""

import pytest
from fastapi.testclient import TestClient

from transcript_search.main import app
from transcript_search.search.config import SearchConfig
from transcript_search.search.embeddings import EmbeddingsService
from transcript_search.services.search_service import TranscriptSearchService, get_search_service


class KeywordEmbeddings(EmbeddingsService):
    """Deterministic embedder: texts mentioning the keyword point one way, the rest another"""

    provider = "keyword"
    dimensions = 3

    def __init__(self, keyword: str = "hooks"):
        self.keyword = keyword
        self.fail = False
        self.calls = 0

    async def embed(self, text):
        self.calls += 1
        if self.fail:
            raise RuntimeError("embedding backend down")
        if self.keyword in text.lower():
            return [1.0, 0.0, 0.0]
        return [0.0, 1.0, 0.0]


@pytest.fixture
def search_config():
    """Search config without simulated latency"""
    return SearchConfig(
        embedding_delay_ms=0,
        search_delay_ms=0,
        recent_delay_ms=0,
        analytics_delay_ms=0
    )


@pytest.fixture
def embeddings():
    return KeywordEmbeddings()


@pytest.fixture
def service(search_config, embeddings):
    """Service seeded from the bundled fixtures"""
    return TranscriptSearchService.from_fixtures(config=search_config, embeddings=embeddings)


@pytest.fixture
def client(service):
    """Test client fixture"""
    app.dependency_overrides[get_search_service] = lambda: service

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def hooks_transcript(length: int = 1200) -> str:
    """Transcript of roughly ``length`` characters that mentions hooks throughout"""
    words = []
    i = 0
    while len(" ".join(words)) < length:
        words.append("hooks" if i % 7 == 0 else f"word{i}")
        i += 1
    return " ".join(words)[:length]


@pytest.fixture
def make_transcript():
    return hooks_transcript
