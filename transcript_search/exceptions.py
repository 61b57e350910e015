"""Custom exception classes"""


class TranscriptSearchException(Exception):
    """Base exception for transcript search"""
    pass


class IndexingFailure(TranscriptSearchException):
    """Transcript chunking or embedding failed during reindex"""
    pass


class SearchFailure(TranscriptSearchException):
    """Query embedding or scoring failed"""
    pass


class EmbeddingException(TranscriptSearchException):
    """Embedding provider errors (OpenAI)"""
    pass


class ValidationException(TranscriptSearchException):
    """Validation errors"""
    pass


class ProviderConfigurationException(TranscriptSearchException):
    """Unknown or misconfigured embedding provider"""
    pass
