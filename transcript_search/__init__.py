"""Semantic search over lesson transcripts"""

__version__ = "1.0.0"
