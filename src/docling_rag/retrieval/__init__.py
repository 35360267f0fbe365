"""
Retrieval — the vector index, cosine ranking, and context assembly.

This module wraps the index behind a clean interface so that callers
never need to know which backend is doing the search.

Public surface
--------------
- :class:`SemanticRetriever` — main entry point for retrieval with citations.
- :class:`VectorStoreBase` — abstract backend.
- :class:`InMemoryVectorIndex` — default thread-safe in-memory backend.
- :class:`Chunk`, :class:`SearchHit`, :class:`Citation`, :class:`RetrievalResult` — data models.
"""

from docling_rag.retrieval.base import VectorStoreBase
from docling_rag.retrieval.memory_store import InMemoryVectorIndex
from docling_rag.retrieval.models import Chunk, Citation, RetrievalResult, SearchHit, VectorRecord
from docling_rag.retrieval.retriever import SemanticRetriever

__all__ = [
    "Chunk",
    "Citation",
    "InMemoryVectorIndex",
    "RetrievalResult",
    "SearchHit",
    "SemanticRetriever",
    "VectorRecord",
    "VectorStoreBase",
]
