"""Embedding capability — text to fixed-length vector.

The core only depends on LangChain's :class:`~langchain_core.embeddings.Embeddings`
interface (``embed_query`` / ``embed_documents``). Which implementation
backs it is chosen once, at service construction, by
:func:`get_embedding_function`.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from langchain_core.embeddings import DeterministicFakeEmbedding, Embeddings

from docling_rag.errors import ConfigurationError, EmbeddingError

if TYPE_CHECKING:
    from docling_rag.config import Settings

logger = logging.getLogger(__name__)


def get_embedding_function(settings: Settings) -> Embeddings:
    """Return the embedding backend selected by ``settings.embedding_backend``."""
    if settings.embedding_backend == "fake":
        logger.info("Using deterministic fake embeddings (dim=%d)", settings.embedding_dimension)
        return DeterministicFakeEmbedding(size=settings.embedding_dimension)
    if settings.embedding_backend == "huggingface":
        # Imported lazily: pulls in sentence-transformers and torch.
        from langchain_huggingface import HuggingFaceEmbeddings

        logger.info("Loading HuggingFace embedding model %s", settings.embedding_model)
        return HuggingFaceEmbeddings(model_name=settings.embedding_model)
    raise ConfigurationError(
        f"Unknown embedding backend: {settings.embedding_backend!r}",
        {"embedding_backend": settings.embedding_backend},
    )


def embed_texts(
    embedder: Embeddings,
    texts: Sequence[str],
    batch_size: int = 64,
) -> list[list[float]]:
    """Embed *texts* in batches, preserving order.

    Raises
    ------
    EmbeddingError
        If the backend raises, or returns a different number of vectors
        than it was given texts.
    """
    vectors: list[list[float]] = []
    for offset in range(0, len(texts), batch_size):
        batch = list(texts[offset : offset + batch_size])
        try:
            result = embedder.embed_documents(batch)
        except Exception as exc:
            raise EmbeddingError(
                f"Embedding backend failed: {exc}",
                {"batch_start": offset, "batch_size": len(batch)},
            ) from exc
        if len(result) != len(batch):
            raise EmbeddingError(
                "Embedding backend returned the wrong number of vectors",
                {"expected": len(batch), "received": len(result)},
            )
        vectors.extend(result)
    return vectors


def embed_query(embedder: Embeddings, text: str) -> list[float]:
    """Embed a single query string."""
    try:
        return embedder.embed_query(text)
    except Exception as exc:
        raise EmbeddingError(f"Embedding backend failed: {exc}") from exc
