"""Semantic retriever — query embedding plus ranked search with citations.

Usage::

    from docling_rag.retrieval.retriever import SemanticRetriever

    retriever = SemanticRetriever(index, embedder)
    results   = retriever.search("How are documents chunked?", k=5)
    for r in results:
        print(r.citation.short_ref(), r.content[:80])
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from docling_rag.ingestion.embedder import embed_query
from docling_rag.retrieval.models import Citation, RetrievalResult, SearchHit

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

    from docling_rag.retrieval.base import VectorStoreBase

logger = logging.getLogger(__name__)


class SemanticRetriever:
    """High-level retriever over any :class:`VectorStoreBase`.

    Parameters
    ----------
    store:
        The vector index to search.
    embedder:
        Embedding capability used to turn query text into a vector. It is
        called before the index is touched, never while holding its lock.
    default_k:
        Default number of results returned by :meth:`search`.
    score_threshold:
        Default minimum similarity; results below this are discarded.
    """

    def __init__(
        self,
        store: VectorStoreBase,
        embedder: Embeddings,
        *,
        default_k: int = 5,
        score_threshold: float = 0.0,
    ) -> None:
        self._store = store
        self._embedder = embedder
        self.default_k = default_k
        self.score_threshold = score_threshold

    # -- public API -----------------------------------------------------------

    def search(
        self,
        query: str,
        *,
        k: int | None = None,
        min_score: float | None = None,
    ) -> list[RetrievalResult]:
        """Run a semantic search and return results with citations.

        Parameters
        ----------
        query:
            Natural-language query string.
        k:
            Number of results (defaults to ``self.default_k``).
        min_score:
            Similarity floor (defaults to ``self.score_threshold``).

        Returns
        -------
        list[RetrievalResult]
            Ranked results, each carrying a :class:`Citation`.
        """
        embedding = embed_query(self._embedder, query)
        return self.search_by_embedding(embedding, k=k, min_score=min_score)

    def search_by_embedding(
        self,
        embedding: Sequence[float],
        *,
        k: int | None = None,
        min_score: float | None = None,
    ) -> list[RetrievalResult]:
        """Same as :meth:`search` but accepts a pre-computed embedding."""
        k = self.default_k if k is None else k
        min_score = self.score_threshold if min_score is None else min_score
        hits = self._store.similarity_search(embedding, k=k, min_score=min_score)
        logger.info("Found %d relevant chunks", len(hits))
        return self._to_results(hits)

    # -- LangChain compat -----------------------------------------------------

    def as_langchain_retriever(self, k: int = 5) -> Any:
        """Return a thin LangChain-compatible retriever wrapper.

        LangChain's retriever classes are imported only here.
        """
        from langchain_core.documents import Document
        from langchain_core.retrievers import BaseRetriever

        outer = self

        class _LCRetriever(BaseRetriever):
            """Adapter that satisfies LangChain's retriever protocol."""

            def _get_relevant_documents(self_inner, query: str, **kwargs: Any) -> list[Document]:  # type: ignore[override]  # noqa: N805
                results = outer.search(query, k=k)
                return [
                    Document(
                        page_content=r.content,
                        metadata={
                            "source": r.citation.source,
                            "chunk_index": r.citation.chunk_index,
                            "score": r.citation.score,
                            "_citation": r.citation.model_dump(),
                        },
                    )
                    for r in results
                ]

        return _LCRetriever()

    # -- internals ------------------------------------------------------------

    @staticmethod
    def _to_results(hits: list[SearchHit]) -> list[RetrievalResult]:
        return [RetrievalResult(content=hit.chunk.text, citation=Citation.from_hit(hit)) for hit in hits]
