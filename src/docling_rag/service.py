"""Ingestion and query entry points over a shared vector index.

:class:`RagService` is the seam the HTTP layer (and any other caller)
talks to. It owns no global state: build one with :func:`build_service`
at startup and pass it to whatever needs it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from docling_rag.errors import InvalidInputError
from docling_rag.ingestion.chunker import Chunker
from docling_rag.ingestion.embedder import embed_texts, get_embedding_function
from docling_rag.retrieval.memory_store import InMemoryVectorIndex
from docling_rag.retrieval.retriever import SemanticRetriever

if TYPE_CHECKING:
    from langchain_core.documents import Document
    from langchain_core.embeddings import Embeddings

    from docling_rag.config import Settings
    from docling_rag.retrieval.base import VectorStoreBase
    from docling_rag.retrieval.models import RetrievalResult

logger = logging.getLogger(__name__)


class RagService:
    """Chunk, embed and index documents; answer similarity queries.

    Parameters
    ----------
    index:
        Shared vector index. Safe to use from several threads.
    embedder:
        Embedding capability. Called outside the index lock.
    chunker:
        Text splitter applied to every ingested document.
    embedding_batch_size:
        Number of chunk texts sent to the embedder per call.
    default_min_score:
        Similarity floor used when a query does not pass its own.
    """

    def __init__(
        self,
        index: VectorStoreBase,
        embedder: Embeddings,
        chunker: Chunker | None = None,
        *,
        embedding_batch_size: int = 64,
        default_min_score: float = 0.0,
    ) -> None:
        self.index = index
        self.embedder = embedder
        self.chunker = chunker or Chunker()
        self.embedding_batch_size = embedding_batch_size
        self.retriever = SemanticRetriever(index, embedder, score_threshold=default_min_score)

    # -- ingestion ------------------------------------------------------------

    def ingest(self, document_text: str | None, document_name: str) -> int:
        """Chunk, embed and store *document_text*; return the number of chunks stored.

        Empty or absent text stores nothing and returns ``0``. Ingestion is
        all-or-nothing: every chunk is embedded before any record is
        inserted, so an embedding failure or dimension mismatch leaves the
        index exactly as it was.

        Raises
        ------
        InvalidInputError
            If *document_name* is empty.
        EmbeddingError
            If the embedder fails for any chunk.
        ConfigurationError
            If the embeddings do not match the index dimension.
        """
        if not document_name or not document_name.strip():
            raise InvalidInputError("Document name cannot be empty", field="document_name")

        logger.info("Ingesting document: %s", document_name)
        chunks = self.chunker.split(document_text, source_document=document_name)
        if not chunks:
            logger.info("Document %s has no text; nothing to ingest", document_name)
            return 0
        logger.info("Document split into %d chunks", len(chunks))

        vectors = embed_texts(self.embedder, [c.text for c in chunks], batch_size=self.embedding_batch_size)
        stored = self.index.insert_many(zip(vectors, chunks))

        logger.info("Successfully ingested %d chunks from document: %s", stored, document_name)
        return stored

    def ingest_documents(self, documents: list[Document]) -> int:
        """Ingest LangChain documents, named by their ``source`` metadata."""
        total = 0
        for i, doc in enumerate(documents):
            name = str(doc.metadata.get("source") or f"document-{i}")
            total += self.ingest(doc.page_content, name)
        return total

    # -- retrieval ------------------------------------------------------------

    def retrieve(self, query_text: str | None, max_results: int, min_score: float | None = None) -> list[str]:
        """Return the text of the *max_results* most similar chunks, best first."""
        return [r.content for r in self.retrieve_with_citations(query_text, max_results, min_score)]

    def retrieve_with_citations(
        self,
        query_text: str | None,
        max_results: int,
        min_score: float | None = None,
    ) -> list[RetrievalResult]:
        """Like :meth:`retrieve` but keep the source citation of every chunk."""
        if not query_text or not query_text.strip():
            raise InvalidInputError("Query cannot be empty", field="query")
        logger.info("Searching for relevant chunks with query: %s", query_text)
        return self.retriever.search(query_text, k=max_results, min_score=min_score)

    def stored_count(self) -> int:
        """Return the number of records currently in the index."""
        return self.index.count()


def build_service(settings: Settings) -> RagService:
    """Compose a :class:`RagService` from *settings*."""
    embedder = get_embedding_function(settings)
    dimension = settings.embedding_dimension if settings.embedding_backend == "fake" else None
    return RagService(
        index=InMemoryVectorIndex(dimension=dimension),
        embedder=embedder,
        chunker=Chunker(chunk_size=settings.chunk_size, chunk_overlap=settings.chunk_overlap),
        embedding_batch_size=settings.embedding_batch_size,
        default_min_score=settings.min_score,
    )
