"""Unit tests for the ingestion / query entry points."""

from __future__ import annotations

import pytest
from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings

from docling_rag.config import Settings
from docling_rag.errors import ConfigurationError, EmbeddingError, InvalidInputError
from docling_rag.ingestion.chunker import Chunker
from docling_rag.retrieval.memory_store import InMemoryVectorIndex
from docling_rag.service import RagService, build_service


class FlakyEmbeddings(Embeddings):
    """Embeds normally for *ok_calls* batches, then fails."""

    def __init__(self, ok_calls: int) -> None:
        self.ok_calls = ok_calls
        self.calls = 0

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        self.calls += 1
        if self.calls > self.ok_calls:
            raise TimeoutError("embedding service timed out")
        return [[1.0, float(len(t))] for t in texts]

    def embed_query(self, text: str) -> list[float]:
        return [1.0, 0.0]


class FixedEmbeddings(Embeddings):
    def __init__(self, dimension: int) -> None:
        self.dimension = dimension

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return [[1.0] * self.dimension for _ in texts]

    def embed_query(self, text: str) -> list[float]:
        return [1.0] * self.dimension


@pytest.fixture()
def service(keyword_embedder) -> RagService:
    return RagService(InMemoryVectorIndex(), keyword_embedder, Chunker(chunk_size=40, chunk_overlap=5))


# ── Ingestion ───────────────────────────────────────────────────────────


class TestIngest:
    def test_returns_number_of_chunks_stored(self, service: RagService) -> None:
        stored = service.ingest("The cat sat. The dog ran. The fish swam. The bird flew away.", "animals.md")
        assert stored > 1
        assert service.stored_count() == stored

    def test_empty_text_stores_nothing(self, service: RagService) -> None:
        assert service.ingest("", "empty.md") == 0
        assert service.ingest(None, "empty.md") == 0
        assert service.stored_count() == 0

    def test_empty_name_is_invalid(self, service: RagService) -> None:
        with pytest.raises(InvalidInputError):
            service.ingest("some text", "  ")

    def test_count_accumulates_across_documents(self, service: RagService) -> None:
        first = service.ingest("cat " * 30, "a.md")
        second = service.ingest("dog " * 30, "b.md")
        assert service.stored_count() == first + second

    def test_embedding_batches_respect_batch_size(self, keyword_embedder) -> None:
        service = RagService(
            InMemoryVectorIndex(),
            keyword_embedder,
            Chunker(chunk_size=10, chunk_overlap=0),
            embedding_batch_size=2,
        )
        stored = service.ingest("abcdefghij" * 5, "letters.txt")
        assert stored == 5
        assert [len(batch) for batch in keyword_embedder.calls] == [2, 2, 1]

    def test_embedding_failure_stores_nothing(self) -> None:
        service = RagService(
            InMemoryVectorIndex(),
            FlakyEmbeddings(ok_calls=1),
            Chunker(chunk_size=10, chunk_overlap=0),
            embedding_batch_size=1,
        )
        with pytest.raises(EmbeddingError):
            service.ingest("abcdefghij" * 3, "partial.txt")
        assert service.stored_count() == 0

    def test_swapped_embedder_is_a_configuration_error(self) -> None:
        index = InMemoryVectorIndex()
        RagService(index, FixedEmbeddings(384)).ingest("first document", "one.md")
        with pytest.raises(ConfigurationError):
            RagService(index, FixedEmbeddings(128)).ingest("second document", "two.md")
        assert index.count() == 1

    def test_ingest_documents_uses_source_as_name(self, service: RagService) -> None:
        docs = [
            Document(page_content="A cat.", metadata={"source": "/data/cat.md"}),
            Document(page_content="A dog.", metadata={}),
        ]
        assert service.ingest_documents(docs) == 2
        results = service.retrieve_with_citations("cat", max_results=1)
        assert results[0].citation.source == "/data/cat.md"
        assert service.retrieve_with_citations("dog", max_results=1)[0].citation.source == "document-1"


# ── Retrieval ───────────────────────────────────────────────────────────


class TestRetrieve:
    def test_returns_ranked_chunk_texts(self, service: RagService) -> None:
        service.ingest("A cat naps.", "cat.md")
        service.ingest("A dog barks.", "dog.md")
        service.ingest("A fish swims.", "fish.md")
        assert service.retrieve("dog", max_results=1) == ["A dog barks."]

    def test_empty_index_returns_empty(self, service: RagService) -> None:
        assert service.retrieve("cat", max_results=5) == []

    @pytest.mark.parametrize("query", ["", "   ", None])
    def test_empty_query_is_invalid(self, service: RagService, query: str | None) -> None:
        with pytest.raises(InvalidInputError):
            service.retrieve(query, max_results=5)

    def test_min_score_filters(self, service: RagService) -> None:
        service.ingest("A cat naps.", "cat.md")
        service.ingest("A dog barks.", "dog.md")
        assert service.retrieve("cat", max_results=5, min_score=0.5) == ["A cat naps."]

    def test_default_min_score_applies(self, keyword_embedder) -> None:
        service = RagService(InMemoryVectorIndex(), keyword_embedder, default_min_score=0.5)
        service.ingest("A cat naps.", "cat.md")
        service.ingest("A dog barks.", "dog.md")
        assert service.retrieve("cat", max_results=5) == ["A cat naps."]

    def test_citations_carry_positions(self, service: RagService) -> None:
        service.ingest("A cat naps.", "cat.md")
        result = service.retrieve_with_citations("cat", max_results=1)[0]
        assert result.citation.chunk_index == 0
        assert result.citation.total_chunks == 1


# ── Composition ─────────────────────────────────────────────────────────


def test_build_service_with_fake_embeddings() -> None:
    settings = Settings(embedding_backend="fake", embedding_dimension=32, chunk_size=50, chunk_overlap=5)
    service = build_service(settings)
    assert service.chunker.chunk_size == 50
    assert service.chunker.chunk_overlap == 5

    stored = service.ingest("Retrieval augmented generation. " * 10, "rag.md")
    assert stored == service.stored_count()
    assert service.index.dimension == 32

    # The fake backend is deterministic, so a chunk's own text is its best match.
    first_chunk = service.chunker.split_text("Retrieval augmented generation. " * 10)[0]
    assert service.retrieve(first_chunk, max_results=1) == [first_chunk]
