"""Domain models for chunks, stored vectors, and retrieval results."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class Chunk(BaseModel):
    """A contiguous, possibly overlapping span of a source document.

    Attributes
    ----------
    text:
        Trimmed chunk content.
    source_document:
        Name of the document the chunk came from. Not guaranteed unique.
    chunk_index:
        Zero-based position of the chunk in reading order.
    total_chunks:
        Number of chunks the source document produced.
    """

    model_config = ConfigDict(frozen=True)

    text: str
    source_document: str = ""
    chunk_index: int = Field(default=0, ge=0)
    total_chunks: int = Field(default=1, ge=1)

    def metadata(self) -> dict[str, Any]:
        """Return the chunk position as a flat metadata dict."""
        return {
            "source": self.source_document,
            "chunk_index": self.chunk_index,
            "total_chunks": self.total_chunks,
        }


class VectorRecord(BaseModel):
    """The unit stored in the index: one embedding plus the chunk it encodes."""

    model_config = ConfigDict(frozen=True)

    vector: tuple[float, ...]
    chunk: Chunk


class SearchHit(BaseModel):
    """A stored chunk together with its similarity to the query."""

    model_config = ConfigDict(frozen=True)

    chunk: Chunk
    score: float
    position: int = Field(description="Insertion order of the record in the index")


class Citation(BaseModel):
    """Provenance record linking a retrieved chunk back to its source document.

    Attributes
    ----------
    citation_id:
        Unique identifier for this citation instance.
    source:
        Document name the chunk was ingested under.
    chunk_index:
        Ordinal position of the chunk within the source document.
    total_chunks:
        Number of chunks the source document was split into.
    score:
        Cosine similarity between the query and the chunk.
    retrieved_at:
        UTC timestamp of when the retrieval happened.
    """

    citation_id: str = Field(default_factory=lambda: uuid4().hex[:12])
    source: str = "unknown"
    chunk_index: int | None = None
    total_chunks: int | None = None
    score: float | None = None
    retrieved_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_hit(cls, hit: SearchHit) -> Citation:
        return cls(
            source=hit.chunk.source_document or "unknown",
            chunk_index=hit.chunk.chunk_index,
            total_chunks=hit.chunk.total_chunks,
            score=hit.score,
        )

    def short_ref(self) -> str:
        """Return a compact ``[source§chunk]`` reference string."""
        chunk = self.chunk_index if self.chunk_index is not None else "?"
        return f"[{self.source}§{chunk}]"


class RetrievalResult(BaseModel):
    """A single retrieved passage together with its citation."""

    content: str
    citation: Citation

    def __str__(self) -> str:  # noqa: D105
        return f"{self.citation.short_ref()} {self.content[:120]}…"
