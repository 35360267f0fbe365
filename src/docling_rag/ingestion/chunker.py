"""Sentence-aware text chunking.

Text is walked left to right in windows of at most ``chunk_size``
characters. A window that does not reach the end of the text is cut just
after the last ``.`` or newline it contains, provided that boundary lies in
the second half of the window; otherwise the hard limit is used. The next
window starts ``chunk_overlap`` characters before the previous one ended.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from docling_rag.errors import ConfigurationError
from docling_rag.retrieval.models import Chunk

if TYPE_CHECKING:
    from langchain_core.documents import Document

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 500
DEFAULT_CHUNK_OVERLAP = 50

_BOUNDARIES = (".", "\n")


class Chunker:
    """Split raw text into overlapping :class:`Chunk` objects.

    Parameters
    ----------
    chunk_size:
        Maximum number of characters per chunk.
    chunk_overlap:
        Number of source characters shared by consecutive chunks. Values
        greater than or equal to ``chunk_size`` are tolerated: every window
        still starts at least one character after the previous one.
    """

    def __init__(
        self,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        chunk_overlap: int = DEFAULT_CHUNK_OVERLAP,
    ) -> None:
        if chunk_size <= 0:
            raise ConfigurationError("chunk_size must be positive", {"chunk_size": chunk_size})
        if chunk_overlap < 0:
            raise ConfigurationError("chunk_overlap must not be negative", {"chunk_overlap": chunk_overlap})
        if chunk_overlap >= chunk_size:
            logger.warning(
                "chunk_overlap (%d) >= chunk_size (%d); windows will advance one character at a time",
                chunk_overlap,
                chunk_size,
            )
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap

    def split_text(self, text: str | None) -> list[str]:
        """Return the trimmed text of every window, in reading order.

        ``None`` and ``""`` yield an empty list. Windows that are empty
        after trimming are dropped.
        """
        if not text:
            return []

        pieces: list[str] = []
        length = len(text)
        start = 0
        while start < length:
            end = min(start + self.chunk_size, length)

            if end < length:
                break_point = max(text.rfind(sep, start, end) for sep in _BOUNDARIES)
                if break_point > start + self.chunk_size // 2:
                    end = break_point + 1

            piece = text[start:end].strip()
            if piece:
                pieces.append(piece)

            if end >= length:
                break
            start = max(end - self.chunk_overlap, start + 1)

        return pieces

    def split(self, text: str | None, source_document: str = "") -> list[Chunk]:
        """Split *text* into chunks tagged with their position in *source_document*."""
        pieces = self.split_text(text)
        total = len(pieces)
        return [
            Chunk(text=piece, source_document=source_document, chunk_index=i, total_chunks=total)
            for i, piece in enumerate(pieces)
        ]


def chunk_documents(
    documents: list[Document],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    chunk_overlap: int = DEFAULT_CHUNK_OVERLAP,
) -> list[Document]:
    """Split LangChain *documents* into smaller documents for embedding.

    Parameters
    ----------
    documents:
        Source documents produced by a loader.
    chunk_size:
        Maximum number of characters per chunk.
    chunk_overlap:
        Number of overlapping characters between consecutive chunks.

    Returns
    -------
    list[Document]
        One document per chunk. Each keeps its parent's metadata and gains
        ``chunk_index`` and ``total_chunks``.
    """
    from langchain_core.documents import Document

    chunker = Chunker(chunk_size=chunk_size, chunk_overlap=chunk_overlap)
    out: list[Document] = []
    for doc in documents:
        source = str(doc.metadata.get("source", ""))
        for chunk in chunker.split(doc.page_content, source_document=source):
            out.append(Document(page_content=chunk.text, metadata={**doc.metadata, **chunk.metadata()}))
    return out
