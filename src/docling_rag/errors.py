"""Error taxonomy shared by ingestion, retrieval and serving.

Every failure path in the core raises one of these so callers can branch
on the kind of failure instead of parsing log output.
"""

from __future__ import annotations

from typing import Any


class RagError(Exception):
    """Base exception for all docling-rag errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvalidInputError(RagError, ValueError):
    """Raised for empty or absent caller input (query text, document name, …).

    Not fatal to the service; the caller should fix the request.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ConfigurationError(RagError):
    """Raised when the index or chunker is misconfigured.

    The typical cause is an embedding dimension mismatch, meaning the
    embedder was swapped mid-run. Must not be retried or swallowed.
    """


class EmbeddingError(RagError):
    """Raised when the external embedding capability fails."""
